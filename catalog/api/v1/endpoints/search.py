"""
Search endpoint - substring match on item names.
"""

from fastapi import APIRouter, Query

from catalog.core.dependencies import CatalogServiceDep
from catalog.schemas.item import ItemListResponse

router = APIRouter()


@router.get("/items", response_model=ItemListResponse)
async def search_items_endpoint(service: CatalogServiceDep, keyword: str = Query("")):
    """Items whose name contains ``keyword``. An empty keyword matches everything."""
    items = await service.search_items(keyword)
    return ItemListResponse(items=items)
