"""
Item endpoints - add (multipart form), list, and lookup.
Design: Thin controller; the catalog service holds the coordination logic.
"""

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status

from catalog.core.dependencies import CatalogServiceDep
from catalog.core.exceptions import InvalidInput, ItemNotFound
from catalog.schemas.item import AddItemResponse, ItemListResponse, ItemView

router = APIRouter()


@router.get("", response_model=ItemListResponse)
async def list_items(service: CatalogServiceDep):
    """All items with their category names."""
    return ItemListResponse(items=await service.list_items())


@router.get("/{item_id}", response_model=ItemView)
async def get_item(service: CatalogServiceDep, item_id: int):
    try:
        return await service.get_item(item_id)
    except ItemNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")


@router.post("", response_model=AddItemResponse, status_code=status.HTTP_201_CREATED)
async def add_item(
    service: CatalogServiceDep,
    name: str = Form(""),
    category: str = Form(""),
    image: UploadFile | None = File(None),
):
    """Create an item. Missing or empty fields are a 400, like any other validation error."""
    data = await image.read() if image is not None else b""
    try:
        item = await service.add_item(name, category, data)
    except InvalidInput as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except TimeoutError:
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail="Timed out adding item")
    return AddItemResponse(message=f"item received: {item.name}", item=item)
