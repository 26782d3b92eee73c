"""
FastAPI dependencies - injection for the catalog service (SOLID: Dependency Inversion).
Challenge: Endpoints never build stores themselves; tests swap the app state.
"""

from typing import Annotated

from fastapi import Depends, Request

from catalog.services.catalog_service import CatalogService
from catalog.storage.image_store import LocalImageStore


def get_catalog_service(request: Request) -> CatalogService:
    """Catalog service wired by create_app()."""
    return request.app.state.catalog_service


def get_image_store(request: Request) -> LocalImageStore:
    return request.app.state.image_store


CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
ImageStoreDep = Annotated[LocalImageStore, Depends(get_image_store)]
