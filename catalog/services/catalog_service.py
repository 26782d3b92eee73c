"""
Catalog service - coordinates the category, image and item stores (SOLID: Single Responsibility).
Challenge: Image bytes and the item row live in different stores with no shared transaction.
Design: Write the image first, then insert the row, so every visible item has a
resolvable image. A failed insert leaves an orphaned image, which is accepted.
"""

import asyncio
import logging

from catalog.core.exceptions import InvalidInput
from catalog.db.models import Item
from catalog.db.repositories.base_repository import CategoryStore, ItemStore
from catalog.schemas.item import CategoryView, ItemView
from catalog.storage.image_store import ImageStore

logger = logging.getLogger(__name__)


class CatalogService:
    """Handles catalog use cases: add item, list, lookup, keyword search."""

    def __init__(
        self,
        categories: CategoryStore,
        images: ImageStore,
        items: ItemStore,
        timeout: float | None = None,
    ):
        self.categories = categories
        self.images = images
        self.items = items
        self.timeout = timeout

    async def add_item(
        self,
        name: str,
        category_name: str,
        image: bytes,
        *,
        timeout: float | None = None,
    ) -> ItemView:
        """Resolve category, store image, insert row.

        The deadline covers the category and image steps. TimeoutError therefore
        means no item row was written. The insert is never interrupted once it
        starts, because a cancelled commit may still land in the driver thread.
        """
        name, category_name = _validate(name, category_name, image)
        deadline = timeout if timeout is not None else self.timeout
        async with asyncio.timeout(deadline):
            category_id = await self.categories.get_or_create(category_name)
            image_name = await self.images.put(image)

        item = Item(name=name, category_id=category_id, image_name=image_name)
        try:
            await self._insert_to_completion(item)
        except Exception:
            logger.warning("item %r not inserted; image %s is orphaned", name, image_name)
            raise
        logger.info("added item id=%s name=%r category=%r", item.id, name, category_name)
        return ItemView(
            id=item.id,
            name=name,
            category=category_name,
            category_id=category_id,
            image_name=image_name,
        )

    async def _insert_to_completion(self, item: Item) -> Item:
        """Shielded insert. On cancellation wait for the real outcome, log it, then re-raise."""
        task = asyncio.ensure_future(self.items.insert(item))
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            await asyncio.wait([task])
            if task.cancelled() or task.exception() is not None:
                logger.warning("item %r not inserted; image %s is orphaned", item.name, item.image_name)
            else:
                logger.info("add item cancelled after item id=%s was committed", item.id)
            raise

    async def list_items(self) -> list[ItemView]:
        return await self.items.list()

    async def get_item(self, item_id: int) -> ItemView:
        return await self.items.select(item_id)

    async def search_items(self, keyword: str) -> list[ItemView]:
        return await self.items.search_by_keyword(keyword)

    async def get_category(self, category_id: int) -> CategoryView:
        return await self.categories.get_by_id(category_id)


def _validate(name: str, category_name: str, image: bytes) -> tuple[str, str]:
    """Required-field checks, done before any store is touched."""
    name = (name or "").strip()
    category_name = (category_name or "").strip()
    if not name:
        raise InvalidInput("name is required", operation="catalog.add_item")
    if not category_name:
        raise InvalidInput("category is required", operation="catalog.add_item")
    if not image:
        raise InvalidInput("image is required", operation="catalog.add_item")
    return name, category_name
