"""
In-memory CategoryStore and ItemStore.
Used by unit tests of the catalog service; no database required.
"""

from __future__ import annotations

import itertools

from catalog.core.exceptions import CategoryNotFound, InvalidInput, ItemNotFound, StoreFailure
from catalog.db.models import Item
from catalog.schemas.item import CategoryView, ItemView


class InMemoryCategoryStore:
    def __init__(self):
        self._ids_by_name: dict[str, int] = {}
        self._names_by_id: dict[int, str] = {}
        self._next_id = itertools.count(1)

    async def get_or_create(self, name: str) -> int:
        if not name:
            raise InvalidInput("category name must not be empty", operation="categories.get_or_create")
        # No await between lookup and insert, so the event loop cannot interleave callers.
        if name not in self._ids_by_name:
            category_id = next(self._next_id)
            self._ids_by_name[name] = category_id
            self._names_by_id[category_id] = name
        return self._ids_by_name[name]

    async def get_by_id(self, category_id: int) -> CategoryView:
        if category_id not in self._names_by_id:
            raise CategoryNotFound(category_id)
        return CategoryView(id=category_id, name=self._names_by_id[category_id])


class InMemoryItemStore:
    """Keeps rows in insertion order. Mirrors the FK check of the relational store."""

    def __init__(self, categories: InMemoryCategoryStore):
        self.categories = categories
        self._rows: dict[int, Item] = {}
        self._next_id = itertools.count(1)

    async def insert(self, item: Item) -> Item:
        try:
            await self.categories.get_by_id(item.category_id)
        except CategoryNotFound as exc:
            raise StoreFailure("items.insert", exc) from exc
        item.id = next(self._next_id)
        self._rows[item.id] = item
        return item

    async def list(self) -> list[ItemView]:
        return [await self._view(item) for item in self._rows.values()]

    async def select(self, item_id: int) -> ItemView:
        if item_id not in self._rows:
            raise ItemNotFound(item_id)
        return await self._view(self._rows[item_id])

    async def search_by_keyword(self, keyword: str) -> list[ItemView]:
        # Case-insensitive like SQLite's LIKE
        needle = keyword.casefold()
        return [await self._view(item) for item in self._rows.values() if needle in item.name.casefold()]

    async def _view(self, item: Item) -> ItemView:
        category = await self.categories.get_by_id(item.category_id)
        return ItemView(
            id=item.id,
            name=item.name,
            category=category.name,
            category_id=item.category_id,
            image_name=item.image_name,
        )
