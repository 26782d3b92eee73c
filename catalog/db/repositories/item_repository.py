"""
Item repository - item data access with the category name joined in.
Challenge: Avoid N+1 lookups; every read returns a flat view in one query.
"""

from __future__ import annotations

from sqlalchemy import Select, select

from catalog.core.exceptions import ItemNotFound
from catalog.db.models import Category, Item
from catalog.db.repositories.base_repository import BaseRepository
from catalog.schemas.item import ItemView


def _view_query() -> Select:
    """items JOIN categories, ordered by id (ids are strictly increasing, so insertion order)."""
    return (
        select(
            Item.id,
            Item.name,
            Category.name.label("category"),
            Item.category_id,
            Item.image_name,
        )
        .join(Category, Item.category_id == Category.id)
        .order_by(Item.id)
    )


class ItemRepository(BaseRepository[Item]):
    """Relational ItemStore. category_id is not checked here; the FK constraint is the backstop."""

    def __init__(self, session_factory):
        super().__init__(session_factory, Item)

    async def insert(self, item: Item) -> Item:
        async with self._transaction("items.insert") as session:
            session.add(item)
            await session.flush()  # assigns item.id
        return item

    async def list(self) -> list[ItemView]:
        return await self._fetch_views("items.list", _view_query())

    async def select(self, item_id: int) -> ItemView:
        views = await self._fetch_views("items.select", _view_query().where(Item.id == item_id))
        if not views:
            raise ItemNotFound(item_id)
        return views[0]

    async def search_by_keyword(self, keyword: str) -> list[ItemView]:
        """Substring match on name. LIKE wildcards in the keyword are matched literally."""
        query = _view_query().where(Item.name.contains(keyword, autoescape=True))
        return await self._fetch_views("items.search_by_keyword", query)

    async def _fetch_views(self, operation: str, query: Select) -> list[ItemView]:
        async with self._transaction(operation) as session:
            result = await session.execute(query)
            return [ItemView(**row._mapping) for row in result]
