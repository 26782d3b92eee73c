"""
Base repository - store contracts and shared session handling (SOLID: Interface Segregation, Dependency Inversion).
Challenge: Consistent data access, testability via in-memory variants, error translation in one place.
Design: Callers depend on the ItemStore/CategoryStore protocols; each relational
operation runs in its own session and transaction.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Generic, Protocol, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog.core.exceptions import StoreFailure
from catalog.db.base import Base
from catalog.db.models import Item
from catalog.schemas.item import CategoryView, ItemView

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class CategoryStore(Protocol):
    async def get_or_create(self, name: str) -> int:
        """Identity of the category called ``name``, creating it on first use."""
        ...

    async def get_by_id(self, category_id: int) -> CategoryView:
        """Raises CategoryNotFound when absent."""
        ...


class ItemStore(Protocol):
    async def insert(self, item: Item) -> Item:
        """Persist ``item`` and set its store-assigned id."""
        ...

    async def list(self) -> list[ItemView]: ...

    async def select(self, item_id: int) -> ItemView:
        """Raises ItemNotFound when absent."""
        ...

    async def search_by_keyword(self, keyword: str) -> list[ItemView]: ...


class BaseRepository(Generic[ModelType]):
    """Generic async repository over a session factory. Subclasses define model-specific methods."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], model: type[ModelType]):
        self.session_factory = session_factory
        self.model = model

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        """One session and one transaction per operation. Engine errors become StoreFailure."""
        try:
            async with self.session_factory() as session, session.begin():
                yield session
        except SQLAlchemyError as exc:
            logger.warning("%s failed: %s", operation, exc)
            raise StoreFailure(operation, exc) from exc

    async def find_by_id(self, id: int) -> ModelType | None:
        """Fetch single entity by primary key, or None."""
        async with self._transaction(f"{self.model.__tablename__}.find_by_id") as session:
            return await session.get(self.model, id)
