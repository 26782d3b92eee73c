"""
Category repository - get-or-create by name under concurrent writers.
Challenge: Two first-time callers for the same name can both miss the lookup
and both insert; the UNIQUE constraint lets one win and the loser must converge
on the winner's id instead of failing.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from catalog.core.exceptions import CategoryNotFound, InvalidInput, StoreFailure
from catalog.db.models import Category
from catalog.db.repositories.base_repository import BaseRepository
from catalog.schemas.item import CategoryView

logger = logging.getLogger(__name__)


class CategoryRepository(BaseRepository[Category]):
    """Relational CategoryStore."""

    def __init__(self, session_factory):
        super().__init__(session_factory, Category)

    async def get_or_create(self, name: str) -> int:
        if not name:
            raise InvalidInput("category name must not be empty", operation="categories.get_or_create")

        category_id = await self._find_id_by_name(name)
        if category_id is not None:
            return category_id

        try:
            async with self.session_factory() as session, session.begin():
                category = Category(name=name)
                session.add(category)
                await session.flush()
                category_id = category.id
        except IntegrityError as exc:
            # Lost the insert race: the row exists now, read it back.
            category_id = await self._find_id_by_name(name)
            if category_id is None:
                logger.warning("categories.get_or_create failed for %r: %s", name, exc)
                raise StoreFailure("categories.get_or_create", exc) from exc
            logger.debug("category %r created concurrently, using id=%s", name, category_id)
            return category_id
        except SQLAlchemyError as exc:
            logger.warning("categories.get_or_create failed for %r: %s", name, exc)
            raise StoreFailure("categories.get_or_create", exc) from exc

        logger.info("created category %r id=%s", name, category_id)
        return category_id

    async def get_by_id(self, category_id: int) -> CategoryView:
        category = await self.find_by_id(category_id)
        if category is None:
            raise CategoryNotFound(category_id)
        return CategoryView.model_validate(category)

    async def _find_id_by_name(self, name: str) -> int | None:
        async with self._transaction("categories.get_or_create") as session:
            result = await session.execute(select(Category.id).where(Category.name == name))
            return result.scalar_one_or_none()
