# Repository pattern: abstract data access (SOLID - Dependency Inversion)

from catalog.db.repositories.base_repository import CategoryStore, ItemStore
from catalog.db.repositories.category_repository import CategoryRepository
from catalog.db.repositories.item_repository import ItemRepository
from catalog.db.repositories.memory import InMemoryCategoryStore, InMemoryItemStore

__all__ = [
    "CategoryStore",
    "ItemStore",
    "CategoryRepository",
    "ItemRepository",
    "InMemoryCategoryStore",
    "InMemoryItemStore",
]
