from catalog.db.models.category import Category
from catalog.db.models.item import Item

__all__ = ["Category", "Item"]
