"""
Category model - unique names referenced by items.
"""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from catalog.db.base import Base


class Category(Base):
    """Category entity. Created lazily on first reference, never updated."""

    __tablename__ = "categories"
    # AUTOINCREMENT on SQLite: identities are never reused
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name})>"
