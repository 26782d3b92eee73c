"""
Item model - catalog entry pointing at a category and a stored image.
Reads join categories explicitly (see item_repository), so no ORM relationship is mapped.
"""

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from catalog.db.base import Base


class Item(Base):
    """Item entity. Immutable once inserted."""

    __tablename__ = "items"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"), nullable=False, index=True)
    image_name: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Item(id={self.id}, name={self.name})>"
