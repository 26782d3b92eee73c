"""Item and category read models - repository return types and REST API contract."""

from pydantic import BaseModel, ConfigDict


class CategoryView(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    name: str


class ItemView(BaseModel):
    """Item with its category name denormalized from the categories table."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    name: str
    category: str
    category_id: int
    image_name: str | None = None


class ItemListResponse(BaseModel):
    items: list[ItemView]


class AddItemResponse(BaseModel):
    message: str
    item: ItemView
