"""
Catalog error taxonomy.

NotFound errors are expected outcomes and are raised without logging.
StoreFailure and ImageWriteFailed wrap the underlying cause (chained with
``raise ... from``) together with the operation that failed.
"""


class CatalogError(Exception):
    """Base class for every error raised by the catalog layer."""

    def __init__(self, message: str, *, operation: str | None = None):
        super().__init__(message)
        self.operation = operation


class InvalidInput(CatalogError):
    """A required field is missing or a value is malformed."""


class NotFoundError(CatalogError):
    """Requested entity does not exist."""


class ItemNotFound(NotFoundError):
    def __init__(self, item_id: int):
        super().__init__(f"item not found: {item_id}", operation="items.select")
        self.item_id = item_id


class CategoryNotFound(NotFoundError):
    def __init__(self, category_id: int):
        super().__init__(f"category not found: {category_id}", operation="categories.get_by_id")
        self.category_id = category_id


class ImageNotFound(NotFoundError):
    def __init__(self, image_name: str):
        super().__init__(f"image not found: {image_name}", operation="images.path")
        self.image_name = image_name


class StoreFailure(CatalogError):
    """Relational store error: connectivity, bad query, unexpected constraint violation."""

    def __init__(self, operation: str, cause: BaseException):
        super().__init__(f"{operation} failed: {cause}", operation=operation)
        self.cause = cause


class ImageWriteFailed(CatalogError):
    """The storage medium rejected an image write."""

    def __init__(self, operation: str, cause: BaseException):
        super().__init__(f"{operation} failed: {cause}", operation=operation)
        self.cause = cause
