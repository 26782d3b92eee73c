"""
Catalog service tests - add-item ordering and partial failures.
Unit tests run on the in-memory stores; the end-to-end ones use SQLite and a real image directory.
"""

import asyncio
import logging
import os

import pytest

from catalog.core.exceptions import CategoryNotFound, ImageWriteFailed, InvalidInput, StoreFailure
from catalog.db.repositories import InMemoryCategoryStore, InMemoryItemStore, ItemRepository
from catalog.services.catalog_service import CatalogService
from catalog.storage.image_store import InMemoryImageStore, LocalImageStore


class FailingItemStore(InMemoryItemStore):
    async def insert(self, item):
        raise StoreFailure("items.insert", RuntimeError("disk I/O error"))


class FailingImageStore(InMemoryImageStore):
    async def put(self, data):
        raise ImageWriteFailed("images.put", OSError(28, "No space left on device"))


class SlowImageStore(InMemoryImageStore):
    async def put(self, data):
        await asyncio.sleep(1)
        return await super().put(data)


@pytest.fixture
def categories():
    return InMemoryCategoryStore()


@pytest.fixture
def images():
    return InMemoryImageStore()


@pytest.fixture
def items(categories):
    return InMemoryItemStore(categories)


@pytest.mark.asyncio
async def test_add_item(categories, images, items):
    service = CatalogService(categories, images, items)
    item = await service.add_item("jacket", "fashion", b"jpeg bytes")

    assert item.id > 0
    assert item.category == "fashion"
    assert await images.read(item.image_name) == b"jpeg bytes"
    assert await service.get_item(item.id) == item
    assert (await service.get_category(item.category_id)).name == "fashion"


@pytest.mark.asyncio
async def test_items_share_category(categories, images, items):
    service = CatalogService(categories, images, items)
    first = await service.add_item("used iPhone 16e", "phone", b"a")
    second = await service.add_item("iPhone case", "phone", b"b")
    assert first.category_id == second.category_id


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "name, category, image",
    [("", "phone", b"data"), ("   ", "phone", b"data"), ("jacket", "", b"data"), ("jacket", "fashion", b"")],
)
async def test_missing_fields_rejected_before_any_write(categories, images, items, name, category, image):
    service = CatalogService(categories, images, items)
    with pytest.raises(InvalidInput):
        await service.add_item(name, category, image)
    assert images.images == {}
    assert await items.list() == []
    with pytest.raises(CategoryNotFound):
        await categories.get_by_id(1)


@pytest.mark.asyncio
async def test_insert_failure_orphans_image(categories, images):
    service = CatalogService(categories, images, FailingItemStore(categories))
    with pytest.raises(StoreFailure):
        await service.add_item("jacket", "fashion", b"orphan")
    assert list(images.images.values()) == [b"orphan"]


@pytest.mark.asyncio
async def test_image_failure_creates_no_item(categories, items):
    service = CatalogService(categories, FailingImageStore(), items)
    with pytest.raises(ImageWriteFailed):
        await service.add_item("jacket", "fashion", b"data")
    assert await items.list() == []


@pytest.mark.asyncio
async def test_add_item_times_out(categories, items):
    images = SlowImageStore()
    service = CatalogService(categories, images, items, timeout=5.0)
    with pytest.raises(TimeoutError):
        await service.add_item("jacket", "fashion", b"data", timeout=0.05)
    assert images.images == {}
    assert await items.list() == []


@pytest.mark.asyncio
async def test_add_item_end_to_end(catalog_service, image_store, item_repo):
    item = await catalog_service.add_item("used iPhone 16e", "phone", b"test image data")

    assert item.id != 0
    assert item.category == "phone"
    assert await image_store.read(item.image_name) == b"test image data"
    assert await item_repo.select(item.id) == item


@pytest.mark.asyncio
async def test_empty_name_end_to_end_leaves_no_trace(catalog_service, category_repo, image_store, item_repo):
    with pytest.raises(InvalidInput):
        await catalog_service.add_item("", "phone", b"test image data")

    assert await item_repo.list() == []
    with pytest.raises(CategoryNotFound):
        await category_repo.get_by_id(1)
    assert not image_store.root.exists() or os.listdir(image_store.root) == []


class SlowCommitItemRepository(ItemRepository):
    """Insert commits, then lingers, so a deadline would fire after the row is visible."""

    async def insert(self, item):
        item = await super().insert(item)
        await asyncio.sleep(0.2)
        return item


class SlowLocalImageStore(LocalImageStore):
    async def put(self, data):
        await asyncio.sleep(1)
        return await super().put(data)


@pytest.mark.asyncio
async def test_deadline_does_not_interrupt_insert(category_repo, image_store, session_factory, item_repo, caplog):
    service = CatalogService(category_repo, image_store, SlowCommitItemRepository(session_factory))

    item = await service.add_item("jacket", "fashion", b"data", timeout=0.05)

    assert [i.id for i in await item_repo.list()] == [item.id]
    assert "orphaned" not in caplog.text


@pytest.mark.asyncio
async def test_timeout_before_insert_leaves_no_row(category_repo, settings, item_repo):
    service = CatalogService(category_repo, SlowLocalImageStore(settings.images_dir), item_repo)

    with pytest.raises(TimeoutError):
        await service.add_item("jacket", "fashion", b"data", timeout=0.05)
    assert await item_repo.list() == []


@pytest.mark.asyncio
async def test_many_short_deadlines_match_visible_rows(catalog_service, item_repo):
    succeeded = 0
    for i in range(100):
        try:
            await catalog_service.add_item(f"item {i}", "misc", f"image {i}".encode(), timeout=0.0005 * (i % 12 + 1))
        except TimeoutError:
            continue
        succeeded += 1
    assert len(await item_repo.list()) == succeeded


@pytest.mark.asyncio
async def test_cancel_during_insert_reports_committed_row(category_repo, image_store, session_factory, item_repo, caplog):
    service = CatalogService(category_repo, image_store, SlowCommitItemRepository(session_factory))
    caplog.set_level(logging.INFO, logger="catalog.services.catalog_service")
    task = asyncio.create_task(service.add_item("jacket", "fashion", b"data"))
    while not await item_repo.list():
        await asyncio.sleep(0.01)

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert len(await item_repo.list()) == 1
    assert "orphaned" not in caplog.text
    assert "was committed" in caplog.text
