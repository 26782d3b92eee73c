"""
Pytest fixtures - per-test SQLite database, image directory, stores, HTTP client.
Challenge: Isolated tests; every test gets its own database file and image root.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine

from catalog.config import Settings
from catalog.db.repositories import CategoryRepository, ItemRepository
from catalog.db.session import build_engine, build_session_factory, init_models
from catalog.main import create_app
from catalog.services.catalog_service import CatalogService
from catalog.storage.image_store import LocalImageStore


@pytest.fixture
def settings(tmp_path) -> Settings:
    # File database: in-memory SQLite gives each pooled connection its own empty DB
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite3'}",
        images_dir=tmp_path / "images",
        operation_timeout_seconds=5.0,
    )


@pytest_asyncio.fixture
async def engine(settings: Settings) -> AsyncGenerator[AsyncEngine, None]:
    engine = build_engine(settings)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine):
    return build_session_factory(engine)


@pytest.fixture
def category_repo(session_factory) -> CategoryRepository:
    return CategoryRepository(session_factory)


@pytest.fixture
def item_repo(session_factory) -> ItemRepository:
    return ItemRepository(session_factory)


@pytest.fixture
def image_store(settings: Settings) -> LocalImageStore:
    return LocalImageStore(settings.images_dir, settings.image_extension)


@pytest.fixture
def catalog_service(category_repo, image_store, item_repo) -> CatalogService:
    return CatalogService(category_repo, image_store, item_repo, timeout=5.0)


@pytest_asyncio.fixture
async def client(settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    app = create_app(settings)
    await init_models(app.state.engine)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    await app.state.engine.dispose()
