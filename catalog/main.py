"""
FastAPI application entry point.
Challenge: Build the engine and stores once from Settings and share them across requests.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from catalog.api.v1.router import api_router
from catalog.config import Settings, get_settings
from catalog.db.repositories import CategoryRepository, ItemRepository
from catalog.db.session import build_engine, build_session_factory
from catalog.services.catalog_service import CatalogService
from catalog.storage.image_store import LocalImageStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: configure logging. Shutdown: release pooled DB connections."""
    logging.basicConfig(level=app.state.settings.log_level.upper())
    logger.info("%s starting, images in %s", app.title, app.state.settings.images_dir)
    yield
    await app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Catalog of items with categories and content-addressed images.",
        version="1.0.0",
        lifespan=lifespan,
    )

    engine = build_engine(settings)
    session_factory = build_session_factory(engine)
    image_store = LocalImageStore(settings.images_dir, settings.image_extension)

    app.state.settings = settings
    app.state.engine = engine
    app.state.image_store = image_store
    app.state.catalog_service = CatalogService(
        categories=CategoryRepository(session_factory),
        images=image_store,
        items=ItemRepository(session_factory),
        timeout=settings.operation_timeout_seconds,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus metrics at /metrics
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        return {"message": "Hello, world!"}

    return app


app = create_app()
