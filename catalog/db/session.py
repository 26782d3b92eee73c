"""
Async database engine and session factory.
Challenge: Connection pooling, proper cleanup, per-operation transactions.
Design: The application factory builds one engine from Settings and hands the
session factory to each repository (no module-level engine).
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from catalog.config import Settings
from catalog.db import models  # noqa: F401 - ensure models are registered
from catalog.db.base import Base


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ships with FK enforcement off; turn it on for every pooled connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine. Pool sizing only applies to server databases."""
    options: dict = {"echo": settings.debug, "pool_pre_ping": True}
    if not settings.database_url.startswith("sqlite"):
        options.update(pool_size=10, max_overflow=20)
    engine = create_async_engine(settings.database_url, **options)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory: repositories open one short-lived session per operation."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create tables from ORM metadata. Migrations own the schema in production."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
