"""
Product Catalog API — Database Engine Construction
===================================================

What:  Async SQLAlchemy engine builder and the declarative Base.
How:   `build_engine()` turns a URL plus pool settings into an AsyncEngine.
       The engine is owned by SQLProductStore, which is built once per
       application and disposed on shutdown.
Who:   Used by SQLProductStore.from_settings() and by the test fixtures.

Connection Pooling:
    PostgreSQL (asyncpg): pool_size / max_overflow / pool_pre_ping from
    settings, connections recycled after one hour.
    SQLite (aiosqlite): no pool tuning. In-memory databases use StaticPool
    so every session sees the same database.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from product_api.config import Settings, settings as default_settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    `Base.metadata` is what SQLProductStore.connect() creates on startup.
    """
    pass


def build_engine(
    database_url: str,
    pool_size: int = 20,
    max_overflow: int = 10,
    pool_pre_ping: bool = True,
    echo: bool = False,
) -> AsyncEngine:
    """
    Create an AsyncEngine for the given URL.

    SQLite URLs skip the pool arguments (their default pools reject them).
    """
    if database_url.startswith("sqlite"):
        kwargs = {"echo": echo, "connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url:
            kwargs["poolclass"] = StaticPool
        return create_async_engine(database_url, **kwargs)

    return create_async_engine(
        database_url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=pool_pre_ping,
        pool_recycle=3600,
        echo=echo,
    )


def engine_from_settings(config: Optional[Settings] = None) -> AsyncEngine:
    """Build the engine described by the application settings."""
    config = config or default_settings
    return build_engine(
        config.database_url,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_pre_ping=config.db_pool_pre_ping,
        # SQL echo only in DEBUG
        echo=config.log_level == "DEBUG",
    )
