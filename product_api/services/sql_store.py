"""
Product Catalog API — SQLAlchemy Product Store
===============================================

What:  ProductStore backed by async SQLAlchemy.
How:   Owns an AsyncEngine and a session factory. Each operation opens its
       own session, commits on success and rolls back on any error, so a
       failed write never leaves a partially updated row behind.
Who:   Built by create_app() from settings, or directly by tests with an
       in-memory SQLite engine.

Query plans:
    find_by_id / update / delete: primary key lookup on products.id
    find_many: full scan, no ORDER BY (natural order)
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from product_api.config import Settings
from product_api.database import Base, engine_from_settings
from product_api.models.product import Product, utcnow
from product_api.schemas.product import ProductResponse
from product_api.services.store import ProductStore

logger = logging.getLogger(__name__)


class SQLProductStore(ProductStore):
    """
    Product store on a relational database.

    Attributes:
        engine: The AsyncEngine (connection pool) this store owns
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        # expire_on_commit=False: rows stay readable after commit
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "SQLProductStore":
        return cls(engine_from_settings(config))

    # ── Session Handling ──────────────────────────────────────────────────
    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        One transaction per store operation.

        Commits when the block exits normally, rolls back and re-raises on
        any exception, always closes the session.
        """
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    # ── Lifecycle ─────────────────────────────────────────────────────────
    async def connect(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Product store ready (%s)", self.engine.url.render_as_string(hide_password=True))

    async def close(self) -> None:
        await self.engine.dispose()

    async def ping(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Product store unreachable: %s", str(e))
            return False
        return True

    # ── CRUD ──────────────────────────────────────────────────────────────
    async def insert_one(self, fields: Dict[str, Any]) -> ProductResponse:
        now = utcnow()
        async with self._session() as session:
            product = Product(id=uuid.uuid4(), created_at=now, updated_at=now, **fields)
            session.add(product)
            await session.flush()
            logger.info("Product created: %s", product.id)
            return ProductResponse.model_validate(product)

    async def find_many(self) -> List[ProductResponse]:
        async with self._session() as session:
            result = await session.execute(select(Product))
            return [ProductResponse.model_validate(p) for p in result.scalars().all()]

    async def find_by_id(self, product_id: uuid.UUID) -> Optional[ProductResponse]:
        async with self._session() as session:
            product = await session.get(Product, product_id)
            if product is None:
                return None
            return ProductResponse.model_validate(product)

    async def find_by_id_and_update(
        self, product_id: uuid.UUID, changes: Dict[str, Any]
    ) -> Optional[ProductResponse]:
        async with self._session() as session:
            product = await session.get(Product, product_id)
            if product is None:
                return None
            for field, value in changes.items():
                setattr(product, field, value)
            product.updated_at = utcnow()
            await session.flush()
            logger.info("Product updated: %s (%s)", product_id, ", ".join(sorted(changes)) or "no fields")
            return ProductResponse.model_validate(product)

    async def find_by_id_and_delete(self, product_id: uuid.UUID) -> Optional[ProductResponse]:
        async with self._session() as session:
            product = await session.get(Product, product_id)
            if product is None:
                return None
            snapshot = ProductResponse.model_validate(product)
            await session.delete(product)
            await session.flush()
            logger.info("Product deleted: %s", product_id)
            return snapshot
