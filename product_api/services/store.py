"""
Product Catalog API — Abstract Product Store Interface
=======================================================

What:  Contract every product store adapter implements.
How:   Concrete stores inherit from ProductStore and implement each
       operation with exactly one call against their backing database.
Who:   Called by ProductService; built once per app by create_app().

Contract:
    - Payloads arriving here are already validated; stores never see a
      field value that breaks the product rules
    - Lookups by id return None when nothing matches (no exception)
    - Each operation is atomic for a single product; a failure leaves the
      stored document untouched
    - Backend failures propagate as the backend's own exceptions;
      ProductService wraps them in DatabaseError

Implementations:
    - SQLProductStore: async SQLAlchemy (PostgreSQL in production,
      in-memory SQLite in tests)
"""

import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from product_api.schemas.product import ProductResponse


class ProductStore(ABC):
    """Adapter between ProductService and a product collection."""

    @abstractmethod
    async def connect(self) -> None:
        """
        Prepare the backing collection (create the table if missing).

        Called once from the application lifespan. Raises if the store is
        unreachable; the process treats that as fatal.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release every connection held by the store."""
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """Return True if the store answers a trivial query. Never raises."""
        ...

    @abstractmethod
    async def insert_one(self, fields: Dict[str, Any]) -> ProductResponse:
        """Persist a new product; the store assigns id and timestamps."""
        ...

    @abstractmethod
    async def find_many(self) -> List[ProductResponse]:
        """All products in the store's natural iteration order."""
        ...

    @abstractmethod
    async def find_by_id(self, product_id: uuid.UUID) -> Optional[ProductResponse]:
        ...

    @abstractmethod
    async def find_by_id_and_update(
        self, product_id: uuid.UUID, changes: Dict[str, Any]
    ) -> Optional[ProductResponse]:
        """
        Replace the given fields and refresh `updated_at`.

        Returns the product as it is after the update, or None when the id
        does not exist.
        """
        ...

    @abstractmethod
    async def find_by_id_and_delete(self, product_id: uuid.UUID) -> Optional[ProductResponse]:
        """Remove the product and return its content from before removal."""
        ...
