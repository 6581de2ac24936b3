"""
Product Catalog API — Product Service (Validation and Error Mapping)
=====================================================================

What:  Business layer between the routes and the ProductStore.
How:   Validates raw JSON payloads with the Pydantic schemas, parses ids,
       calls exactly one store operation, and translates the outcome into
       response models or application exceptions.
Who:   Built once per app by create_app(); injected into route handlers.

Error mapping:
    pydantic.ValidationError      → ValidationError (400), nothing written
    unparseable id / store → None → NotFoundError (404)
    any other store exception     → DatabaseError (500), logged with context

Degraded mode:
    With `sample_fallback` enabled, listing falls back to the fixed sample
    catalog when the store fails, and the API info view also does so when
    the store is empty. Each fallback is logged at WARNING and flagged in
    the response (`source="sample"`, `degraded`).
"""

import logging
import uuid
from typing import Any, Awaitable, Callable, Dict, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from product_api.exceptions import DatabaseError, NotFoundError, ProductAPIError, ValidationError
from product_api.schemas.product import (
    ApiInfoResponse,
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
)
from product_api.services.sample_data import sample_products
from product_api.services.store import ProductStore

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)
T = TypeVar("T")


def _to_validation_error(exc: PydanticValidationError) -> ValidationError:
    """Collapse Pydantic's error list into one message naming every bad field."""
    errors: Dict[str, str] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "body"
        errors.setdefault(field, err["msg"])
    summary = "; ".join(f"{field} - {msg}" for field, msg in errors.items())
    return ValidationError(
        message=f"Invalid product: {summary}",
        field=next(iter(errors), None),
        errors=errors,
    )


class ProductService:
    """
    Product operations used by the HTTP layer.

    Stateless apart from the injected store and the fallback flag, so one
    instance serves every request.
    """

    def __init__(self, store: ProductStore, sample_fallback: bool = True):
        self.store = store
        self.sample_fallback = sample_fallback

    # ── Helpers ───────────────────────────────────────────────────────────
    @staticmethod
    def _validate(schema: Type[SchemaT], payload: Mapping[str, Any]) -> SchemaT:
        try:
            return schema.model_validate(payload)
        except PydanticValidationError as e:
            raise _to_validation_error(e) from e

    @staticmethod
    def _parse_id(product_id: str) -> uuid.UUID:
        # Malformed ids are reported exactly like unknown ones
        try:
            return uuid.UUID(str(product_id))
        except ValueError:
            raise NotFoundError(resource="Product", resource_id=str(product_id))

    async def _call(self, operation: str, func: Callable[..., Awaitable[T]], *args: Any) -> T:
        """Run one store operation, wrapping backend failures in DatabaseError."""
        try:
            return await func(*args)
        except ProductAPIError:
            raise
        except Exception as e:
            logger.error("Product store %s failed: %s", operation, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not complete the product operation. Please try again.",
                context={"operation": operation, "error_type": type(e).__name__},
            )

    # ── Operations ────────────────────────────────────────────────────────
    async def create_product(self, payload: Mapping[str, Any]) -> ProductResponse:
        """
        Validate and persist a new product.

        Raises:
            ValidationError: A field breaks the product rules (nothing written)
            DatabaseError: The insert failed
        """
        product = self._validate(ProductCreate, payload)
        return await self._call("insert", self.store.insert_one, product.model_dump())

    async def list_products(self) -> ProductListResponse:
        """
        Every stored product, or the sample catalog in degraded mode.

        Raises:
            DatabaseError: The store failed and the fallback is disabled
        """
        try:
            products = await self.store.find_many()
        except Exception as e:
            if not self.sample_fallback:
                logger.error("Product store list failed: %s", str(e), exc_info=True)
                raise DatabaseError(
                    message="Could not retrieve products. Please try again.",
                    context={"operation": "list", "error_type": type(e).__name__},
                )
            logger.warning(
                "Product store unavailable (%s); serving sample catalog in degraded mode",
                type(e).__name__,
            )
            samples = sample_products()
            return ProductListResponse(
                count=len(samples), data=samples, source="sample", degraded=True
            )

        return ProductListResponse(count=len(products), data=products)

    async def get_product(self, product_id: str) -> ProductResponse:
        """
        Raises:
            NotFoundError: No product has this id, or the id is malformed
            DatabaseError: The lookup failed
        """
        pid = self._parse_id(product_id)
        product = await self._call("find", self.store.find_by_id, pid)
        if product is None:
            raise NotFoundError(resource="Product", resource_id=str(product_id))
        return product

    async def update_product(self, product_id: str, payload: Mapping[str, Any]) -> ProductResponse:
        """
        Replace the supplied fields of an existing product.

        The payload is validated before the id is looked up, so an invalid
        body is a 400 whether or not the product exists.

        Raises:
            ValidationError: A supplied field breaks the product rules
            NotFoundError: No product has this id, or the id is malformed
            DatabaseError: The update failed (the row is left unchanged)
        """
        changes = self._validate(ProductUpdate, payload).model_dump(exclude_unset=True)
        pid = self._parse_id(product_id)
        product = await self._call("update", self.store.find_by_id_and_update, pid, changes)
        if product is None:
            raise NotFoundError(resource="Product", resource_id=str(product_id))
        return product

    async def delete_product(self, product_id: str) -> ProductResponse:
        """
        Remove a product and return what it held.

        Raises:
            NotFoundError: No product has this id, or the id is malformed
            DatabaseError: The delete failed
        """
        pid = self._parse_id(product_id)
        product = await self._call("delete", self.store.find_by_id_and_delete, pid)
        if product is None:
            raise NotFoundError(resource="Product", resource_id=str(product_id))
        return product

    async def api_info(self, endpoints: Dict[str, str]) -> ApiInfoResponse:
        """
        Build the GET / view. Never raises.

        The store is pinged first; listing is only attempted when it
        answers. An unreachable, failing or empty store yields the sample
        catalog when the fallback is enabled.
        """
        try:
            connected = await self.store.ping()
        except Exception as e:
            connected = False
            logger.warning("Product store ping failed for API info: %s", str(e))
        products = []
        store_failed = not connected

        if connected:
            try:
                products = await self.store.find_many()
            except Exception as e:
                store_failed = True
                logger.warning("Product store list failed for API info: %s", str(e))

        source = "store"
        if not products and self.sample_fallback:
            logger.warning(
                "Serving sample catalog on API info (store %s)",
                "unavailable" if store_failed else "empty",
            )
            products = sample_products()
            source = "sample"

        return ApiInfoResponse(
            message="Product CRUD API is running",
            status="Server is active",
            database_connected=connected,
            total_products=len(products),
            products=products,
            source=source,
            degraded=store_failed,
            endpoints=endpoints,
        )
