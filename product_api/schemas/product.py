"""
Product Catalog API — Pydantic Request/Response Schemas
========================================================

What:  Pydantic models defining the API contract.
How:   ProductService validates raw JSON bodies against ProductCreate /
       ProductUpdate before any write; FastAPI serializes the response
       models (camelCase on the wire) and generates the OpenAPI docs.

Field rules (one rule set for every write):
    name:      required, trimmed, 3..100 characters
    price:     required, finite, >= 1
    category:  one of ProductCategory, defaults to "Other" on create

Response envelopes always carry `success`. Errors use ErrorResponse.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100
PRICE_MINIMUM = 1


class ProductCategory(str, Enum):
    ELECTRONICS = "Electronics"
    CLOTHING = "Clothing"
    FOOD = "Food"
    OTHER = "Other"
    ACCESSORIES = "Accessories"
    STATIONERY = "Stationery"


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What clients send on POST / PUT
# ══════════════════════════════════════════════════════════════════════════


class ProductCreate(BaseModel):
    """
    What:  Candidate product for POST /products.

    Unknown keys (including `id` and timestamps) are ignored; the store
    generates those.
    """
    model_config = ConfigDict(str_strip_whitespace=True, use_enum_values=True)

    name: str = Field(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    price: float = Field(ge=PRICE_MINIMUM, allow_inf_nan=False)
    category: ProductCategory = Field(default=ProductCategory.OTHER, validate_default=True)


class ProductUpdate(BaseModel):
    """
    What:  Partial product for PUT /products/{id}.

    Only the keys present in the body are validated and written
    (`model_dump(exclude_unset=True)`). Omitted keys keep their stored
    values. An explicit null is rejected: every stored field is required.
    """
    model_config = ConfigDict(str_strip_whitespace=True, use_enum_values=True)

    name: Optional[str] = Field(
        default=None, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH
    )
    price: Optional[float] = Field(default=None, ge=PRICE_MINIMUM, allow_inf_nan=False)
    category: Optional[ProductCategory] = None

    @field_validator("name", "price", "category", mode="before")
    @classmethod
    def reject_null(cls, v):
        # Only runs for keys present in the body
        if v is None:
            raise ValueError("Field may not be null")
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class CamelModel(BaseModel):
    """Serializes snake_case attributes as camelCase keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ProductResponse(CamelModel):
    """
    What:  A stored product (or a sample product in degraded mode).

    Sample products carry no timestamps, so both are optional.
    """
    id: uuid.UUID = Field(description="Store-generated product identifier")
    name: str
    price: float
    category: str
    created_at: Optional[datetime] = Field(default=None, description="Creation time (UTC)")
    updated_at: Optional[datetime] = Field(default=None, description="Last update time (UTC)")

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        # SQLite hands timestamps back without tzinfo; they are stored in UTC
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class ProductEnvelope(CamelModel):
    """Single-product envelope for POST, GET by id and PUT."""
    success: bool = True
    data: ProductResponse


class ProductListResponse(CamelModel):
    """
    What:  Envelope for GET /products.

    `source` is "store" for live data and "sample" for the fallback
    catalog; `degraded` is true whenever the store could not be read.
    """
    success: bool = True
    count: int
    data: List[ProductResponse]
    source: str = "store"
    degraded: bool = False


class DeleteResponse(CamelModel):
    """Envelope for DELETE /products/{id}: confirmation plus prior content."""
    success: bool = True
    message: str = "Product deleted"
    data: ProductResponse


class ApiInfoResponse(CamelModel):
    """
    What:  Envelope for GET / (service banner, connectivity and catalog).
    """
    success: bool = True
    message: str
    status: str
    database_connected: bool
    total_products: int
    products: List[ProductResponse]
    source: str = "store"
    degraded: bool = False
    endpoints: Dict[str, str]


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(CamelModel):
    """
    What:  Error format shared by every endpoint.

    Example:
        {
            "success": false,
            "error": "not_found",
            "message": "Product with ID '...' was not found",
            "requestId": "a1b2c3d4"
        }
    """
    success: bool = False
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(CamelModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
