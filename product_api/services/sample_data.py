"""
Fixed sample catalog served in degraded mode.

Only ProductService reads this, and only when `sample_fallback_enabled` is
set. Every response built from it is flagged `source="sample"`.
"""

import uuid
from typing import List

from product_api.schemas.product import ProductResponse

SAMPLE_PRODUCTS: List[ProductResponse] = [
    ProductResponse(
        id=uuid.UUID("686f5c10-6b7e-4b46-85d0-9e6000000060"),
        name="Laptop",
        price=1200,
        category="Electronics",
    ),
    ProductResponse(
        id=uuid.UUID("686f5c10-6b7e-4b46-85d0-9e6000000061"),
        name="Wireless Mouse",
        price=25,
        category="Accessories",
    ),
    ProductResponse(
        id=uuid.UUID("686f5c10-6b7e-4b46-85d0-9e6000000062"),
        name="Notebook",
        price=5,
        category="Stationery",
    ),
    ProductResponse(
        id=uuid.UUID("686f5c10-6b7e-4b46-85d0-9e6000000063"),
        name="Smartphone",
        price=699,
        category="Electronics",
    ),
]


def sample_products() -> List[ProductResponse]:
    """Copies of the sample catalog, safe for callers to mutate."""
    return [p.model_copy() for p in SAMPLE_PRODUCTS]
