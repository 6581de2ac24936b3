"""
Product Catalog API — Product Route Handlers
=============================================

What:  POST/GET/PUT/DELETE on /products and /products/{product_id}.
How:   Each handler reads the path and body, delegates to ProductService and
       wraps the result in its success envelope. Errors are raised as
       application exceptions and rendered by the handlers in main.py.

Bodies are taken as raw JSON objects so that field rules are enforced in
one place (ProductService) with the API's own 400 format.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status

from product_api.dependencies import get_product_service
from product_api.schemas.product import (
    DeleteResponse,
    ErrorResponse,
    ProductEnvelope,
    ProductListResponse,
)
from product_api.services.product_service import ProductService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])

_NOT_FOUND = {404: {"description": "Product not found", "model": ErrorResponse}}
_INVALID = {400: {"description": "Invalid product fields", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Store failure", "model": ErrorResponse}}


@router.post(
    "",
    response_model=ProductEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={**_INVALID, **_SERVER_ERROR},
    summary="Create a product",
)
async def create_product(
    payload: Dict[str, Any] = Body(..., examples=[{"name": "Laptop", "price": 1200, "category": "Electronics"}]),
    service: ProductService = Depends(get_product_service),
) -> ProductEnvelope:
    """
    Validate and store a new product.

    Returns 201 with the stored document, including its generated id.
    """
    product = await service.create_product(payload)
    return ProductEnvelope(data=product)


@router.get(
    "",
    response_model=ProductListResponse,
    responses=_SERVER_ERROR,
    summary="List all products",
    description=(
        "Returns every stored product in the store's natural order. When the store "
        "fails and the sample fallback is enabled, the sample catalog is returned "
        "with `degraded: true`."
    ),
)
async def list_products(
    service: ProductService = Depends(get_product_service),
) -> ProductListResponse:
    return await service.list_products()


@router.get(
    "/{product_id}",
    response_model=ProductEnvelope,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Get a product by ID",
)
async def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> ProductEnvelope:
    """Malformed ids are answered with 404, the same as unknown ones."""
    product = await service.get_product(product_id)
    return ProductEnvelope(data=product)


@router.put(
    "/{product_id}",
    response_model=ProductEnvelope,
    responses={**_INVALID, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Update fields of a product",
)
async def update_product(
    product_id: str,
    payload: Dict[str, Any] = Body(..., examples=[{"price": 999}]),
    service: ProductService = Depends(get_product_service),
) -> ProductEnvelope:
    """
    Replace the fields present in the body; omitted fields are kept.
    """
    product = await service.update_product(product_id, payload)
    return ProductEnvelope(data=product)


@router.delete(
    "/{product_id}",
    response_model=DeleteResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a product",
)
async def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> DeleteResponse:
    product = await service.delete_product(product_id)
    return DeleteResponse(data=product)
