"""
Product Catalog API — API Info Route
=====================================

What:  GET / — service banner, database connectivity, the catalog and the
       list of available endpoints.
How:   Delegates to ProductService.api_info(), which never raises: a dead or
       empty store is reported through `databaseConnected`, `source` and
       `degraded` instead of an error status.
"""

from fastapi import APIRouter, Depends

from product_api.dependencies import get_product_service
from product_api.schemas.product import ApiInfoResponse
from product_api.services.product_service import ProductService

router = APIRouter(tags=["Info"])

API_ENDPOINTS = {
    "GET /": "API info with products (this page)",
    "POST /products": "Create product",
    "GET /products": "Get all products",
    "GET /products/{id}": "Get single product",
    "PUT /products/{id}": "Update product",
    "DELETE /products/{id}": "Delete product",
    "GET /health": "Service health check",
}


@router.get(
    "/",
    response_model=ApiInfoResponse,
    summary="API info with products",
)
async def api_info(
    service: ProductService = Depends(get_product_service),
) -> ApiInfoResponse:
    return await service.api_info(API_ENDPOINTS)
