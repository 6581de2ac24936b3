"""
FastAPI dependencies resolving the per-application objects.

create_app() stores the ProductService and the ProductStore on
`app.state`; handlers receive them through Depends() so tests can build an
app around any store.
"""

from fastapi import Request

from product_api.services.product_service import ProductService
from product_api.services.store import ProductStore


def get_product_service(request: Request) -> ProductService:
    return request.app.state.product_service


def get_product_store(request: Request) -> ProductStore:
    return request.app.state.product_store
