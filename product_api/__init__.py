"""
Product Catalog API — Package Initializer
==========================================

What: Marks `product_api` as a Python package and carries the version string.
Who:  Imported by uvicorn (`product_api.main:app`), pytest and the health route.

Layering:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   ProductService (validation, ids)  │  ← rules and error mapping
    ├─────────────────────────────────────┤
    │      ProductStore (persistence)     │  ← one database call per operation
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
