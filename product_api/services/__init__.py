# Services package init
"""
Product Catalog API — Services Layer
=====================================

What:  Business logic and persistence adapters between the routes and the database.

Service Inventory:
    - ProductStore (abstract): one-call-per-operation adapter contract
    - SQLProductStore: ProductStore on async SQLAlchemy
    - ProductService: validation, id parsing, error mapping, degraded mode
    - sample_data: the fixed sample catalog used in degraded mode
"""
