# Routes package init
"""
Product Catalog API — API Routes Package
=========================================

Route Inventory:
    - info.py:      GET    /                  (API info with products)
    - products.py:  POST   /products          (create)
                    GET    /products          (list)
                    GET    /products/{id}     (get)
                    PUT    /products/{id}     (update)
                    DELETE /products/{id}     (delete)
    - health.py:    GET    /health            (service health check)

Routes stay thin: read the request, call ProductService, wrap the result.
"""
