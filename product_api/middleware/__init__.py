# Middleware package init
"""
Product Catalog API — Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Access Log] → Route Handler

    Request ID runs first so the access log line and every log record
    written while handling the request can carry the same correlation ID.
"""
