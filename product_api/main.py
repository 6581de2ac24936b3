"""
Product Catalog API — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the product store (or takes an injected one),
       wraps it in a ProductService, registers middleware, exception
       handlers and routes, and returns the app.
Who:   uvicorn (`product_api.main:app`), `python -m product_api`, tests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌─────────────────┐               │
    │  │   Req ID     │→│   Access Log    │               │
    │  └──────────────┘ └─────────────────┘               │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────┐ ┌────────────────────┐ ┌───────────┐  │
    │  │  GET /   │ │ /products CRUD     │ │GET /health│  │
    │  └──────────┘ └────────────────────┘ └───────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Database→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, connect the store (fatal on failure)
    Shutdown: close the store (dispose the connection pool)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from product_api import __version__
from product_api.config import Settings, settings as default_settings
from product_api.exceptions import DatabaseError, NotFoundError, ValidationError
from product_api.middleware.logging import RequestLoggingMiddleware
from product_api.middleware.request_id import RequestIDMiddleware, request_id_var
from product_api.routes import health, info, products
from product_api.services.product_service import ProductService
from product_api.services.sql_store import SQLProductStore
from product_api.services.store import ProductStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once for the whole process.

    Format: 2024-01-15T12:00:00 [INFO] product_api.access: GET /products 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries that log every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Connect the product store on startup and close it on shutdown.

    A store that cannot be reached at startup is fatal: the error is
    logged and re-raised so uvicorn exits.
    """
    config: Settings = app.state.settings
    store: ProductStore = app.state.product_store

    setup_logging(config.log_level)
    logger.info("Product Catalog API %s starting up...", __version__)

    try:
        await store.connect()
    except Exception as e:
        logger.critical("Could not connect to the product store: %s", str(e))
        raise

    if config.sample_fallback_enabled:
        logger.info("Sample catalog fallback is enabled")

    yield

    logger.info("Product Catalog API shutting down...")
    await store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details: Optional[dict] = None) -> dict:
    body = {
        "success": False,
        "error": error,
        "message": message,
        "requestId": request_id_var.get(""),
    }
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the error envelope.

        ValidationError         → 400
        RequestValidationError  → 400 (malformed JSON, non-object body)
        NotFoundError           → 404
        DatabaseError           → 500 (generic message, context logged)
        Exception (fallback)    → 500
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = {}
        for err in exc.errors():
            # loc starts with "body", "path" or "query"
            field = ".".join(str(part) for part in err["loc"][1:]) or str(err["loc"][0])
            errors.setdefault(field, err["msg"])
        summary = "; ".join(f"{field} - {msg}" for field, msg in errors.items())
        logger.warning("[%s] Malformed request: %s", request_id_var.get(""), summary)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", f"Invalid request: {summary}", {"fields": errors}),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body("not_found", exc.message),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", "An internal error occurred. Please try again later."),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    config: Optional[Settings] = None,
    store: Optional[ProductStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to use (defaults to the process-wide `settings`)
        store:  Product store to serve from. Defaults to a SQLProductStore
                built from `config.database_url`. The store is NOT connected
                here; the lifespan does that.

    Returns: Fully configured FastAPI instance.
    """
    config = config or default_settings
    if store is None:
        store = SQLProductStore.from_settings(config)

    app = FastAPI(
        title="Product Catalog API",
        description="CRUD service for catalog products.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = config
    app.state.product_store = store
    app.state.product_service = ProductService(
        store, sample_fallback=config.sample_fallback_enabled
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Access Log → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(info.router)
    app.include_router(products.router)
    app.include_router(health.router)

    return app


# uvicorn expects `product_api.main:app`
app = create_app()
