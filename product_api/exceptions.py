"""
Product Catalog API — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return the JSON error envelope with the matching HTTP status code.
Who:   Raised by ProductService; caught by the handlers in main.py.

Exception Hierarchy:
    ProductAPIError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found (missing or malformed id)
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class ProductAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional info; returned as `details` only where the
                  handler says so, always logged
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ProductAPIError):
    """
    Raised when a product payload breaks a field rule.

    HTTP:    400 Bad Request

    `errors` maps each failing field to its reason and is returned to the
    client under `details.fields`.

    Example response:
        {
            "success": false,
            "error": "validation_error",
            "message": "Invalid product: name - String should have at least 3 characters",
            "details": {"fields": {"name": "String should have at least 3 characters"}}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[Dict[str, str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        if errors:
            ctx["fields"] = errors
        super().__init__(message=message, context=ctx)
        self.field = field
        self.errors = errors or {}


class NotFoundError(ProductAPIError):
    """
    Raised when no product has the requested id.

    HTTP:    404 Not Found

    The store returns None for missing documents. ProductService converts
    that None, and any id that cannot be parsed, into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(ProductAPIError):
    """
    Raised when a store operation fails for reasons unrelated to the input.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The original
    error type and operation are kept in `context` and logged server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
