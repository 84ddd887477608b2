"""
SheetStore Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and routes; caught by global handlers.

Exception Hierarchy:
    SheetStoreError (base)
    ├── ValidationError  → 400 Bad Request (client can fix)
    ├── NotFoundError    → 404 Not Found
    └── StorageError     → 500 Internal Server Error

Outcomes that are NOT exceptions:
    "Sheet already exists!" and "no table saved yet" are normal 200 responses
    (a negative `success` flag or a default grid). Callers must read the body,
    not only the status code.
"""

from typing import Any, Dict, Optional


class SheetStoreError(Exception):
    """
    Base exception for all SheetStore application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SheetStoreError):
    """
    Raised when client input fails a presence check.

    When:    addSheet / deleteSheet without a sheet name.
    HTTP:    400 Bad Request

    Schema errors (e.g. `rows` that is not an integer) are left to FastAPI,
    which answers those with 422.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(SheetStoreError):
    """
    Raised when a referenced sheet has no table record where one is required.

    When:    deleteSheet on a name whose table record does not exist.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StorageError(SheetStoreError):
    """
    Raised when a database operation fails.

    HTTP:    500 Internal Server Error

    The message is generic per operation ("Error adding sheet", ...). The
    underlying exception is logged server-side and kept in `context`; it is
    only echoed to the client when `expose=True`, which deleteSheet uses.
    """

    def __init__(
        self,
        message: str = "A storage error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
        expose: bool = False,
    ):
        super().__init__(message=message, context=context)
        self.expose = expose
