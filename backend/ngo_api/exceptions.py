"""
NGO Site Backend - Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the three failure classes the API
       distinguishes: bad input, unknown record, storage failure.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by services and stores; caught by the handlers in main.py.

Exception Hierarchy:
    NgoSiteError (base)
    ├── ValidationError          → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    └── StorageError             → 500 Internal Server Error
        ├── DatabaseError            (record store: SQLAlchemy / TinyDB)
        └── AssetStorageError        (asset store: filesystem)

    StorageError messages are passed through to the client unchanged.
"""

from typing import Any, Dict, Optional


class NgoSiteError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Error description returned in the API response
        context:  Additional debug info (logged, returned only for validation errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NgoSiteError):
    """
    Raised when client input fails validation.

    When:    Missing or blank required field, more than one image file,
             empty or oversized upload.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Name and position are required",
            "details": {"field": "position"}
        }
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


class NotFoundError(NgoSiteError):
    """
    Raised when a requested record or asset does not exist.

    When:    Unknown member/event id, unknown upload filename.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class StorageError(NgoSiteError):
    """
    Raised when a datastore or filesystem operation fails.

    When:    Database unreachable, JSON file unreadable, disk full,
             permission denied.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(StorageError):
    """Record store failure (SQLAlchemy or TinyDB)."""

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AssetStorageError(StorageError):
    """
    Raised when the asset directory cannot be written to or cleaned up.

    During member update/delete this error is logged and swallowed when it
    comes from removing a stale asset; the record mutation stands.
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
