"""
Employee Roster API: Custom Exception Hierarchy
==================================================

What:  Application-specific exceptions for the three ways a request can fail.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by the record schema, the service layer and the id-resolution
       dependency; caught by the global handlers.

Exception Hierarchy:
    RosterError (base)
    ├── ValidationError   → 400 Bad Request (payload missing/malformed fields)
    ├── NotFoundError     → 404 Not Found   (no record with that id)
    └── StorageError      → 500 Internal Server Error (connection/query fault)

Unlike a typical API that hides driver errors, StorageError deliberately
forwards the underlying message to the caller.
"""

from typing import Any, Dict, Optional


class RosterError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (returned in the API response)
        context:  Additional debug info (logged, and returned as `details`)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RosterError):
    """
    Raised when a record fails the storage schema.

    When:    Required field missing or blank on create/update, or the request
             body could not be parsed at all.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Employee validation failed: name: Path `name` is required.",
            "details": {"field": "name"}
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


class NotFoundError(RosterError):
    """
    Raised when a requested record does not exist.

    When:    GET/PATCH/DELETE /employees/{id} with an id that matches nothing.
    HTTP:    404 Not Found

    The message is fixed per resource ("Employee not found"); the id goes
    into the context only.
    """

    def __init__(
        self,
        resource: str = "Employee",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class StorageError(RosterError):
    """
    Raised when the storage layer fails.

    When:    Connection lost, query failed, identifier could not be cast to
             the store's key type.
    HTTP:    500 Internal Server Error

    The message is the underlying driver message, not a generic one.
    """

    def __init__(
        self,
        message: str = "A storage error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

    @classmethod
    def from_exception(cls, exc: Exception, **context: Any) -> "StorageError":
        """
        Wrap a driver exception, preferring the DBAPI error's own text.

        SQLAlchemy's DBAPIError stringifies with the SQL statement attached;
        `exc.orig` holds just the driver's message.
        """
        orig = getattr(exc, "orig", None)
        message = str(orig) if orig is not None else str(exc)
        context.setdefault("error_type", type(exc).__name__)
        return cls(message=message or type(exc).__name__, context=context)
