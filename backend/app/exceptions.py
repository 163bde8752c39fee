"""
Noteful Backend — Custom Exception Hierarchy
=============================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Services signal failures by raising; global exception handlers
       (registered in main.py) turn them into structured JSON responses with
       the right status code. Routes stay free of try/except blocks.
How:   Each exception class carries a message and optional context dict.

Exception Hierarchy:
    NotefulError (base)
    ├── ValidationError       → 400 Bad Request (malformed id, empty field, bad reference)
    ├── AuthenticationError   → 401 Unauthorized (missing/invalid/expired token, bad credentials)
    ├── NotFoundError         → 404 Not Found (no owned record matches)
    └── DatabaseError         → 500 Internal Server Error

Anything else escaping a handler is caught by the catch-all handler and
reported as a 500 without internal details.
"""

from typing import Any, Dict, Optional


class NotefulError(Exception):
    """
    Base exception for all Noteful application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where the handler says so)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotefulError):
    """
    Raised when client input fails validation.

    When:    Malformed id, missing title, folder or tag that is malformed or
             not owned by the caller, duplicate username.
    HTTP:    400 Bad Request

    Raised before any write, so a rejected request never leaves partial data.

    Example response:
        {
            "error": "validation_error",
            "message": "The `id` is not valid",
            "details": {"field": "id"}
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


class AuthenticationError(NotefulError):
    """
    Raised when the caller cannot be authenticated.

    When:    No bearer token, malformed/expired/badly signed token, unknown
             username or wrong password.
    HTTP:    401 Unauthorized

    The response body is always the bare "Unauthorized" message. The reason
    lives in `context` for server-side logs only, so a client cannot tell a
    wrong username from a wrong password.
    """

    def __init__(
        self,
        reason: str = "unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["reason"] = reason
        super().__init__(message="Unauthorized", context=ctx)
        self.reason = reason


class NotFoundError(NotefulError):
    """
    Raised when no record owned by the caller matches.

    HTTP:    404 Not Found

    A note that exists but belongs to someone else is reported exactly like a
    note that does not exist; the generic handler never echoes the resource.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message="Not Found", context=ctx)


class DatabaseError(NotefulError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the context
    (operation, original exception type) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
