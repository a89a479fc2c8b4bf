"""
Creator Swipes Backend — Custom Exception Hierarchy
====================================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and the auth dependency; caught by global handlers.

Exception Hierarchy:
    CreatorSwipesError (base)
    ├── AuthenticationRequiredError   → 401 Unauthorized (no token)
    ├── InvalidCredentialsError       → 401 Unauthorized (bad username/password)
    ├── InvalidTokenError             → 403 Forbidden (bad/expired token)
    ├── ForbiddenError                → 403 Forbidden (acting for another user)
    ├── QuotaExceededError            → 403 Forbidden (free-tier limit reached)
    ├── NotFoundError                 → 404 Not Found
    ├── DatabaseError                 → 500 Internal Server Error
    └── RateLimitExceededError        → 429 Too Many Requests (body built by
                                        RateLimitMiddleware, not a handler)
"""

from typing import Any, Dict, Optional


class CreatorSwipesError(Exception):
    """
    Base exception for all application errors.

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


class AuthenticationRequiredError(CreatorSwipesError):
    """No token was presented on a protected route. HTTP 401."""

    def __init__(
        self,
        message: str = "Access Denied",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidCredentialsError(CreatorSwipesError):
    """
    Login failed.

    HTTP:    401 Unauthorized

    The same message is used for an unknown username and a wrong password,
    so the response does not reveal which usernames exist.
    """

    def __init__(
        self,
        message: str = "Invalid credentials",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidTokenError(CreatorSwipesError):
    """A token was presented but is malformed, badly signed, or expired. HTTP 403."""

    def __init__(
        self,
        message: str = "Invalid or expired token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(CreatorSwipesError):
    """An authenticated caller tried to act on behalf of another user. HTTP 403."""

    def __init__(
        self,
        message: str = "Forbidden",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class QuotaExceededError(CreatorSwipesError):
    """
    Raised when a free-tier quota would be exceeded by a create/append.

    HTTP:    403 Forbidden

    Attributes:
        limit: The quota that was hit (returned to the client in `details`)
    """

    def __init__(
        self,
        message: str = "Quota exceeded",
        limit: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if limit is not None:
            ctx["limit"] = limit
        super().__init__(message=message, context=ctx)
        self.limit = limit


class NotFoundError(CreatorSwipesError):
    """
    Raised when a requested resource does not exist for the caller.

    HTTP:    404 Not Found

    Ownership is enforced by filtering lookups on the owner, so a resource
    that belongs to someone else is reported exactly like a missing one.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(CreatorSwipesError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the underlying
    driver error is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(CreatorSwipesError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    HTTP:    429 Too Many Requests
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = "Too many requests, please try again later."
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
