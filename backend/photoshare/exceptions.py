"""
PhotoShare Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for every failure a request can hit.
How:   Each exception carries a client-safe message and an optional context
       dict. Global handlers registered in main.py turn them into
       `{"success": false, ...}` JSON bodies with the matching status code.
Who:   Raised by services and the auth gate; caught by global handlers.

Exception Hierarchy:
    PhotoShareError (base)
    ├── ValidationError            → 400 Bad Request
    ├── DuplicateEmailError        → 400 Bad Request
    ├── InvalidCredentialError     → 400 Bad Request
    │   └── UnknownEmailError      → 400 (same body as a wrong password)
    ├── UnauthorizedError          → 401 Unauthorized
    │   └── MissingTokenError
    ├── ForbiddenError             → 403 Forbidden
    │   └── InvalidTokenError
    ├── NotFoundError              → 404 Not Found
    ├── UploadError                → 500 Internal Server Error
    └── PersistenceError           → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class PhotoShareError(Exception):
    """
    Base exception for all PhotoShare application errors.

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


class ValidationError(PhotoShareError):
    """
    Raised when client input fails a business rule.

    When:    Empty upload, unsupported file type, oversized file, blank comment.
    HTTP:    400 Bad Request

    Schema-level problems (missing JSON fields, malformed UUIDs) are caught by
    FastAPI first and mapped to the same 400 response in main.py.
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


class DuplicateEmailError(PhotoShareError):
    """Raised by signup when the email is already registered (HTTP 400)."""

    def __init__(self, email: str):
        super().__init__(
            message="An account with this email already exists",
            context={"email": email},
        )


class InvalidCredentialError(PhotoShareError):
    """
    Raised when a login attempt fails (HTTP 400).

    The message is deliberately identical for a wrong password and an unknown
    email, so the response does not reveal which accounts exist.
    """

    def __init__(
        self,
        message: str = "Invalid credentials",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnknownEmailError(InvalidCredentialError):
    """
    No user is registered under the given email.

    Subclasses InvalidCredentialError so callers that only care about
    "login failed" need a single except clause, while the service layer can
    still tell the two cases apart.
    """

    def __init__(self, email: str):
        super().__init__(context={"email": email, "reason": "unknown_email"})


class UnauthorizedError(PhotoShareError):
    """Raised when a protected route is called without credentials (HTTP 401)."""

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class MissingTokenError(UnauthorizedError):
    """No token was presented in the Authorization header."""

    def __init__(self):
        super().__init__(message="No token provided")


class ForbiddenError(PhotoShareError):
    """
    Raised when the caller is identified but not allowed to proceed (HTTP 403).

    When:    A non-owner edits or deletes a photo, a non-author deletes a
             comment, or the presented token fails verification.
    """

    def __init__(
        self,
        message: str = "Not allowed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidTokenError(ForbiddenError):
    """Token signature, expiry, or claims failed verification."""

    def __init__(self, reason: str = "invalid"):
        super().__init__(message="Invalid token", context={"reason": reason})


class NotFoundError(PhotoShareError):
    """
    Raised when a requested resource does not exist (HTTP 404).

    SQLAlchemy returns None for missing rows; services convert that into this
    exception so the HTTP layer can answer with the right status code.
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
        self.resource = resource


class UploadError(PhotoShareError):
    """
    Raised when the media host rejects or fails an upload (HTTP 500).

    The client sees a generic message; the upstream status and body are kept
    in `context` for the server log. No Photo is persisted after this error.
    """

    def __init__(
        self,
        message: str = "Photo upload failed. Please try again.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PersistenceError(PhotoShareError):
    """
    Raised when the database is unavailable or a query fails (HTTP 500).

    The message returned to the client is always generic. Query details stay
    in the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
