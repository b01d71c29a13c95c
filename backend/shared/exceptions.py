"""
Base exception classes for the mock API backend.

Each module defines its own exceptions that inherit from these bases.
Every error carries an ErrorKind tag plus a fixed (code, status_code) pair,
so the API layer can map any domain error to a response by matching on
``kind`` rather than on the concrete class.
"""

from enum import Enum
from typing import Optional, Any


class ErrorKind(str, Enum):
    """Closed set of error categories understood by the error handlers."""

    VALIDATION = "validation"
    AUTH = "auth"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    BUSINESS_RULE = "business_rule"
    RATE_LIMITED = "rate_limited"
    UPLOAD = "upload"
    INTERNAL = "internal"


class MockApiError(Exception):
    """
    Base exception for all domain errors.

    Subclasses fix ``kind`` and a default ``status_code``; factories on the
    subclasses fix the code and message for a specific business rule.
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    default_status: int = 500
    is_operational: bool = True

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        self.status_code = status_code or self.default_status

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the error section of the response envelope."""
        error: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            error["details"] = self.details
        return error


class ValidationError(MockApiError):
    """Input validation failed."""

    kind = ErrorKind.VALIDATION
    default_status = 400

    @classmethod
    def required_field(cls, field: str) -> "ValidationError":
        return cls(
            f"{field} is required",
            code="VALIDATION_REQUIRED_FIELD",
            details={"field": field},
        )

    @classmethod
    def invalid_request(cls, message: str, **details: Any) -> "ValidationError":
        return cls(message, code="INVALID_REQUEST", details=details)


class AuthenticationError(MockApiError):
    """Authentication failed (invalid or missing credentials)."""

    kind = ErrorKind.AUTH
    default_status = 401


class AuthorizationError(MockApiError):
    """Authorization failed (insufficient permissions)."""

    kind = ErrorKind.FORBIDDEN
    default_status = 403


class ForbiddenError(AuthorizationError):
    """Authenticated, but not allowed to act on the target."""

    @classmethod
    def access_denied(cls, message: str = "Access denied") -> "ForbiddenError":
        return cls(message, code="FORBIDDEN")

    @classmethod
    def insufficient_permissions(cls, **details: Any) -> "ForbiddenError":
        return cls("Insufficient permissions", code="FORBIDDEN", details=details)

    @classmethod
    def permission_denied(cls, action: str, resource: str) -> "ForbiddenError":
        return cls(
            f"You do not have permission to {action} this {resource}",
            code="FORBIDDEN",
            details={"action": action, "resource": resource},
        )


class NotFoundError(MockApiError):
    """Resource not found."""

    kind = ErrorKind.NOT_FOUND
    default_status = 404

    @classmethod
    def resource(cls, resource: str, resource_id: Optional[str] = None) -> "NotFoundError":
        details = {"resource": resource}
        if resource_id is not None:
            details["id"] = resource_id
        return cls(f"{resource} not found", code="NOT_FOUND", details=details)


class ConflictError(MockApiError):
    """Uniqueness or state conflict."""

    kind = ErrorKind.CONFLICT
    default_status = 409


class BusinessRuleError(MockApiError):
    """A request was well-formed but violates a business rule."""

    kind = ErrorKind.BUSINESS_RULE
    default_status = 400


class RateLimitExceededError(MockApiError):
    """Request budget for the current window has been spent."""

    kind = ErrorKind.RATE_LIMITED
    default_status = 429

    def __init__(self, message: str, retry_after: int, limit: int):
        super().__init__(
            message,
            code="RATE_LIMIT_EXCEEDED",
            details={"retryAfter": retry_after, "limit": limit},
        )
        self.retry_after = retry_after
        self.limit = limit


class UploadLimitError(MockApiError):
    """
    Upload exceeded one of the configured limits.

    ``reason`` is one of the LIMIT_* sub-codes; the error handlers map it
    to the client-facing code and status.
    """

    kind = ErrorKind.UPLOAD
    default_status = 400

    def __init__(self, reason: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, code=reason, details=details)
        self.reason = reason
