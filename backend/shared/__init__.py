"""
Shared infrastructure for the mock API backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- exceptions: Domain error taxonomy
- logging_config: Logging setup and request id propagation
- models: Identity, pagination and request context models
- repository: In-memory repository base
- responses: Response envelope, pagination parsing and latency simulation

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .exceptions import (
    ErrorKind,
    MockApiError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ForbiddenError,
    ConflictError,
    BusinessRuleError,
    RateLimitExceededError,
    UploadLimitError,
)
from .models import AuthUser, User, UserRole, PaginationOptions, PaginatedResult, RequestContext

__all__ = [
    "Settings",
    "get_settings",
    "ErrorKind",
    "MockApiError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ForbiddenError",
    "ConflictError",
    "BusinessRuleError",
    "RateLimitExceededError",
    "UploadLimitError",
    "AuthUser",
    "User",
    "UserRole",
    "PaginationOptions",
    "PaginatedResult",
    "RequestContext",
]
