"""
Authentication module.

Issues and verifies HS256 JWTs, handles login, registration, token refresh
and password reset, and maps roles to permissions.

Public API:
- IAuthService: Interface for auth operations
- LoginResult / TokenResult: Token pairs returned to clients
- has_permission: Role to permission check with wildcard support
- AuthError: Factory for every auth failure
"""

from .interfaces import IAuthService
from .models import LoginResult, TokenPayload, TokenResult
from .permissions import ROLE_PERMISSIONS, has_permission, permission_matches
from .exceptions import (
    AuthError,
    AuthenticationRequiredError,
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "LoginResult",
    "TokenPayload",
    "TokenResult",
    # Permissions
    "ROLE_PERMISSIONS",
    "has_permission",
    "permission_matches",
    # Exceptions
    "AuthError",
    "AuthenticationRequiredError",
    "EmailAlreadyExistsError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MissingTokenError",
]
