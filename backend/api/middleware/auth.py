"""
Authentication and authorization dependencies.

Three authentication strategies share one bearer-token extractor:

- mock: any non-empty bearer token is accepted and a fixed admin identity
  is attached.
- service: the token is verified by the auth service; ``None`` means 401.
- optional: like service, but never rejects.

``authenticate`` picks mock or service from ``settings.auth_mode``.
Authorization dependencies read the identity from the request context and
never authenticate on their own.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from modules.auth.exceptions import AuthError
from modules.auth.interfaces import IAuthService
from modules.auth.permissions import has_permission
from modules.users.repository import MOCK_ADMIN_ID
from shared.exceptions import ForbiddenError
from shared.logging_config import log_auth_event
from shared.models import AuthUser, UserRole

from ..dependencies import get_container
from .context import get_request_context

logger = logging.getLogger(__name__)

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)

MOCK_IDENTITY = AuthUser(
    id=MOCK_ADMIN_ID,
    email="admin@banedonv.com",
    name="BanedonV Admin",
    role=UserRole.ADMIN,
    active=True,
    created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
)


async def mock_authenticate(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthUser:
    """
    Accept any bearer token and attach the fixed admin identity.

    A missing header is the only rejection.
    """
    context = get_request_context(request)
    if credentials is None:
        log_auth_event(logger, "authentication", None, False, reason="missing_token", path=request.url.path)
        raise AuthError.token_required()
    context.user = MOCK_IDENTITY
    return MOCK_IDENTITY


async def service_authenticate(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
    auth_service: IAuthService,
) -> AuthUser:
    """Verify the bearer token with the auth service."""
    context = get_request_context(request)
    if credentials is None:
        log_auth_event(logger, "authentication", None, False, reason="missing_token", path=request.url.path)
        raise AuthError.token_required()

    user = await auth_service.verify_token(credentials.credentials)
    if user is None:
        log_auth_event(logger, "authentication", None, False, reason="invalid_token", path=request.url.path)
        raise AuthError.invalid_auth_token()

    context.user = user
    return user


async def authenticate(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthUser:
    """
    Dependency that requires authentication.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthUser = Depends(authenticate)):
            return {"user_id": user.id}
    """
    container = get_container(request)
    if container.settings.auth_mode == "mock":
        return await mock_authenticate(request, credentials)
    return await service_authenticate(request, credentials, container.auth)


async def optional_authenticate(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[AuthUser]:
    """
    Dependency that attaches a user if a valid token is present.

    Never rejects; an absent or bad token simply yields None.
    """
    context = get_request_context(request)
    if credentials is None:
        return None
    user = await get_container(request).auth.verify_token(credentials.credentials)
    if user is not None:
        context.user = user
    return user


def current_user(request: Request) -> AuthUser:
    """The identity attached by an earlier authentication stage."""
    user = get_request_context(request).user
    if user is None:
        raise AuthError.authentication_required()
    return user


def require_roles(*roles: UserRole) -> Callable[[Request], AuthUser]:
    """Allow only identities whose role is one of ``roles``."""
    allowed = {UserRole(r) for r in roles}

    def dependency(request: Request) -> AuthUser:
        user = current_user(request)
        if user.role not in allowed:
            log_auth_event(
                logger, "authorization", user.id, False,
                role=user.role.value, required_roles=sorted(r.value for r in allowed),
            )
            raise ForbiddenError.insufficient_permissions(
                required=sorted(r.value for r in allowed), current=user.role.value
            )
        return user

    return dependency


def require_permission(permission: str) -> Callable[[Request], AuthUser]:
    """Allow only identities whose role grants ``permission``."""

    def dependency(request: Request) -> AuthUser:
        user = current_user(request)
        if not has_permission(user.role, permission):
            log_auth_event(logger, "permission_check", user.id, False, permission=permission)
            raise ForbiddenError.insufficient_permissions(required=permission)
        return user

    return dependency


def require_self_or_admin(param: str = "user_id") -> Callable[[Request], AuthUser]:
    """Allow the user named by path parameter ``param``, or any admin."""

    def dependency(request: Request) -> AuthUser:
        user = current_user(request)
        target = request.path_params.get(param)
        if user.role != UserRole.ADMIN and user.id != target:
            log_auth_event(logger, "self_or_admin", user.id, False, target=target)
            raise ForbiddenError.access_denied()
        return user

    return dependency


# Type aliases for cleaner route definitions
RequireAuth = Depends(authenticate)
OptionalAuth = Depends(optional_authenticate)
CurrentUser = Depends(current_user)
