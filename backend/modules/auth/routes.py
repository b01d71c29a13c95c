"""
Authentication endpoints.

All routes use the strict ``auth`` rate limit except ``/me``, which is an
ordinary API read.
"""

from fastapi import APIRouter, Depends, Request

from api.controller import execute_with_delay
from api.dependencies import get_auth_service
from api.middleware.auth import authenticate
from api.middleware.rate_limit import rate_limit
from shared.models import AuthUser

from .interfaces import IAuthService
from .models import (
    ForgotPasswordRequest,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    ResetPasswordRequest,
)

router = APIRouter()

auth_limit = Depends(rate_limit("auth"))


@router.post("/login", dependencies=[auth_limit])
async def login(
    request: Request,
    body: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
):
    return await execute_with_delay(
        request, lambda: service.login_user(body.email, body.password), "Login successful"
    )


@router.post("/register", status_code=201, dependencies=[auth_limit])
async def register(
    request: Request,
    body: RegisterRequest,
    service: IAuthService = Depends(get_auth_service),
):
    return await execute_with_delay(
        request, lambda: service.register_user(body), "Registration successful", status_code=201
    )


@router.post("/logout", dependencies=[auth_limit])
async def logout(
    request: Request,
    user: AuthUser = Depends(authenticate),
    service: IAuthService = Depends(get_auth_service),
):
    """Tokens are stateless, so logout only records the event."""
    return await execute_with_delay(request, lambda: service.logout_user(user), "Logout successful")


@router.post("/refresh", dependencies=[auth_limit])
async def refresh(
    request: Request,
    body: RefreshRequest,
    service: IAuthService = Depends(get_auth_service),
):
    return await execute_with_delay(
        request, lambda: service.refresh_token(body.refresh_token), "Token refreshed successfully"
    )


@router.get("/me", dependencies=[Depends(rate_limit("api"))])
async def me(
    request: Request,
    user: AuthUser = Depends(authenticate),
    service: IAuthService = Depends(get_auth_service),
):
    return await execute_with_delay(
        request, lambda: service.get_profile(user), "User profile retrieved successfully"
    )


@router.post("/forgot-password", dependencies=[auth_limit])
async def forgot_password(
    request: Request,
    body: ForgotPasswordRequest,
    service: IAuthService = Depends(get_auth_service),
):
    return await execute_with_delay(
        request, lambda: service.forgot_password(body.email), "Password reset email sent"
    )


@router.post("/reset-password", dependencies=[auth_limit])
async def reset_password(
    request: Request,
    body: ResetPasswordRequest,
    service: IAuthService = Depends(get_auth_service),
):
    return await execute_with_delay(
        request,
        lambda: service.reset_password(body.token, body.password),
        "Password reset successful",
    )
