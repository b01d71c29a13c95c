"""
User management endpoints.

Listing, inviting, deleting and role changes are admin-only. Reading,
updating and activity are open to the user themselves or an admin.
"""

from fastapi import APIRouter, Depends, Request

from api.controller import execute_with_delay, execute_with_pagination, pagination_params
from api.dependencies import get_user_service
from api.middleware.auth import authenticate, require_roles, require_self_or_admin
from api.middleware.rate_limit import rate_limit
from shared.models import AuthUser, PaginationOptions, UserRole

from .interfaces import IUserService
from .models import InviteUserRequest, UpdateRoleRequest, UpdateUserRequest

router = APIRouter(
    dependencies=[Depends(rate_limit("api")), Depends(authenticate), Depends(rate_limit("user"))]
)

admin_only = require_roles(UserRole.ADMIN)
self_or_admin = require_self_or_admin("user_id")


@router.get("")
async def list_users(
    request: Request,
    pagination: PaginationOptions = Depends(pagination_params),
    _: AuthUser = Depends(admin_only),
    service: IUserService = Depends(get_user_service),
):
    """List all users (admin only)."""
    return await execute_with_pagination(
        request, lambda: service.get_users(pagination), "Users retrieved successfully"
    )


@router.post("/invite", status_code=201)
async def invite_user(
    request: Request,
    body: InviteUserRequest,
    _: AuthUser = Depends(admin_only),
    service: IUserService = Depends(get_user_service),
):
    return await execute_with_delay(
        request,
        lambda: service.invite_user(body.email, body.role),
        "User invitation sent successfully",
        status_code=201,
    )


@router.get("/{user_id}")
async def get_user(
    request: Request,
    user_id: str,
    _: AuthUser = Depends(self_or_admin),
    service: IUserService = Depends(get_user_service),
):
    return await execute_with_delay(
        request, lambda: service.get_user_by_id(user_id), "User retrieved successfully"
    )


@router.put("/{user_id}")
async def update_user(
    request: Request,
    user_id: str,
    body: UpdateUserRequest,
    _: AuthUser = Depends(self_or_admin),
    service: IUserService = Depends(get_user_service),
):
    return await execute_with_delay(
        request, lambda: service.update_user(user_id, body), "User updated successfully"
    )


@router.delete("/{user_id}")
async def delete_user(
    request: Request,
    user_id: str,
    actor: AuthUser = Depends(admin_only),
    service: IUserService = Depends(get_user_service),
):
    """Delete a user. Admins cannot delete themselves."""
    return await execute_with_delay(
        request, lambda: service.delete_user(user_id, actor), "User deleted successfully"
    )


@router.put("/{user_id}/role")
async def update_user_role(
    request: Request,
    user_id: str,
    body: UpdateRoleRequest,
    actor: AuthUser = Depends(admin_only),
    service: IUserService = Depends(get_user_service),
):
    return await execute_with_delay(
        request,
        lambda: service.update_user_role(user_id, body.role, actor),
        "User role updated successfully",
    )


@router.get("/{user_id}/activity")
async def get_user_activity(
    request: Request,
    user_id: str,
    pagination: PaginationOptions = Depends(pagination_params),
    _: AuthUser = Depends(self_or_admin),
    service: IUserService = Depends(get_user_service),
):
    return await execute_with_pagination(
        request,
        lambda: service.get_user_activity(user_id, pagination),
        "User activity retrieved successfully",
    )
