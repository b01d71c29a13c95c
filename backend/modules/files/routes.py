"""
File endpoints.

Uploads get their own, much smaller rate limit.
"""

from fastapi import APIRouter, Depends, Query, Request

from api.controller import execute_with_delay, execute_with_pagination, pagination_params
from api.dependencies import get_file_service
from api.middleware.auth import authenticate, current_user
from api.middleware.rate_limit import rate_limit
from shared.models import AuthUser, PaginationOptions

from .interfaces import IFileService
from .models import UpdateFileRequest, UploadFileRequest

router = APIRouter(dependencies=[Depends(authenticate)])

api_limit = Depends(rate_limit("api"))


@router.get("", dependencies=[api_limit])
async def list_files(
    request: Request,
    pagination: PaginationOptions = Depends(pagination_params),
    service: IFileService = Depends(get_file_service),
):
    return await execute_with_pagination(
        request, lambda: service.get_all_files(pagination), "Files retrieved successfully"
    )


@router.get("/recent", dependencies=[api_limit])
async def recent_files(
    request: Request,
    limit: int = Query(default=10, ge=1, le=50),
    user: AuthUser = Depends(current_user),
    service: IFileService = Depends(get_file_service),
):
    return await execute_with_delay(
        request, lambda: service.get_recent_files(user.id, limit), "Recent files retrieved successfully"
    )


@router.post("", status_code=201, dependencies=[Depends(rate_limit("upload"))])
async def upload_file(
    request: Request,
    body: UploadFileRequest,
    user: AuthUser = Depends(current_user),
    service: IFileService = Depends(get_file_service),
):
    return await execute_with_delay(
        request, lambda: service.upload_file(user, body), "File uploaded successfully", status_code=201
    )


@router.get("/{file_id}", dependencies=[api_limit])
async def get_file(
    request: Request,
    file_id: str,
    service: IFileService = Depends(get_file_service),
):
    return await execute_with_delay(
        request, lambda: service.get_file_by_id(file_id), "File retrieved successfully"
    )


@router.patch("/{file_id}", dependencies=[api_limit])
async def update_file(
    request: Request,
    file_id: str,
    body: UpdateFileRequest,
    user: AuthUser = Depends(current_user),
    service: IFileService = Depends(get_file_service),
):
    return await execute_with_delay(
        request, lambda: service.update_file(file_id, user, body), "File updated successfully"
    )


@router.delete("/{file_id}", dependencies=[api_limit])
async def delete_file(
    request: Request,
    file_id: str,
    user: AuthUser = Depends(current_user),
    service: IFileService = Depends(get_file_service),
):
    return await execute_with_delay(
        request, lambda: service.delete_file(file_id, user), "File deleted successfully"
    )


@router.get("/{file_id}/preview", dependencies=[api_limit])
async def preview_file(
    request: Request,
    file_id: str,
    service: IFileService = Depends(get_file_service),
):
    return await execute_with_delay(
        request, lambda: service.get_file_preview(file_id), "File preview retrieved successfully"
    )


@router.get("/{file_id}/history", dependencies=[api_limit])
async def file_history(
    request: Request,
    file_id: str,
    pagination: PaginationOptions = Depends(pagination_params),
    service: IFileService = Depends(get_file_service),
):
    return await execute_with_pagination(
        request,
        lambda: service.get_file_history(file_id, pagination),
        "File history retrieved successfully",
    )
