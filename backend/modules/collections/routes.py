"""
Collection endpoints.
"""

from fastapi import APIRouter, Depends, Request

from api.controller import execute_with_delay, execute_with_pagination, pagination_params
from api.dependencies import get_collection_service
from api.middleware.auth import authenticate, current_user
from api.middleware.rate_limit import rate_limit
from shared.models import AuthUser, PaginationOptions

from .interfaces import ICollectionService
from .models import AddFileRequest, CreateCollectionRequest, UpdateCollectionRequest

router = APIRouter(dependencies=[Depends(rate_limit("api")), Depends(authenticate)])


@router.get("")
async def list_collections(
    request: Request,
    pagination: PaginationOptions = Depends(pagination_params),
    service: ICollectionService = Depends(get_collection_service),
):
    return await execute_with_pagination(
        request, lambda: service.get_all_collections(pagination), "Collections retrieved successfully"
    )


@router.get("/shared")
async def list_shared_collections(
    request: Request,
    pagination: PaginationOptions = Depends(pagination_params),
    user: AuthUser = Depends(current_user),
    service: ICollectionService = Depends(get_collection_service),
):
    """Shared collections owned by someone other than the caller."""
    return await execute_with_pagination(
        request,
        lambda: service.get_shared_collections(user.id, pagination),
        "Shared collections retrieved successfully",
    )


@router.post("", status_code=201)
async def create_collection(
    request: Request,
    body: CreateCollectionRequest,
    user: AuthUser = Depends(current_user),
    service: ICollectionService = Depends(get_collection_service),
):
    return await execute_with_delay(
        request,
        lambda: service.create_collection(user, body),
        "Collection created successfully",
        status_code=201,
    )


@router.get("/{collection_id}")
async def get_collection(
    request: Request,
    collection_id: str,
    service: ICollectionService = Depends(get_collection_service),
):
    return await execute_with_delay(
        request, lambda: service.get_collection_by_id(collection_id), "Collection retrieved successfully"
    )


@router.patch("/{collection_id}")
async def update_collection(
    request: Request,
    collection_id: str,
    body: UpdateCollectionRequest,
    user: AuthUser = Depends(current_user),
    service: ICollectionService = Depends(get_collection_service),
):
    return await execute_with_delay(
        request,
        lambda: service.update_collection(collection_id, user, body),
        "Collection updated successfully",
    )


@router.delete("/{collection_id}")
async def delete_collection(
    request: Request,
    collection_id: str,
    user: AuthUser = Depends(current_user),
    service: ICollectionService = Depends(get_collection_service),
):
    return await execute_with_delay(
        request, lambda: service.delete_collection(collection_id, user), "Collection deleted successfully"
    )


@router.get("/{collection_id}/files")
async def list_collection_files(
    request: Request,
    collection_id: str,
    pagination: PaginationOptions = Depends(pagination_params),
    service: ICollectionService = Depends(get_collection_service),
):
    return await execute_with_pagination(
        request,
        lambda: service.get_collection_files(collection_id, pagination),
        "Collection files retrieved successfully",
    )


@router.post("/{collection_id}/files")
async def add_file(
    request: Request,
    collection_id: str,
    body: AddFileRequest,
    user: AuthUser = Depends(current_user),
    service: ICollectionService = Depends(get_collection_service),
):
    return await execute_with_delay(
        request,
        lambda: service.add_file_to_collection(collection_id, body.file_id, user),
        "File added to collection successfully",
    )


@router.delete("/{collection_id}/files/{file_id}")
async def remove_file(
    request: Request,
    collection_id: str,
    file_id: str,
    user: AuthUser = Depends(current_user),
    service: ICollectionService = Depends(get_collection_service),
):
    return await execute_with_delay(
        request,
        lambda: service.remove_file_from_collection(collection_id, file_id, user),
        "File removed from collection successfully",
    )
