"""
Search endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from api.controller import execute_with_delay, execute_with_pagination, pagination_params
from api.dependencies import get_search_service
from api.middleware.auth import authenticate, current_user
from api.middleware.rate_limit import rate_limit
from shared.models import AuthUser, PaginationOptions

from .interfaces import ISearchService
from .models import DateRange, SaveSearchRequest, SearchQuery, SearchResultType

router = APIRouter(dependencies=[Depends(rate_limit("search")), Depends(authenticate)])


def date_range_param(
    date_range: Optional[str] = Query(default=None, alias="dateRange", description='JSON: {"start": ..., "end": ...}'),
) -> Optional[DateRange]:
    if not date_range:
        return None
    try:
        return DateRange.model_validate_json(date_range)
    except ValidationError as e:
        raise RequestValidationError(
            [{**issue, "loc": ("query", "dateRange", *issue["loc"])} for issue in e.errors()]
        ) from e


@router.get("")
async def search(
    request: Request,
    q: str = Query(default=""),
    type: Optional[SearchResultType] = Query(default=None),
    owner: Optional[str] = Query(default=None),
    tags: list[str] = Query(default=[]),
    file_type: Optional[str] = Query(default=None, alias="fileType"),
    collection_id: Optional[str] = Query(default=None, alias="collectionId"),
    date_range: Optional[DateRange] = Depends(date_range_param),
    pagination: PaginationOptions = Depends(pagination_params),
    service: ISearchService = Depends(get_search_service),
):
    query = SearchQuery(
        query=q,
        type=type,
        owner=owner,
        tags=tags,
        file_type=file_type,
        collection_id=collection_id,
        date_range=date_range,
    )
    return await execute_with_pagination(
        request, lambda: service.search(query, pagination), "Search completed successfully"
    )


@router.get("/suggestions")
async def suggestions(
    request: Request,
    q: str = Query(default=""),
    service: ISearchService = Depends(get_search_service),
):
    return await execute_with_delay(
        request, lambda: service.get_search_suggestions(q), "Search suggestions retrieved successfully"
    )


@router.post("/history", status_code=201)
async def save_search(
    request: Request,
    body: SaveSearchRequest,
    user: AuthUser = Depends(current_user),
    service: ISearchService = Depends(get_search_service),
):
    return await execute_with_delay(
        request,
        lambda: service.save_search(user.id, body.query),
        "Search saved successfully",
        status_code=201,
    )


@router.get("/history")
async def search_history(
    request: Request,
    pagination: PaginationOptions = Depends(pagination_params),
    user: AuthUser = Depends(current_user),
    service: ISearchService = Depends(get_search_service),
):
    return await execute_with_pagination(
        request,
        lambda: service.get_search_history(user.id, pagination),
        "Search history retrieved successfully",
    )
