"""
Controller helpers.

Every route handler ends in one of two calls: ``execute_with_delay`` for a
single result or ``execute_with_pagination`` for a PaginatedResult. Both
run the service call through the container's delay strategy and write the
success envelope. Errors are never formatted here; they propagate to the
global error handlers.
"""

from typing import Any, Awaitable, Callable, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from shared.models import PaginatedResult, PaginationOptions
from shared.responses import parse_pagination, success

from .dependencies import get_container


def pagination_params(request: Request) -> PaginationOptions:
    """Dependency: lenient ``page``/``limit`` parsing from the query string."""
    return parse_pagination(request.query_params)


async def execute_with_delay(
    request: Request,
    operation: Callable[[], Awaitable[Any]],
    message: Optional[str] = None,
    status_code: int = 200,
) -> JSONResponse:
    data = await get_container(request).delay.run(operation)
    return success(request, data, message, status_code)


async def execute_with_pagination(
    request: Request,
    operation: Callable[[], Awaitable[PaginatedResult[Any]]],
    message: Optional[str] = None,
) -> JSONResponse:
    result = await get_container(request).delay.run(operation)
    return success(
        request,
        result.items,
        message,
        pagination={"page": result.page, "limit": result.limit, "total": result.total},
    )
