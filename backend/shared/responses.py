"""
Response envelope, pagination and latency helpers.

Every endpoint answers with the same JSON envelope:

    {"success": true, "data": ..., "message": "...", "timestamp": "...",
     "requestId": "...", "pagination": {...}}

    {"success": false, "error": {"code": "...", "message": "...", "details": ...},
     "timestamp": "...", "requestId": "..."}

A success envelope always has a ``data`` key and never an ``error`` key;
an error envelope is the reverse.
"""

import asyncio
import math
import random
import uuid
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Mapping, Optional, Protocol, TypeVar

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .models import PaginationOptions


R = TypeVar("R")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100
REQUEST_ID_HEADER = "X-Request-ID"


# --- Pagination -------------------------------------------------------------


def _to_int(value: Any, default: int) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def parse_pagination(query: Mapping[str, Any]) -> PaginationOptions:
    """
    Build PaginationOptions from untyped query input.

    Missing or non-numeric values fall back to page=1, limit=20. ``page`` is
    floored at 1 and ``limit`` clamped to [1, 100]. Never raises.
    """
    page = _to_int(query.get("page"), DEFAULT_PAGE)
    limit = _to_int(query.get("limit"), DEFAULT_LIMIT)
    return PaginationOptions(
        page=max(1, page),
        limit=min(MAX_LIMIT, max(1, limit)),
    )


def paginate_array(data: list[R], page: int, limit: int) -> tuple[list[R], int]:
    """Return ``(items, total)`` for one page of ``data``."""
    start = (page - 1) * limit
    return data[start : start + limit], len(data)


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total > 0 else 0


# --- Envelope ---------------------------------------------------------------


def _request_id(request: Optional[Request]) -> str:
    context = getattr(request.state, "context", None) if request is not None else None
    if context is not None:
        return context.request_id
    return str(uuid.uuid4())


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _encode(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    return jsonable_encoder(data, by_alias=True)


def success(
    request: Optional[Request],
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = 200,
    pagination: Optional[Mapping[str, int]] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    """
    Write a success envelope.

    ``pagination`` needs ``page``, ``limit`` and ``total``; ``pages`` is
    computed here.
    """
    request_id = _request_id(request)
    body: dict[str, Any] = {
        "success": True,
        "data": _encode(data),
        "message": message or "Operation successful",
        "timestamp": _timestamp(),
        "requestId": request_id,
    }
    if pagination is not None:
        body["pagination"] = {
            "page": pagination["page"],
            "limit": pagination["limit"],
            "total": pagination["total"],
            "pages": page_count(pagination["total"], pagination["limit"]),
        }
    return JSONResponse(
        status_code=status_code,
        content=body,
        headers={REQUEST_ID_HEADER: request_id, **(headers or {})},
    )


def error(
    request: Optional[Request],
    code: str,
    message: str,
    status_code: int = 400,
    details: Any = None,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    """Write an error envelope."""
    request_id = _request_id(request)
    error_body: dict[str, Any] = {"code": code, "message": message}
    if details is not None:
        error_body["details"] = jsonable_encoder(details)
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error_body,
            "timestamp": _timestamp(),
            "requestId": request_id,
        },
        headers={REQUEST_ID_HEADER: request_id, **(headers or {})},
    )


def validation_error(request: Optional[Request], details: Any, message: str = "Validation failed") -> JSONResponse:
    return error(request, "VALIDATION_ERROR", message, 422, details)


def unauthorized(request: Optional[Request], message: str = "Unauthorized") -> JSONResponse:
    return error(request, "UNAUTHORIZED", message, 401, headers={"WWW-Authenticate": "Bearer"})


def forbidden(request: Optional[Request], message: str = "Forbidden") -> JSONResponse:
    return error(request, "FORBIDDEN", message, 403)


def not_found(request: Optional[Request], message: str = "Resource not found") -> JSONResponse:
    return error(request, "NOT_FOUND", message, 404)


def method_not_allowed(request: Optional[Request], message: str = "Method not allowed") -> JSONResponse:
    return error(request, "METHOD_NOT_ALLOWED", message, 405)


def rate_limit_exceeded(
    request: Optional[Request],
    message: str = "Too many requests, please try again later",
    retry_after: Optional[int] = None,
) -> JSONResponse:
    headers = {"Retry-After": str(retry_after)} if retry_after is not None else None
    details = {"retryAfter": retry_after} if retry_after is not None else None
    return error(request, "RATE_LIMIT_EXCEEDED", message, 429, details, headers=headers)


def internal_server_error(
    request: Optional[Request],
    message: str = "Internal server error",
    details: Any = None,
) -> JSONResponse:
    return error(request, "INTERNAL_SERVER_ERROR", message, 500, details)


def service_unavailable(request: Optional[Request], message: str = "Service unavailable") -> JSONResponse:
    return error(request, "SERVICE_UNAVAILABLE", message, 503)


# --- Latency simulation -----------------------------------------------------


async def with_delay(
    operation: Callable[[], Awaitable[R]],
    min_delay: int = 100,
    max_delay: int = 2000,
) -> R:
    """
    Await ``operation()`` after sleeping a uniformly random number of
    milliseconds in ``[min_delay, max_delay]``.

    Only delays; the operation's own result or exception passes through.
    """
    await asyncio.sleep(random.uniform(min_delay, max_delay) / 1000)
    return await operation()


class DelayStrategy(Protocol):
    """Something that runs an operation after some simulated latency."""

    async def run(self, operation: Callable[[], Awaitable[R]]) -> R:
        ...


class RandomDelay:
    """Uniform random latency between ``min_ms`` and ``max_ms``."""

    def __init__(self, min_ms: int = 100, max_ms: int = 2000):
        if min_ms > max_ms:
            raise ValueError("min_ms must not exceed max_ms")
        self.min_ms = min_ms
        self.max_ms = max_ms

    async def run(self, operation: Callable[[], Awaitable[R]]) -> R:
        return await with_delay(operation, self.min_ms, self.max_ms)


class NoDelay:
    """Runs the operation immediately. Used under test."""

    async def run(self, operation: Callable[[], Awaitable[R]]) -> R:
        return await operation()
