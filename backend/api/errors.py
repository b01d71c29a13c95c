"""
Global error handling.

``register_error_handlers`` attaches one handler per error shape so that
anything raised while serving a request leaves as an error envelope:

- request validation (FastAPI / pydantic)  -> 422 with a per-location field list
- PyJWT errors                              -> 401, expired vs malformed
- upload limit errors                       -> 413/400 by sub-code
- FileNotFoundError                         -> 404
- Starlette HTTP errors (unknown route...)  -> their status
- domain errors                             -> their own status and code
- anything else                             -> 500, logged with stack

``install_crash_handlers`` makes the process exit(1) on an uncaught
exception in any thread or an unobserved asyncio task failure.
"""

import asyncio
import logging
import os
import sys
import threading
import traceback
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import jwt
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.config import get_settings
from shared.exceptions import ErrorKind, MockApiError, UploadLimitError
from shared.responses import error, internal_server_error, validation_error

logger = logging.getLogger(__name__)


UPLOAD_ERRORS: dict[str, tuple[int, str, str]] = {
    "LIMIT_FILE_SIZE": (413, "FILE_TOO_LARGE", "File too large"),
    "LIMIT_FILE_COUNT": (413, "TOO_MANY_FILES", "Too many files"),
    "LIMIT_FIELD_KEY": (400, "FIELD_NAME_TOO_LONG", "Field name too long"),
    "LIMIT_FIELD_VALUE": (400, "FIELD_VALUE_TOO_LONG", "Field value too long"),
    "LIMIT_FIELD_COUNT": (400, "TOO_MANY_FIELDS", "Too many fields"),
}

HTTP_ERROR_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    413: "PAYLOAD_TOO_LARGE",
    415: "UNSUPPORTED_MEDIA_TYPE",
    422: "VALIDATION_ERROR",
    429: "RATE_LIMIT_EXCEEDED",
    503: "SERVICE_UNAVAILABLE",
}


def _validation_details(errors: list[dict[str, Any]]) -> dict[str, list[dict[str, str]]]:
    """Group validation issues by where they came from (body, query, path...)."""
    grouped: dict[str, list[dict[str, str]]] = {}
    for issue in errors:
        location = list(issue.get("loc", ()))
        source = str(location[0]) if location else "body"
        if source not in {"body", "query", "path", "header", "cookie"}:
            source, location = "body", ["body", *location]
        field_name = ".".join(str(part) for part in location[1:]) or source
        grouped.setdefault(source, []).append(
            {"field": field_name, "message": str(issue.get("msg", "Invalid value"))}
        )
    return grouped


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return validation_error(request, _validation_details(list(exc.errors())))


async def pydantic_validation_handler(request: Request, exc: PydanticValidationError) -> JSONResponse:
    return validation_error(request, _validation_details(exc.errors()))


async def expired_token_handler(request: Request, exc: jwt.ExpiredSignatureError) -> JSONResponse:
    return error(request, "TOKEN_EXPIRED", "Authentication token expired", status.HTTP_401_UNAUTHORIZED)


async def invalid_token_handler(request: Request, exc: jwt.InvalidTokenError) -> JSONResponse:
    return error(request, "INVALID_TOKEN", "Invalid authentication token", status.HTTP_401_UNAUTHORIZED)


async def file_not_found_handler(request: Request, exc: FileNotFoundError) -> JSONResponse:
    return error(request, "FILE_NOT_FOUND", "File not found", status.HTTP_404_NOT_FOUND)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"Route {request.method} {request.url.path} not found"
    else:
        message = str(exc.detail) if exc.detail else "Request failed"
    return error(request, code, message, exc.status_code, headers=getattr(exc, "headers", None))


def _upload_response(request: Request, exc: UploadLimitError) -> JSONResponse:
    status_code, code, message = UPLOAD_ERRORS.get(exc.reason, (400, "UPLOAD_ERROR", exc.message))
    return error(request, code, message, status_code, exc.details or None)


async def domain_error_handler(request: Request, exc: MockApiError) -> JSONResponse:
    """Report expected errors with their own status and code."""
    if not exc.is_operational:
        return await unhandled_exception_handler(request, exc)

    if exc.kind is ErrorKind.UPLOAD:
        return _upload_response(request, exc)  # type: ignore[arg-type]

    headers: dict[str, str] = {}
    if exc.kind is ErrorKind.AUTH:
        headers["WWW-Authenticate"] = "Bearer"
    elif exc.kind is ErrorKind.RATE_LIMITED:
        headers["Retry-After"] = str(exc.details.get("retryAfter", 0))
        headers["RateLimit-Limit"] = str(exc.details.get("limit", 0))
        headers["RateLimit-Remaining"] = "0"

    logger.info(
        "Request rejected",
        extra={"code": exc.code, "status_code": exc.status_code, "kind": exc.kind.value},
    )
    return error(
        request,
        exc.code,
        exc.message,
        exc.status_code,
        exc.details or None,
        headers=headers or None,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Programming errors: log everything, tell the client as little as the
    environment allows.
    """
    logger.error(
        "Unhandled error",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={"method": request.method, "path": request.url.path},
    )
    container = getattr(request.app.state, "container", None)
    settings = container.settings if container is not None else get_settings()
    if settings.is_production:
        return internal_server_error(request, "Something went wrong")
    return internal_server_error(
        request,
        str(exc) or "Internal server error",
        details={
            "name": type(exc).__name__,
            "stack": traceback.format_exception(type(exc), exc, exc.__traceback__),
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach all error handlers to a FastAPI app instance."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PydanticValidationError, pydantic_validation_handler)
    app.add_exception_handler(jwt.ExpiredSignatureError, expired_token_handler)
    app.add_exception_handler(jwt.InvalidTokenError, invalid_token_handler)
    app.add_exception_handler(FileNotFoundError, file_not_found_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(MockApiError, domain_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


# --- Process crash handlers -------------------------------------------------


@dataclass
class CrashHandlers:
    """Installed hooks plus what they replaced, so tests can undo them."""

    previous_excepthook: Callable[..., Any]
    previous_threading_hook: Callable[..., Any]
    loop: Optional[asyncio.AbstractEventLoop] = None
    previous_loop_handler: Optional[Callable[..., Any]] = None
    installed: bool = field(default=True)

    def uninstall(self) -> None:
        if not self.installed:
            return
        sys.excepthook = self.previous_excepthook
        threading.excepthook = self.previous_threading_hook
        if self.loop is not None:
            self.loop.set_exception_handler(self.previous_loop_handler)
        self.installed = False


def install_crash_handlers(
    crash_logger: Optional[logging.Logger] = None,
    exit_func: Callable[[int], Any] = os._exit,
    loop: Optional[asyncio.AbstractEventLoop] = None,
) -> CrashHandlers:
    """
    Log and exit(1) on uncaught exceptions.

    Covers the main thread (``sys.excepthook``), other threads
    (``threading.excepthook``) and, when a loop is given, asyncio failures
    nobody awaited.
    """
    log = crash_logger or logger
    handlers = CrashHandlers(
        previous_excepthook=sys.excepthook,
        previous_threading_hook=threading.excepthook,
    )

    def on_uncaught(exc_type, exc, tb) -> None:
        log.critical("Uncaught exception, shutting down", exc_info=(exc_type, exc, tb))
        exit_func(1)

    def on_thread_exception(args: threading.ExceptHookArgs) -> None:
        if args.exc_type is SystemExit:
            return
        log.critical(
            "Uncaught exception in thread, shutting down",
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
            extra={"thread_name": getattr(args.thread, "name", None)},
        )
        exit_func(1)

    def on_loop_exception(_loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
        exc = context.get("exception")
        log.critical(
            "Unhandled async failure, shutting down",
            exc_info=(type(exc), exc, exc.__traceback__) if exc else None,
            extra={"detail": context.get("message")},
        )
        exit_func(1)

    sys.excepthook = on_uncaught
    threading.excepthook = on_thread_exception
    if loop is not None:
        handlers.loop = loop
        handlers.previous_loop_handler = loop.get_exception_handler()
        loop.set_exception_handler(on_loop_exception)
    return handlers
