"""
Request context middleware.

First stage of the pipeline: assigns a request id, creates the
RequestContext every later stage reads, and logs each request with its
duration once the response is ready.
"""

import logging
import time
import uuid
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from shared.logging_config import bind_request_id, unbind_request_id
from shared.models import RequestContext
from shared.responses import REQUEST_ID_HEADER


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def get_request_context(request: Request) -> RequestContext:
    """
    Return the context for this request, creating one if the middleware
    did not run (e.g. a bare test app).
    """
    context = getattr(request.state, "context", None)
    if context is None:
        context = RequestContext(str(uuid.uuid4()), time.perf_counter(), client_ip(request))
        request.state.context = context
    return context


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Request id, timing and access logging."""

    def __init__(
        self,
        app: ASGIApp,
        slow_request_ms: int = 1000,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(app)
        self.slow_request_ms = slow_request_ms
        self.logger = logger or logging.getLogger(__name__)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        context = RequestContext(request_id, time.perf_counter(), client_ip(request))
        request.state.context = context
        tokens = bind_request_id(request_id)
        try:
            return await self._handle(request, call_next, context)
        finally:
            unbind_request_id(tokens)

    async def _handle(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
        context: RequestContext,
    ) -> Response:
        request_id = context.request_id
        self.logger.debug(
            "Request started",
            extra={"method": request.method, "path": request.url.path, "ip": context.client_ip},
        )
        try:
            response = await call_next(request)
        except Exception:
            self.logger.error(
                "Request failed",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "duration_ms": self._elapsed_ms(context),
                },
            )
            raise

        duration_ms = self._elapsed_ms(context)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms}ms"

        fields = {
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
            "ip": context.client_ip,
            "user_id": context.user.id if context.user else None,
        }
        self.logger.log(
            logging.WARNING if response.status_code >= 400 else logging.INFO,
            "Request completed",
            extra=fields,
        )
        if duration_ms > self.slow_request_ms:
            self.logger.warning("Slow request detected", extra={**fields, "threshold_ms": self.slow_request_ms})
        return response

    @staticmethod
    def _elapsed_ms(context: RequestContext) -> int:
        return int((time.perf_counter() - context.started_at) * 1000)
