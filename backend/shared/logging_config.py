"""
Logging setup.

Modules keep using ``logging.getLogger(__name__)`` or receive a logger
through their constructor. ``configure_logging`` is called once at process
start and routes every stdlib record through structlog's ProcessorFormatter.

Structured fields are passed with ``extra={...}`` and rendered as key=value
pairs, or as one JSON object per line when ``log_json`` is enabled. The
request id bound by the request context middleware is merged into every
record logged while that request is handled.
"""

import logging
from typing import Any, Optional

import structlog

from .config import Settings


def shared_processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.ExtraAdder(),
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def build_formatter(json_output: bool) -> structlog.stdlib.ProcessorFormatter:
    """Formatter for the root handler: JSON lines or console key=value text."""
    if json_output:
        processors = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(default=str),
        ]
    else:
        processors = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(colors=False),
        ]
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors(),
        processors=processors,
    )


def bind_request_id(request_id: str) -> Any:
    """Bind the request id for the current context; pass the result to ``unbind_request_id``."""
    return structlog.contextvars.bind_contextvars(request_id=request_id)


def unbind_request_id(tokens: Any) -> None:
    structlog.contextvars.reset_contextvars(**tokens)


def current_request_id() -> Optional[str]:
    return structlog.contextvars.get_contextvars().get("request_id")


def configure_logging(settings: Settings) -> None:
    """Install a single stream handler on the root logger."""
    structlog.configure(
        processors=[*shared_processors(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(settings.log_json))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_mockapi_handler", False):
            root.removeHandler(existing)
    handler._mockapi_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(settings.log_level.upper())


def log_auth_event(
    logger: logging.Logger,
    event: str,
    user_id: Optional[str],
    success: bool,
    **context: Any,
) -> None:
    """Record an authentication event such as login, logout or token refresh."""
    logger.log(
        logging.INFO if success else logging.WARNING,
        f"Auth event: {event}",
        extra={"auth_event": event, "user_id": user_id, "success": success, **context},
    )
