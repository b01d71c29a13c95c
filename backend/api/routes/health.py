"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
None of them require authentication or count against a rate limit.
"""

import os
import platform
import sys
import time
from typing import Any

from fastapi import APIRouter, Request

from shared.responses import success

from ..dependencies import get_container

if sys.platform != "win32":
    import resource
else:
    resource = None

router = APIRouter()

STARTED_AT = time.monotonic()


def uptime_seconds() -> float:
    return round(time.monotonic() - STARTED_AT, 3)


def memory_usage() -> dict[str, Any]:
    """Peak resident set size of this process, in bytes."""
    if resource is None:
        return {"maxRss": None}
    max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # Linux reports kilobytes, macOS bytes.
    if sys.platform != "darwin":
        max_rss *= 1024
    return {"maxRss": max_rss}


@router.get("/health")
async def health_check(request: Request):
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    settings = get_container(request).settings
    return success(
        request,
        {
            "status": "healthy",
            "uptime": uptime_seconds(),
            "version": settings.app_version,
            "environment": settings.environment,
            "memory": memory_usage(),
        },
        "Service is healthy",
    )


@router.get("/health/detailed")
async def detailed_health_check(request: Request):
    """Health plus process and runtime facts."""
    container = get_container(request)
    settings = container.settings
    return success(
        request,
        {
            "status": "healthy",
            "uptime": uptime_seconds(),
            "version": settings.app_version,
            "environment": settings.environment,
            "memory": memory_usage(),
            "process": {
                "pid": os.getpid(),
                "python": platform.python_version(),
                "platform": platform.platform(),
                "cpuCount": os.cpu_count(),
            },
            "features": {
                "authMode": settings.auth_mode,
                "delay": settings.delay_active,
                "rateLimit": settings.rate_limit_active,
            },
            "data": {
                "users": container.user_repository.count(),
                "collections": container.collection_repository.count(),
                "files": container.file_repository.count(),
            },
        },
        "Detailed health retrieved successfully",
    )


@router.get("/health/ready")
async def readiness_check(request: Request):
    """
    Readiness check endpoint.

    Ready once the in-memory stores have been seeded.
    """
    container = get_container(request)
    checks = {
        "users": container.user_repository.count() > 0,
        "collections": container.collection_repository.count() > 0,
        "files": container.file_repository.count() > 0,
    }
    ready = all(checks.values())
    return success(
        request,
        {"status": "ready" if ready else "not_ready", "checks": checks},
        "Service is ready" if ready else "Service is not ready",
        status_code=200 if ready else 503,
    )


@router.get("/health/live")
async def liveness_check(request: Request):
    return success(request, {"status": "alive", "uptime": uptime_seconds()}, "Service is alive")
