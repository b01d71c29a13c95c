"""
API information endpoint.
"""

from fastapi import APIRouter, Depends, Request

from shared.responses import success

from ..dependencies import get_container
from ..middleware.rate_limit import rate_limit

router = APIRouter()

RESOURCES = ("auth", "users", "collections", "files", "search", "billing")


@router.get("", dependencies=[Depends(rate_limit("standard"))])
async def api_info(request: Request):
    settings = get_container(request).settings
    return success(
        request,
        {
            "name": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "endpoints": {name: f"{settings.api_prefix}/{name}" for name in RESOURCES},
            "health": "/health",
        },
        "API information retrieved successfully",
    )
