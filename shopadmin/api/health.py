"""Health check endpoint for load balancers and uptime monitors."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse, Response

from shopadmin import database
from shopadmin.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@router.options("/health", include_in_schema=False)
async def health_preflight() -> Response:
    """Answer CORS preflight requests."""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.get("/health")
async def health_check() -> JSONResponse:
    """Report service health and database connectivity."""
    try:
        await database.check_database()
    except Exception as e:
        logger.error(f"Health check error: {e}")
        return JSONResponse(
            status_code=500,
            headers=CORS_HEADERS,
            content={
                "status": "error",
                "message": str(e) or type(e).__name__,
                "timestamp": _timestamp(),
            },
        )

    return JSONResponse(
        status_code=200,
        headers=CORS_HEADERS,
        content={
            "status": "healthy",
            "timestamp": _timestamp(),
            "platform": settings.app_platform,
            "mongoStatus": "connected",
            "environment": settings.app_env,
        },
    )
