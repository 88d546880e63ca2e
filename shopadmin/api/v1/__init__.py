"""API v1 router aggregator."""

from fastapi import APIRouter

from shopadmin.api.v1 import settings, templates

api_router = APIRouter(tags=["API v1"])

# Include all API routers
api_router.include_router(settings.router)
api_router.include_router(templates.router)
