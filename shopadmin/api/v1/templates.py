"""Notification template API routes."""

import uuid

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from shopadmin.database import get_db
from shopadmin.schemas.common import APIResponse
from shopadmin.schemas.template import (
    TemplateCreateRequest,
    TemplatePreviewRequest,
    TemplateResponse,
    TemplateTestRequest,
    TemplateUpdateRequest,
)
from shopadmin.services.template_service import get_template_service

router = APIRouter(prefix="/admin/notifications/templates", tags=["Templates"])


def _dump(template) -> dict:
    return TemplateResponse.from_model(template).model_dump(by_alias=True, mode="json")


@router.get("")
async def list_templates(
    search: str | None = Query(None, description="Search in name and description"),
    type: str | None = Query(None, description="Filter by type or 'all'"),
    category: str | None = Query(None, description="Filter by category or 'all'"),
    status: str | None = Query(None, pattern="^(all|active|inactive)$"),
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """List templates with optional filters."""
    service = get_template_service()
    templates = await service.get_templates(
        db,
        search=search,
        type=type,
        category=category,
        status=status,
    )
    return APIResponse(
        status="success",
        data={"templates": [_dump(t) for t in templates], "total": len(templates)},
    )


@router.get("/stats")
async def get_template_stats(
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Get template statistics."""
    service = get_template_service()
    stats = await service.get_stats(db)
    return APIResponse(status="success", data=stats.model_dump(by_alias=True))


@router.post("", status_code=201)
async def create_template(
    request: TemplateCreateRequest,
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Create a template."""
    service = get_template_service()
    template = await service.create_template(db, request)
    return APIResponse(
        status="success",
        data=_dump(template),
        message="Template created successfully",
    )


@router.get("/{template_id}")
async def get_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Get a template by ID."""
    service = get_template_service()
    return APIResponse(status="success", data=_dump(await service.get_template(db, template_id)))


@router.put("/{template_id}")
async def update_template(
    template_id: uuid.UUID,
    request: TemplateUpdateRequest,
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Update a template (partial)."""
    service = get_template_service()
    template = await service.update_template(db, template_id, request)
    return APIResponse(
        status="success",
        data=_dump(template),
        message="Template updated successfully",
    )


@router.delete("/{template_id}")
async def delete_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Permanently delete a template."""
    service = get_template_service()
    await service.delete_template(db, template_id)
    return APIResponse(status="success", message="Template deleted successfully")


@router.post("/{template_id}/duplicate", status_code=201)
async def duplicate_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Copy a template under a new ID."""
    service = get_template_service()
    template = await service.duplicate_template(db, template_id)
    return APIResponse(
        status="success",
        data=_dump(template),
        message="Template duplicated successfully",
    )


@router.post("/{template_id}/preview")
async def preview_template(
    template_id: uuid.UUID,
    request: TemplatePreviewRequest | None = None,
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Render a template with sample values."""
    service = get_template_service()
    preview = await service.preview_template(db, template_id, request.data if request else None)
    return APIResponse(status="success", data=preview.model_dump(by_alias=True))


@router.post("/{template_id}/test")
async def test_template(
    template_id: uuid.UUID,
    request: TemplateTestRequest,
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Send a rendered template to a test destination."""
    service = get_template_service()
    result = await service.send_test(db, template_id, request.destination.strip(), request.data)

    if result.delivered:
        return APIResponse(
            status="success",
            data=result.model_dump(by_alias=True),
            message=f"Test message sent to {result.destination}",
        )
    return JSONResponse(
        status_code=502,
        content={
            "status": "error",
            "message": "Test message was not delivered. Check channel settings and server logs.",
        },
    )
