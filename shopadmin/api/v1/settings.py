"""Admin settings API routes (one resource per settings category)."""

import json
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Body, Depends, File, UploadFile
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from shopadmin.database import get_db
from shopadmin.exceptions import ValidationException
from shopadmin.schemas.common import APIResponse
from shopadmin.schemas.settings import EmailTestRequest, SettingsCategory, SmsTestRequest
from shopadmin.services.settings_service import get_settings_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/settings", tags=["Settings"])


@router.get("")
async def get_all_settings(
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Get the settings of every category (secrets masked)."""
    service = get_settings_service()
    return APIResponse(status="success", data=await service.get_all_settings(db))


@router.get("/export")
async def export_settings(
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Download all settings as a JSON document."""
    service = get_settings_service()
    document = await service.export_settings(db)
    filename = f"settings-{datetime.now(timezone.utc):%Y%m%d-%H%M%S}.json"
    return JSONResponse(
        content=document,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import")
async def import_settings(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Replace all settings with an uploaded JSON document."""
    raw = await file.read()
    try:
        document = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValidationException([{"field": "file", "message": f"Invalid JSON: {e}"}])

    service = get_settings_service()
    imported = await service.import_settings(db, document)
    logger.info(f"Settings imported from {file.filename}")

    return APIResponse(
        status="success",
        data=imported,
        message="Settings imported successfully",
    )


@router.post("/email/test")
async def test_email_settings(
    body: EmailTestRequest,
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Send a test email with the stored email settings."""
    service = get_settings_service()
    result = await service.send_test_email(db, body.test_email.strip())

    if result:
        return APIResponse(status="success", message=f"Test email sent to {body.test_email}")
    return JSONResponse(
        status_code=502,
        content={
            "status": "error",
            "message": "Failed to send test email. Check settings and server logs.",
        },
    )


@router.post("/sms/test")
async def test_sms_settings(
    body: SmsTestRequest,
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Send a test SMS with the stored SMS settings."""
    service = get_settings_service()
    result = await service.send_test_sms(db, body.test_phone.strip())

    if result:
        return APIResponse(status="success", message=f"Test SMS sent to {body.test_phone}")
    return JSONResponse(
        status_code=502,
        content={
            "status": "error",
            "message": "Failed to send test SMS. Check settings and server logs.",
        },
    )


@router.get("/{category}")
async def get_category_settings(
    category: SettingsCategory,
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Get one category's settings (secrets masked)."""
    service = get_settings_service()
    return APIResponse(status="success", data=await service.get_settings(db, category))


@router.put("/{category}")
async def update_category_settings(
    category: SettingsCategory,
    changes: dict = Body(...),
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Apply a partial update to one category."""
    service = get_settings_service()
    data = await service.update_settings(db, category, changes)
    return APIResponse(
        status="success",
        data=data,
        message=f"{category.value.capitalize()} settings saved successfully",
    )


@router.post("/{category}/reset")
async def reset_category_settings(
    category: SettingsCategory,
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Reset one category to its defaults."""
    service = get_settings_service()
    data = await service.reset_to_defaults(db, category)
    return APIResponse(
        status="success",
        data=data,
        message=f"{category.value.capitalize()} settings reset to defaults",
    )
