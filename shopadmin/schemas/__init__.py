"""Pydantic schemas for request/response validation."""

from shopadmin.schemas.common import APIResponse, CamelSchema
from shopadmin.schemas.settings import (
    CATEGORY_SCHEMAS,
    MASKED,
    BackupSettings,
    EmailSettings,
    EmailTestRequest,
    GeneralSettings,
    PaymentSettings,
    SecuritySettings,
    SettingsCategory,
    ShippingSettings,
    SMSSettings,
    SmsTestRequest,
    default_settings,
    get_schema,
)
from shopadmin.schemas.template import (
    TemplateCreateRequest,
    TemplatePreviewRequest,
    TemplatePreviewResponse,
    TemplateResponse,
    TemplateStatsResponse,
    TemplateTestRequest,
    TemplateTestResponse,
    TemplateUpdateRequest,
)

__all__ = [
    # Common
    "APIResponse",
    "CamelSchema",
    # Settings
    "CATEGORY_SCHEMAS",
    "MASKED",
    "BackupSettings",
    "EmailSettings",
    "EmailTestRequest",
    "GeneralSettings",
    "PaymentSettings",
    "SecuritySettings",
    "SettingsCategory",
    "ShippingSettings",
    "SMSSettings",
    "SmsTestRequest",
    "default_settings",
    "get_schema",
    # Templates
    "TemplateCreateRequest",
    "TemplatePreviewRequest",
    "TemplatePreviewResponse",
    "TemplateResponse",
    "TemplateStatsResponse",
    "TemplateTestRequest",
    "TemplateTestResponse",
    "TemplateUpdateRequest",
]
