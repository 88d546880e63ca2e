"""Per-category settings schemas.

Settings are a tagged union keyed by :class:`SettingsCategory`; each category
has its own concrete model, resolved through :data:`CATEGORY_SCHEMAS`.
"""

from enum import Enum
from typing import Literal

from pydantic import EmailStr, Field

from shopadmin.schemas.common import CamelSchema

MASKED = "********"


class SettingsCategory(str, Enum):
    """The seven settings domains of the back-office."""

    GENERAL = "general"
    PAYMENT = "payment"
    SHIPPING = "shipping"
    EMAIL = "email"
    SMS = "sms"
    SECURITY = "security"
    BACKUP = "backup"


class GeneralSettings(CamelSchema):
    site_name: str = "Shal & Roosari"
    site_description: str = ""
    site_url: str = ""
    contact_email: str = ""
    contact_phone: str = ""
    currency: str = "IRR"
    timezone: str = "Asia/Tehran"
    language: str = "fa"
    maintenance_mode: bool = False
    maintenance_reason: str = ""


class PaymentSettings(CamelSchema):
    provider: Literal["zarinpal", "idpay", "payping"] = "zarinpal"
    merchant_id: str = ""
    api_key: str = ""
    sandbox: bool = True
    currency: str = "IRR"
    min_order_amount: int = Field(0, ge=0)


class ShippingSettings(CamelSchema):
    free_shipping_threshold: int = Field(0, ge=0)
    shipping_rate: int = Field(0, ge=0)
    express_shipping_rate: int = Field(0, ge=0)
    processing_days: int = Field(2, ge=0)
    allow_pickup: bool = False


class SmtpSettings(CamelSchema):
    host: str = ""
    port: int = Field(587, ge=1, le=65535)
    secure: bool = False
    username: str = ""
    password: str = ""


class EmailMessageTemplate(CamelSchema):
    enabled: bool = True
    subject: str = ""
    content: str = ""


class EmailTemplates(CamelSchema):
    order_confirmation: EmailMessageTemplate = EmailMessageTemplate(
        subject="Order {orderNumber} confirmed",
        content="Dear {name}, your order {orderNumber} has been received.",
    )
    order_shipped: EmailMessageTemplate = EmailMessageTemplate(
        subject="Order {orderNumber} shipped",
        content="Dear {name}, your order {orderNumber} is on its way. Tracking code: {trackingCode}",
    )
    order_delivered: EmailMessageTemplate = EmailMessageTemplate(
        subject="Order {orderNumber} delivered",
        content="Dear {name}, your order {orderNumber} has been delivered.",
    )
    password_reset: EmailMessageTemplate = EmailMessageTemplate(
        subject="Reset your password",
        content="Dear {name}, use this link to reset your password: {resetLink}",
    )
    welcome_email: EmailMessageTemplate = EmailMessageTemplate(
        subject="Welcome to {siteName}",
        content="Dear {name}, welcome to {siteName}.",
    )


class EmailSettings(CamelSchema):
    provider: Literal["smtp", "resend"] = "smtp"
    enabled: bool = False
    smtp: SmtpSettings = SmtpSettings()
    resend_api_key: str = ""
    from_email: str = ""
    from_name: str = "Shal & Roosari"
    reply_to_email: str = ""
    templates: EmailTemplates = EmailTemplates()
    footer_text: str = ""


class SmsMessageTemplate(CamelSchema):
    enabled: bool = True
    content: str = ""


class SmsTemplates(CamelSchema):
    order_confirmation: SmsMessageTemplate = SmsMessageTemplate(
        content="Order {orderNumber} confirmed.",
    )
    order_shipped: SmsMessageTemplate = SmsMessageTemplate(
        content="Order {orderNumber} shipped. Tracking: {trackingCode}",
    )
    password_reset: SmsMessageTemplate = SmsMessageTemplate(
        content="Password reset code: {code}",
    )
    verification_code: SmsMessageTemplate = SmsMessageTemplate(
        content="Verification code: {code}",
    )


class SMSSettings(CamelSchema):
    provider: Literal["kavenegar", "ghasedak", "ippanel", "melipayamak"] = "kavenegar"
    enabled: bool = False
    api_key: str = ""
    sender: str = ""
    templates: SmsTemplates = SmsTemplates()


class SecuritySettings(CamelSchema):
    two_factor_auth: bool = False
    password_min_length: int = Field(8, ge=4, le=128)
    session_timeout_minutes: int = Field(60, ge=1)
    max_login_attempts: int = Field(5, ge=1)
    ip_whitelist: list[str] = []


class BackupSettings(CamelSchema):
    auto_backup: bool = False
    backup_interval: Literal["daily", "weekly", "monthly"] = "daily"
    retention_days: int = Field(30, ge=1)
    include_uploads: bool = True


CATEGORY_SCHEMAS: dict[SettingsCategory, type[CamelSchema]] = {
    SettingsCategory.GENERAL: GeneralSettings,
    SettingsCategory.PAYMENT: PaymentSettings,
    SettingsCategory.SHIPPING: ShippingSettings,
    SettingsCategory.EMAIL: EmailSettings,
    SettingsCategory.SMS: SMSSettings,
    SettingsCategory.SECURITY: SecuritySettings,
    SettingsCategory.BACKUP: BackupSettings,
}

# Wire paths of values that are masked on read and preserved when sent back masked
SECRET_FIELDS: dict[SettingsCategory, tuple[tuple[str, ...], ...]] = {
    SettingsCategory.PAYMENT: (("apiKey",),),
    SettingsCategory.EMAIL: (("smtp", "password"), ("resendApiKey",)),
    SettingsCategory.SMS: (("apiKey",),),
}


def get_schema(category: SettingsCategory | str) -> type[CamelSchema]:
    """Resolve the settings model of a category."""
    return CATEGORY_SCHEMAS[SettingsCategory(category)]


def default_settings(category: SettingsCategory | str) -> dict:
    """Default record of a category, in wire (camelCase) form."""
    return get_schema(category)().model_dump(by_alias=True, mode="json")


class EmailTestRequest(CamelSchema):
    test_email: EmailStr


class SmsTestRequest(CamelSchema):
    test_phone: str = Field(..., min_length=5, max_length=20)
