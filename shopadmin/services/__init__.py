"""Service layer for business logic."""

from shopadmin.services.bootstrap_service import BootstrapService, get_bootstrap_service
from shopadmin.services.email_service import EmailService, get_email_service
from shopadmin.services.settings_service import SettingsService, get_settings_service
from shopadmin.services.sms_service import SmsService, get_sms_service
from shopadmin.services.template_service import TemplateService, get_template_service

__all__ = [
    "BootstrapService",
    "get_bootstrap_service",
    "EmailService",
    "get_email_service",
    "SettingsService",
    "get_settings_service",
    "SmsService",
    "get_sms_service",
    "TemplateService",
    "get_template_service",
]
