"""Routes a settings save to the update operation of its category."""

import logging

from pydantic import ValidationError

from shopadmin.exceptions import ServiceError, validation_errors_from_pydantic
from shopadmin.schemas.settings import SettingsCategory, get_schema

logger = logging.getLogger(__name__)

UPDATE_OPERATIONS: dict[SettingsCategory, str] = {
    SettingsCategory.GENERAL: "update_general_settings",
    SettingsCategory.PAYMENT: "update_payment_settings",
    SettingsCategory.SHIPPING: "update_shipping_settings",
    SettingsCategory.EMAIL: "update_email_settings",
    SettingsCategory.SMS: "update_sms_settings",
    SettingsCategory.SECURITY: "update_security_settings",
    SettingsCategory.BACKUP: "update_backup_settings",
}


def build_payload(category: SettingsCategory | str, form_data: dict) -> dict:
    """Validate a form record against its category and keep only the fields it sets."""
    schema = get_schema(category)
    try:
        record = schema.model_validate(form_data)
    except ValidationError as e:
        details = "; ".join(f"{err['field']}: {err['message']}" for err in validation_errors_from_pydantic(e))
        raise ServiceError(f"Invalid {SettingsCategory(category).value} settings: {details}") from e
    return record.model_dump(by_alias=True, exclude_unset=True, mode="json")


async def dispatch_update(client, category: SettingsCategory | str, form_data: dict) -> dict:
    """Invoke exactly one category-specific update operation on ``client``."""
    category = SettingsCategory(category)
    payload = build_payload(category, form_data)
    operation = getattr(client, UPDATE_OPERATIONS[category])
    logger.debug(f"Dispatching {UPDATE_OPERATIONS[category]} with {len(payload)} fields")
    return await operation(payload)
