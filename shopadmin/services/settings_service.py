"""Settings service for the category-scoped admin settings."""

import copy
import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shopadmin.exceptions import ValidationException, validation_errors_from_pydantic
from shopadmin.models.system_settings import SystemSettings
from shopadmin.schemas.settings import (
    MASKED,
    SECRET_FIELDS,
    EmailSettings,
    SettingsCategory,
    SMSSettings,
    default_settings,
    get_schema,
)
from shopadmin.services.email_service import get_email_service
from shopadmin.services.sms_service import get_sms_service

logger = logging.getLogger(__name__)

EXPORT_VERSION = 1


def _get_path(record: dict, path: tuple[str, ...]) -> Any:
    value: Any = record
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _set_path(record: dict, path: tuple[str, ...], value: Any) -> None:
    target = record
    for key in path[:-1]:
        if not isinstance(target.get(key), dict):
            return
        target = target[key]
    if path[-1] in target:
        target[path[-1]] = value


class SettingsService:
    """Service for reading, updating and transferring settings per category."""

    async def _get_row(
        self, db: AsyncSession, category: SettingsCategory
    ) -> SystemSettings | None:
        result = await db.execute(
            select(SystemSettings).where(SystemSettings.key == category.value)
        )
        return result.scalar_one_or_none()

    def _validate(self, category: SettingsCategory, record: dict) -> dict:
        """Validate a record against its category schema, returning wire form."""
        try:
            model = get_schema(category).model_validate(record)
        except ValidationError as e:
            raise ValidationException(validation_errors_from_pydantic(e))
        return model.model_dump(by_alias=True, mode="json")

    def mask_secrets(self, category: SettingsCategory, record: dict) -> dict:
        """Return a copy of ``record`` with secret values masked."""
        masked = copy.deepcopy(record)
        for path in SECRET_FIELDS.get(category, ()):
            if _get_path(masked, path):
                _set_path(masked, path, MASKED)
        return masked

    def _restore_secrets(self, category: SettingsCategory, incoming: dict, stored: dict) -> None:
        """Replace masked placeholders sent back by the client with stored secrets."""
        for path in SECRET_FIELDS.get(category, ()):
            if _get_path(incoming, path) == MASKED:
                _set_path(incoming, path, _get_path(stored, path) or "")

    async def get_raw_settings(self, db: AsyncSession, category: SettingsCategory | str) -> dict:
        """Get the stored record of a category (secrets included)."""
        category = SettingsCategory(category)
        row = await self._get_row(db, category)
        if not row:
            return default_settings(category)
        # Stored rows may predate new fields; re-validating fills in defaults
        return self._validate(category, row.value)

    async def get_settings(self, db: AsyncSession, category: SettingsCategory | str) -> dict:
        """Get a category's settings with secrets masked."""
        category = SettingsCategory(category)
        return self.mask_secrets(category, await self.get_raw_settings(db, category))

    async def get_all_settings(self, db: AsyncSession) -> dict[str, dict]:
        """Get every category's settings with secrets masked."""
        return {
            category.value: await self.get_settings(db, category)
            for category in SettingsCategory
        }

    async def _store(self, db: AsyncSession, category: SettingsCategory, record: dict) -> None:
        row = await self._get_row(db, category)
        if row:
            row.value = record
        else:
            db.add(SystemSettings(key=category.value, value=record))
        await db.flush()

    async def update_settings(
        self,
        db: AsyncSession,
        category: SettingsCategory | str,
        changes: dict,
    ) -> dict:
        """Apply a partial update to a category.

        Top-level fields in ``changes`` replace the stored ones; nested records
        (such as ``smtp``) are replaced as a whole.
        """
        category = SettingsCategory(category)
        stored = await self.get_raw_settings(db, category)

        merged = {**stored, **copy.deepcopy(changes)}
        self._restore_secrets(category, merged, stored)
        record = self._validate(category, merged)

        await self._store(db, category, record)
        logger.info(f"Updated {category.value} settings: {sorted(changes)}")
        return self.mask_secrets(category, record)

    async def reset_to_defaults(self, db: AsyncSession, category: SettingsCategory | str) -> dict:
        """Replace a category's settings with its defaults."""
        category = SettingsCategory(category)
        record = default_settings(category)
        await self._store(db, category, record)
        logger.info(f"Reset {category.value} settings to defaults")
        return self.mask_secrets(category, record)

    async def export_settings(self, db: AsyncSession) -> dict:
        """Build the downloadable settings document (secrets masked)."""
        return {
            "version": EXPORT_VERSION,
            "exportedAt": datetime.now(timezone.utc).isoformat(),
            "settings": await self.get_all_settings(db),
        }

    async def import_settings(self, db: AsyncSession, document: Any) -> dict[str, dict]:
        """Replace all settings with the contents of an exported document.

        Accepts either the export envelope or a bare ``{category: record}``
        mapping. Categories missing from the document are reset to their
        defaults; nothing is merged with the current values except secrets
        that were exported masked.
        """
        if not isinstance(document, dict):
            raise ValidationException("Settings file must contain a JSON object")

        incoming = document.get("settings", document)
        if not isinstance(incoming, dict):
            raise ValidationException("Settings file has no settings object")

        known = {category.value for category in SettingsCategory}
        unknown = sorted(key for key in incoming if key not in known and key not in ("version", "exportedAt"))
        if unknown:
            raise ValidationException(
                [{"field": key, "message": "Unknown settings category"} for key in unknown]
            )

        # Validate everything before writing anything
        records: dict[SettingsCategory, dict] = {}
        errors: list[dict] = []
        for category in SettingsCategory:
            record = copy.deepcopy(incoming.get(category.value) or {})
            if not isinstance(record, dict):
                errors.append({"field": category.value, "message": "Must be an object"})
                continue
            stored = await self.get_raw_settings(db, category)
            self._restore_secrets(category, record, stored)
            try:
                records[category] = self._validate(category, record)
            except ValidationException as e:
                errors.extend(
                    {"field": f"{category.value}.{err['field']}", "message": err["message"]}
                    for err in e.errors
                )
        if errors:
            raise ValidationException(errors)

        for category, record in records.items():
            await self._store(db, category, record)

        logger.info("Imported settings for all categories")
        return {
            category.value: self.mask_secrets(category, record)
            for category, record in records.items()
        }

    async def send_test_email(self, db: AsyncSession, to: str) -> str | None:
        """Send a test email with the stored email settings."""
        config = EmailSettings.model_validate(
            await self.get_raw_settings(db, SettingsCategory.EMAIL)
        )
        return await get_email_service().send_settings_test(config, to)

    async def send_test_sms(self, db: AsyncSession, to_phone: str) -> dict | None:
        """Send a test SMS with the stored SMS settings."""
        config = SMSSettings.model_validate(
            await self.get_raw_settings(db, SettingsCategory.SMS)
        )
        return await get_sms_service().send_settings_test(config, to_phone)


# Singleton instance
_settings_service: SettingsService | None = None


def get_settings_service() -> SettingsService:
    """Get the settings service singleton."""
    global _settings_service
    if _settings_service is None:
        _settings_service = SettingsService()
    return _settings_service
