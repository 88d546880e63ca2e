"""Tests for the settings service."""

import pytest

from shopadmin.exceptions import ValidationException
from shopadmin.schemas.settings import MASKED, SettingsCategory, default_settings
from shopadmin.services.settings_service import SettingsService


@pytest.fixture
def service():
    return SettingsService()


async def test_unstored_category_returns_defaults(db, service):
    assert await service.get_settings(db, "shipping") == default_settings("shipping")


async def test_update_merges_and_persists(db, service):
    await service.update_settings(db, "general", {"siteName": "Shal Shop"})
    await service.update_settings(db, "general", {"currency": "USD"})

    stored = await service.get_settings(db, SettingsCategory.GENERAL)
    assert stored["siteName"] == "Shal Shop"
    assert stored["currency"] == "USD"


async def test_invalid_update_is_rejected(db, service):
    with pytest.raises(ValidationException) as exc_info:
        await service.update_settings(db, "payment", {"provider": "paypal"})
    assert exc_info.value.errors[0]["field"] == "provider"


async def test_secrets_are_masked_and_preserved(db, service):
    result = await service.update_settings(
        db, "email", {"smtp": {"host": "smtp.example.com", "password": "s3cret"}, "resendApiKey": ""}
    )
    assert result["smtp"]["password"] == MASKED
    assert result["resendApiKey"] == ""

    # Sending the masked value back keeps the stored secret
    await service.update_settings(db, "email", {"smtp": {**result["smtp"], "host": "mail.example.com"}})
    raw = await service.get_raw_settings(db, "email")
    assert raw["smtp"]["password"] == "s3cret"
    assert raw["smtp"]["host"] == "mail.example.com"


async def test_reset_to_defaults(db, service):
    await service.update_settings(db, "backup", {"retentionDays": 90})
    assert (await service.reset_to_defaults(db, "backup")) == default_settings("backup")


async def test_export_then_import_restores_every_category(db, service):
    await service.update_settings(db, "sms", {"apiKey": "kavenegar-key", "sender": "10004346"})
    await service.update_settings(db, "general", {"siteName": "Before export"})
    document = await service.export_settings(db)

    assert document["version"] == 1
    assert set(document["settings"]) == {c.value for c in SettingsCategory}
    assert document["settings"]["sms"]["apiKey"] == MASKED

    await service.update_settings(db, "general", {"siteName": "After export"})
    await service.import_settings(db, document)

    assert (await service.get_settings(db, "general"))["siteName"] == "Before export"
    assert (await service.get_raw_settings(db, "sms"))["apiKey"] == "kavenegar-key"


async def test_import_rejects_unknown_category_without_writing(db, service):
    await service.update_settings(db, "general", {"siteName": "Keep me"})

    with pytest.raises(ValidationException) as exc_info:
        await service.import_settings(db, {"general": {"siteName": "New"}, "themes": {}})

    assert exc_info.value.errors == [{"field": "themes", "message": "Unknown settings category"}]
    assert (await service.get_settings(db, "general"))["siteName"] == "Keep me"


async def test_import_validates_every_category_before_writing(db, service):
    with pytest.raises(ValidationException) as exc_info:
        await service.import_settings(
            db, {"general": {"siteName": "New"}, "security": {"passwordMinLength": 1}}
        )

    assert exc_info.value.errors[0]["field"] == "security.passwordMinLength"
    assert (await service.get_settings(db, "general"))["siteName"] == default_settings("general")["siteName"]


async def test_import_rejects_non_object(db, service):
    with pytest.raises(ValidationException):
        await service.import_settings(db, ["general"])


async def test_test_email_is_skipped_when_disabled(db, service):
    assert await service.send_test_email(db, "owner@example.com") is None
