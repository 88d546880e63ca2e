"""Tests for the settings store and the category update dispatcher."""

import asyncio
import json

import pytest

from shopadmin.console.dispatcher import UPDATE_OPERATIONS, build_payload, dispatch_update
from shopadmin.console.settings_store import SettingsStore
from shopadmin.exceptions import ServiceError
from shopadmin.schemas.settings import SettingsCategory


class TestDispatcher:
    @pytest.mark.parametrize("category", list(SettingsCategory))
    async def test_each_category_calls_exactly_one_operation(self, fake_client, category):
        await dispatch_update(fake_client, category, {})

        update_calls = [call for call in fake_client.calls if call[0].startswith("update_")]
        assert update_calls == [(UPDATE_OPERATIONS[category], {})]

    def test_payload_only_contains_fields_present_in_the_form(self):
        payload = build_payload("general", {"siteName": "Shal Shop", "maintenanceMode": True, "unknown": 1})
        assert payload == {"siteName": "Shal Shop", "maintenanceMode": True}

    def test_nested_records_keep_their_wire_names(self):
        payload = build_payload("email", {"smtp": {"host": "smtp.example.com", "port": 465}})
        assert payload == {"smtp": {"host": "smtp.example.com", "port": 465}}

    def test_invalid_form_is_rejected_before_sending(self):
        with pytest.raises(ServiceError) as exc_info:
            build_payload("shipping", {"shippingRate": -5})
        assert "shippingRate" in exc_info.value.message


class TestSettingsStore:
    async def test_change_category_loads_its_record(self, fake_client):
        store = SettingsStore(fake_client)

        await store.change_category("payment")

        assert store.active_category is SettingsCategory.PAYMENT
        assert store.form_data["provider"] == "zarinpal"
        assert fake_client.called("get_settings") == [("get_settings", SettingsCategory.PAYMENT)]

    async def test_update_field_then_submit(self, fake_client):
        notices = []
        store = SettingsStore(fake_client, notify=lambda level, message: notices.append(level))
        await store.load()

        store.update_field("siteName", "Roosari World")
        assert fake_client.called("update_general_settings") == []

        assert await store.submit() is True
        assert fake_client.settings["general"]["siteName"] == "Roosari World"
        assert store.saving[SettingsCategory.GENERAL] is False
        assert store.error is None
        assert notices == ["success"]

    async def test_update_field_with_dotted_name(self, fake_client):
        store = SettingsStore(fake_client, category="email")
        await store.load()

        store.update_field("smtp.host", "mail.example.com")
        store.update_field("templates.orderShipped.enabled", False)

        assert store.form_data["smtp"]["host"] == "mail.example.com"
        assert store.form_data["templates"]["orderShipped"]["enabled"] is False

    async def test_failed_submit_records_error_and_clears_saving(self, fake_client):
        fake_client.failures["update_general_settings"] = ServiceError("Database unavailable", 500)
        notices = []
        store = SettingsStore(fake_client, notify=lambda level, message: notices.append((level, message)))

        assert await store.submit() is False
        assert store.error == "Database unavailable"
        assert store.saving[SettingsCategory.GENERAL] is False
        assert notices == [("error", "Database unavailable")]

    async def test_second_submit_is_refused_while_one_is_pending(self, fake_client):
        store = SettingsStore(fake_client)
        await store.load()

        first, second = await asyncio.gather(store.submit(), store.submit())

        assert sorted([first, second]) == [False, True]
        assert len(fake_client.called("update_general_settings")) == 1

    async def test_test_email_requires_destination(self, fake_client):
        notices = []
        store = SettingsStore(fake_client, notify=lambda level, message: notices.append(level))

        assert await store.test_email("  ") is False
        assert fake_client.called("test_email_settings") == []
        assert notices == ["error"]

        assert await store.test_email("owner@example.com") is True
        assert fake_client.called("test_email_settings") == [("test_email_settings", "owner@example.com")]
        assert store.testing is False

    async def test_test_sms_failure(self, fake_client):
        fake_client.failures["test_sms_settings"] = ServiceError("Failed to send test SMS", 502)
        store = SettingsStore(fake_client, category="sms")

        assert await store.test_sms("09121234567") is False
        assert store.error == "Failed to send test SMS"

    async def test_reset_to_defaults(self, fake_client):
        fake_client.settings["backup"]["retentionDays"] = 90
        store = SettingsStore(fake_client, category="backup")
        await store.load()

        assert await store.reset_to_defaults() is True
        assert store.form_data["retentionDays"] == 30

    async def test_export_and_import_through_a_file(self, fake_client, tmp_path):
        store = SettingsStore(fake_client)
        target = tmp_path / "settings.json"

        assert await store.export_to_file(target) == target
        document = json.loads(target.read_text(encoding="utf-8"))
        assert set(document["settings"]) == {c.value for c in SettingsCategory}

        document["settings"]["general"]["siteName"] = "Imported"
        target.write_text(json.dumps(document), encoding="utf-8")

        assert await store.import_from_file(target) is True
        assert fake_client.called("import_settings") == [("import_settings", "settings.json")]
        assert store.form_data["siteName"] == "Imported"

    async def test_import_of_a_missing_file_is_reported(self, fake_client, tmp_path):
        notices = []
        store = SettingsStore(fake_client, notify=lambda level, message: notices.append((level, message)))

        assert await store.import_from_file(tmp_path / "missing.json") is False
        assert fake_client.called("import_settings") == []
        assert store.error
        assert notices[0][0] == "error"

    async def test_export_to_an_unwritable_path_is_reported(self, fake_client, tmp_path):
        notices = []
        store = SettingsStore(fake_client, notify=lambda level, message: notices.append((level, message)))

        assert await store.export_to_file(tmp_path / "no-such-dir" / "settings.json") is None
        assert store.error
        assert [level for level, _ in notices] == ["error"]
