"""Tests for the template service and the bootstrap seeding."""

import httpx
import pytest

from shopadmin.exceptions import NotFoundException, ValidationException
from shopadmin.schemas.template import TemplateCreateRequest, TemplateUpdateRequest
from shopadmin.services import sms_service as sms_module
from shopadmin.services.bootstrap_service import BootstrapService
from shopadmin.services.settings_service import get_settings_service
from shopadmin.services.template_service import TemplateService
from shopadmin.utils.default_templates import DEFAULT_CATEGORIES, SYSTEM_TEMPLATES


@pytest.fixture
def service():
    return TemplateService()


def create_request(**overrides) -> TemplateCreateRequest:
    data = {
        "name": "Order shipped",
        "description": "Shipping notice",
        "type": "sms",
        "category": "order",
        "content": "Order {orderNumber} shipped. Tracking: {trackingCode}",
    }
    data.update(overrides)
    return TemplateCreateRequest.model_validate(data)


async def test_create_extracts_variables(db, service):
    template = await service.create_template(db, create_request())
    assert template.variables == ["orderNumber", "trackingCode"]
    assert template.is_system is False


def test_blank_name_is_rejected_by_schema():
    with pytest.raises(ValueError):
        create_request(name="   ")


async def test_filters_combine(db, service):
    await service.create_template(db, create_request())
    await service.create_template(db, create_request(name="Sale", type="email", category="marketing", is_active=False))

    assert [t.name for t in await service.get_templates(db, search="SHIPPING")] == ["Order shipped"]
    assert [t.name for t in await service.get_templates(db, type="email")] == ["Sale"]
    assert [t.name for t in await service.get_templates(db, status="inactive")] == ["Sale"]
    assert len(await service.get_templates(db, type="all", category="all", status="all")) == 2


async def test_search_treats_wildcard_characters_literally(db, service):
    await service.create_template(db, create_request())
    await service.create_template(db, create_request(name="Welcome", description=None))
    await service.create_template(db, create_request(name="50% off_today", description=None))

    assert [t.name for t in await service.get_templates(db, search="%")] == ["50% off_today"]
    assert [t.name for t in await service.get_templates(db, search="_")] == ["50% off_today"]
    assert await service.get_templates(db, search="order_shipped") == []


async def test_partial_update(db, service):
    template = await service.create_template(db, create_request())

    updated = await service.update_template(
        db, template.id, TemplateUpdateRequest.model_validate({"content": "Hi {name}", "variables": None})
    )

    assert updated.name == "Order shipped"
    assert updated.content == "Hi {name}"
    assert updated.variables == ["name"]


async def test_duplicate_clears_system_flag(db, service):
    template = await service.create_template(db, create_request(), is_system=True)

    copy = await service.duplicate_template(db, template.id)

    assert copy.id != template.id
    assert copy.name == "Order shipped (copy)"
    assert copy.is_system is False
    assert copy.content == template.content


async def test_delete_then_get_raises_not_found(db, service):
    template = await service.create_template(db, create_request())
    await service.delete_template(db, template.id)

    with pytest.raises(NotFoundException):
        await service.get_template(db, template.id)


async def test_preview_reports_missing_variables(db, service):
    template = await service.create_template(db, create_request())

    preview = await service.preview_template(db, template.id, {"orderNumber": "1001"})

    assert preview.content == "Order 1001 shipped. Tracking: {trackingCode}"
    assert preview.missing_variables == ["trackingCode"]


async def test_stats(db, service):
    await service.create_template(db, create_request())
    await service.create_template(db, create_request(name="Promo", type="email", category="marketing", is_active=False))

    stats = await service.get_stats(db)

    assert (stats.total, stats.active, stats.inactive, stats.system) == (2, 1, 1, 0)
    assert stats.by_type == {"sms": 1, "email": 1}


async def test_send_test_sms_through_kavenegar(db, service, monkeypatch):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"return": {"status": 200, "message": "OK"}, "entries": []})

    monkeypatch.setattr(sms_module, "_sms_service", sms_module.SmsService(transport=httpx.MockTransport(handler)))
    await get_settings_service().update_settings(
        db, "sms", {"enabled": True, "apiKey": "key-123", "sender": "10004346"}
    )
    template = await service.create_template(db, create_request())

    result = await service.send_test(db, template.id, "09121234567", {"orderNumber": "7", "trackingCode": "TR9"})

    assert result.delivered is True
    assert result.channel == "sms"
    assert requests[0].url.path.endswith("/key-123/sms/send.json")
    assert b"receptor=09121234567" in requests[0].content


async def test_send_test_reports_undelivered_when_channel_disabled(db, service):
    template = await service.create_template(db, create_request(type="email", subject="Hi"))

    result = await service.send_test(db, template.id, "qa@example.com")

    assert result.delivered is False


async def test_send_test_rejects_push_templates(db, service):
    template = await service.create_template(db, create_request(type="push"))

    with pytest.raises(ValidationException):
        await service.send_test(db, template.id, "device-token")


class TestBootstrap:
    async def test_seeding_is_idempotent(self, db):
        bootstrap = BootstrapService()

        assert await bootstrap.seed_default_categories(db) == len(DEFAULT_CATEGORIES)
        assert await bootstrap.seed_system_templates(db) == len(SYSTEM_TEMPLATES)

        assert await bootstrap.seed_default_categories(db) == 0
        assert await bootstrap.seed_system_templates(db) == 0

    async def test_default_category_slugs(self, db):
        assert sorted(c["slug"] for c in DEFAULT_CATEGORIES) == ["cotton", "roosari", "satin", "shal", "silk"]

    async def test_system_templates_are_flagged(self, db):
        await BootstrapService().seed_system_templates(db)
        templates = await TemplateService().get_templates(db)
        assert templates
        assert all(t.is_system for t in templates)
