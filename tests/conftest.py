"""Shared fixtures: in-memory database, API client and template factory."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("APP_ENV", "development")

import asyncio
import copy
import json
import uuid
from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from shopadmin.database import get_db
from shopadmin.main import app
from shopadmin.models import Base
from shopadmin.schemas.settings import SettingsCategory, default_settings
from shopadmin.schemas.template import (
    TemplatePreviewResponse,
    TemplateResponse,
    TemplateStatsResponse,
    TemplateTestResponse,
)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_template():
    """Build console-side template records."""

    def _make(**overrides) -> TemplateResponse:
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        data = {
            "_id": str(uuid.uuid4()),
            "name": "Order confirmation",
            "description": "Sent after checkout",
            "type": "email",
            "category": "order",
            "subject": "Order {orderNumber}",
            "content": "Dear {name}, thanks for your order.",
            "variables": ["orderNumber", "name"],
            "isActive": True,
            "isSystem": False,
            "createdAt": now,
            "updatedAt": now,
        }
        data.update(overrides)
        return TemplateResponse.model_validate(data)

    return _make


class FakeAdminClient:
    """In-memory stand-in for :class:`AdminAPIClient`.

    ``failures`` maps an operation name, or an ``(operation, template_id)``
    pair, to the ``ServiceError`` it should raise.
    """

    def __init__(self, templates=()):
        self.templates = {t.id: t for t in templates}
        self.settings = {c.value: default_settings(c) for c in SettingsCategory}
        self.calls: list[tuple] = []
        self.failures: dict = {}

    async def _call(self, name, *args):
        self.calls.append((name, *args))
        await asyncio.sleep(0)
        error = self.failures.get(name)
        if error is None and args and isinstance(args[0], str):
            error = self.failures.get((name, args[0]))
        if error is not None:
            raise error

    def add(self, *templates):
        for template in templates:
            self.templates[template.id] = template
        return self

    def called(self, name) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]

    # Settings

    async def get_settings(self, category):
        category = SettingsCategory(category)
        await self._call("get_settings", category)
        return copy.deepcopy(self.settings[category.value])

    async def _update(self, category: SettingsCategory, data: dict):
        await self._call(f"update_{category.value}_settings", data)
        self.settings[category.value] = {**self.settings[category.value], **data}
        return copy.deepcopy(self.settings[category.value])

    async def update_general_settings(self, data):
        return await self._update(SettingsCategory.GENERAL, data)

    async def update_payment_settings(self, data):
        return await self._update(SettingsCategory.PAYMENT, data)

    async def update_shipping_settings(self, data):
        return await self._update(SettingsCategory.SHIPPING, data)

    async def update_email_settings(self, data):
        return await self._update(SettingsCategory.EMAIL, data)

    async def update_sms_settings(self, data):
        return await self._update(SettingsCategory.SMS, data)

    async def update_security_settings(self, data):
        return await self._update(SettingsCategory.SECURITY, data)

    async def update_backup_settings(self, data):
        return await self._update(SettingsCategory.BACKUP, data)

    async def reset_to_defaults(self, category):
        category = SettingsCategory(category)
        await self._call("reset_to_defaults", category)
        self.settings[category.value] = default_settings(category)
        return copy.deepcopy(self.settings[category.value])

    async def test_email_settings(self, test_email):
        await self._call("test_email_settings", test_email)
        return f"Test email sent to {test_email}"

    async def test_sms_settings(self, test_phone):
        await self._call("test_sms_settings", test_phone)
        return f"Test SMS sent to {test_phone}"

    async def export_settings(self):
        await self._call("export_settings")
        return {"version": 1, "exportedAt": "2026-01-01T00:00:00+00:00", "settings": copy.deepcopy(self.settings)}

    async def import_settings(self, filename, content):
        await self._call("import_settings", filename)
        document = json.loads(content)
        self.settings.update(document.get("settings", document))
        return copy.deepcopy(self.settings)

    # Templates

    async def get_templates(self, filters=None):
        await self._call("get_templates")
        return list(self.templates.values())

    async def get_template_stats(self):
        await self._call("get_template_stats")
        templates = list(self.templates.values())
        active = sum(1 for t in templates if t.is_active)
        return TemplateStatsResponse(total=len(templates), active=active, inactive=len(templates) - active)

    def _build(self, template_id, data):
        now = datetime.now(timezone.utc)
        data = {key: value for key, value in data.items() if value is not None}
        record = {"isActive": True, "createdAt": now, **data, "_id": template_id, "updatedAt": now}
        return TemplateResponse.model_validate(record)

    async def create_template(self, data):
        await self._call("create_template", data)
        template = self._build(str(uuid.uuid4()), data)
        self.templates[template.id] = template
        return template

    async def update_template(self, template_id, data):
        await self._call("update_template", template_id, data)
        current = self.templates[template_id].model_dump(by_alias=True)
        template = self._build(template_id, {**current, **data})
        self.templates[template_id] = template
        return template

    async def delete_template(self, template_id):
        await self._call("delete_template", template_id)
        del self.templates[template_id]

    async def duplicate_template(self, template_id):
        await self._call("duplicate_template", template_id)
        source = self.templates[template_id].model_dump(by_alias=True)
        template = self._build(str(uuid.uuid4()), {**source, "name": f"{source['name']} (copy)", "isSystem": False})
        self.templates[template.id] = template
        return template

    async def preview_template(self, template_id, data=None):
        await self._call("preview_template", template_id, data)
        template = self.templates[template_id]
        return TemplatePreviewResponse(subject=template.subject, content=template.content)

    async def test_template(self, template_id, destination, data=None):
        await self._call("test_template", template_id, destination)
        template = self.templates[template_id]
        return TemplateTestResponse(destination=destination, channel=template.type.value, delivered=True)


@pytest.fixture
def fake_client():
    return FakeAdminClient()
