"""Template service for notification template CRUD, preview and test sends."""

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shopadmin.exceptions import NotFoundException, ValidationException
from shopadmin.models.notification_template import NotificationTemplate, TemplateType
from shopadmin.schemas.settings import EmailSettings, SettingsCategory, SMSSettings
from shopadmin.schemas.template import (
    TemplateCreateRequest,
    TemplatePreviewResponse,
    TemplateStatsResponse,
    TemplateTestResponse,
    TemplateUpdateRequest,
)
from shopadmin.services.email_service import get_email_service
from shopadmin.services.settings_service import get_settings_service
from shopadmin.services.sms_service import get_sms_service
from shopadmin.utils.placeholders import extract_variables, render_placeholders

logger = logging.getLogger(__name__)

COPY_SUFFIX = " (copy)"

# Columns that may not be set to NULL through a partial update
_REQUIRED_FIELDS = {"name", "content", "type", "category", "is_active"}


class TemplateService:
    """Service for managing notification templates."""

    async def get_templates(
        self,
        db: AsyncSession,
        search: str | None = None,
        type: str | None = None,
        category: str | None = None,
        status: str | None = None,
    ) -> list[NotificationTemplate]:
        """List templates with optional filters ('all' disables a filter)."""
        query = select(NotificationTemplate)

        if type and type != "all":
            query = query.where(NotificationTemplate.type == type)
        if category and category != "all":
            query = query.where(NotificationTemplate.category == category)
        if status == "active":
            query = query.where(NotificationTemplate.is_active.is_(True))
        elif status == "inactive":
            query = query.where(NotificationTemplate.is_active.is_(False))
        if search:
            query = query.where(
                NotificationTemplate.name.icontains(search, autoescape=True)
                | NotificationTemplate.description.icontains(search, autoescape=True)
            )

        query = query.order_by(
            NotificationTemplate.created_at.desc(),
            NotificationTemplate.id.desc(),
        )

        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_template(self, db: AsyncSession, template_id: uuid.UUID) -> NotificationTemplate:
        """Get a template by ID."""
        template = await db.get(NotificationTemplate, template_id)
        if not template:
            raise NotFoundException("Template")
        return template

    async def get_template_by_name(self, db: AsyncSession, name: str) -> NotificationTemplate | None:
        """Get a template by its exact name."""
        result = await db.execute(
            select(NotificationTemplate).where(NotificationTemplate.name == name)
        )
        return result.scalars().first()

    async def create_template(
        self,
        db: AsyncSession,
        data: TemplateCreateRequest,
        is_system: bool = False,
    ) -> NotificationTemplate:
        """Create a new template.

        When ``variables`` is omitted they are extracted from subject and
        content in order of first appearance.
        """
        variables = data.variables
        if variables is None:
            variables = extract_variables(data.subject, data.content)

        template = NotificationTemplate(
            name=data.name.strip(),
            description=data.description,
            type=data.type.value,
            category=data.category.value,
            subject=data.subject,
            content=data.content,
            variables=variables,
            is_active=data.is_active,
            is_system=is_system,
        )
        db.add(template)
        await db.flush()

        logger.info(f"Created template {template.id} ({template.name})")
        return template

    async def update_template(
        self,
        db: AsyncSession,
        template_id: uuid.UUID,
        data: TemplateUpdateRequest,
    ) -> NotificationTemplate:
        """Apply a partial update to a template."""
        template = await self.get_template(db, template_id)

        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None and field in _REQUIRED_FIELDS:
                continue
            if field == "variables" and value is None:
                value = extract_variables(
                    changes.get("subject", template.subject),
                    changes.get("content") or template.content,
                )
            if field in ("type", "category"):
                value = value.value
            if field == "name":
                value = value.strip()
            setattr(template, field, value)

        await db.flush()

        logger.info(f"Updated template {template.id}: {sorted(changes)}")
        return template

    async def delete_template(self, db: AsyncSession, template_id: uuid.UUID) -> None:
        """Permanently delete a template."""
        template = await self.get_template(db, template_id)
        await db.delete(template)
        await db.flush()
        logger.info(f"Deleted template {template_id}")

    async def duplicate_template(
        self, db: AsyncSession, template_id: uuid.UUID
    ) -> NotificationTemplate:
        """Copy a template under a new identity; the copy is never a system template."""
        source = await self.get_template(db, template_id)

        copy = NotificationTemplate(
            name=f"{source.name}{COPY_SUFFIX}",
            description=source.description,
            type=source.type,
            category=source.category,
            subject=source.subject,
            content=source.content,
            variables=list(source.variables or []),
            is_active=source.is_active,
            is_system=False,
        )
        db.add(copy)
        await db.flush()

        logger.info(f"Duplicated template {template_id} as {copy.id}")
        return copy

    async def preview_template(
        self,
        db: AsyncSession,
        template_id: uuid.UUID,
        data: dict[str, str] | None = None,
    ) -> TemplatePreviewResponse:
        """Render a template's subject and content with sample values."""
        template = await self.get_template(db, template_id)
        data = data or {}

        subject, missing_subject = render_placeholders(template.subject, data)
        content, missing_content = render_placeholders(template.content, data)
        missing = missing_subject + [v for v in missing_content if v not in missing_subject]

        return TemplatePreviewResponse(
            subject=subject,
            content=content,
            missing_variables=missing,
        )

    async def send_test(
        self,
        db: AsyncSession,
        template_id: uuid.UUID,
        destination: str,
        data: dict[str, str] | None = None,
    ) -> TemplateTestResponse:
        """Render a template and deliver it to ``destination`` over its channel."""
        template = await self.get_template(db, template_id)
        preview = await self.preview_template(db, template_id, data)
        settings_service = get_settings_service()

        if template.type == TemplateType.EMAIL.value:
            config = EmailSettings.model_validate(
                await settings_service.get_raw_settings(db, SettingsCategory.EMAIL)
            )
            result = await get_email_service().send_notification(
                config,
                to=destination,
                subject=preview.subject or template.name,
                body=preview.content,
            )
        elif template.type == TemplateType.SMS.value:
            config = SMSSettings.model_validate(
                await settings_service.get_raw_settings(db, SettingsCategory.SMS)
            )
            result = await get_sms_service().send(config, destination, preview.content)
        else:
            raise ValidationException(
                f"Test delivery is not supported for {template.type} templates"
            )

        logger.info(f"Test send of template {template_id} to {destination}: delivered={bool(result)}")
        return TemplateTestResponse(
            destination=destination,
            channel=template.type,
            delivered=bool(result),
        )

    async def get_stats(self, db: AsyncSession) -> TemplateStatsResponse:
        """Count templates overall, by status, by type and by category."""
        by_type = dict(
            (await db.execute(
                select(NotificationTemplate.type, func.count(NotificationTemplate.id))
                .group_by(NotificationTemplate.type)
            )).all()
        )
        by_category = dict(
            (await db.execute(
                select(NotificationTemplate.category, func.count(NotificationTemplate.id))
                .group_by(NotificationTemplate.category)
            )).all()
        )
        active = (await db.execute(
            select(func.count(NotificationTemplate.id))
            .where(NotificationTemplate.is_active.is_(True))
        )).scalar() or 0
        system = (await db.execute(
            select(func.count(NotificationTemplate.id))
            .where(NotificationTemplate.is_system.is_(True))
        )).scalar() or 0

        total = sum(by_type.values())
        return TemplateStatsResponse(
            total=total,
            active=active,
            inactive=total - active,
            system=system,
            by_type=by_type,
            by_category=by_category,
        )


# Singleton instance
_template_service: TemplateService | None = None


def get_template_service() -> TemplateService:
    """Get the template service singleton."""
    global _template_service
    if _template_service is None:
        _template_service = TemplateService()
    return _template_service
