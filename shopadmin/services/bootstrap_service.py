"""Bootstrap service for seeding a fresh database."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shopadmin.models.catalog import Category
from shopadmin.schemas.template import TemplateCreateRequest
from shopadmin.services.template_service import get_template_service
from shopadmin.utils.default_templates import DEFAULT_CATEGORIES, SYSTEM_TEMPLATES

logger = logging.getLogger(__name__)


class BootstrapService:
    """Seeds default categories and system templates, skipping existing ones."""

    async def seed_default_categories(self, db: AsyncSession) -> int:
        """Create the default categories whose slug does not exist yet."""
        created = 0
        for data in DEFAULT_CATEGORIES:
            result = await db.execute(select(Category).where(Category.slug == data["slug"]))
            if result.scalar_one_or_none():
                logger.debug(f"Category {data['slug']} already exists, skipping")
                continue

            category = Category(
                name=data["name"],
                slug=data["slug"],
                description=data["description"],
                is_active=True,
            )
            db.add(category)
            created += 1
            logger.info(f"Created category {data['slug']}")

        await db.flush()
        return created

    async def seed_system_templates(self, db: AsyncSession) -> int:
        """Create the system notification templates whose name does not exist yet."""
        template_service = get_template_service()
        created = 0
        for data in SYSTEM_TEMPLATES:
            if await template_service.get_template_by_name(db, data["name"]):
                continue
            await template_service.create_template(
                db,
                TemplateCreateRequest.model_validate(data),
                is_system=True,
            )
            created += 1
        return created


# Singleton instance
_bootstrap_service: BootstrapService | None = None


def get_bootstrap_service() -> BootstrapService:
    """Get the bootstrap service singleton."""
    global _bootstrap_service
    if _bootstrap_service is None:
        _bootstrap_service = BootstrapService()
    return _bootstrap_service
