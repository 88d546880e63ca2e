"""Template list and statistics held by the console, backed by the template service."""

import logging

from shopadmin.exceptions import ServiceError
from shopadmin.schemas.template import (
    TemplatePreviewResponse,
    TemplateResponse,
    TemplateStatsResponse,
    TemplateTestResponse,
)

logger = logging.getLogger(__name__)


class TemplateRepository:
    """Local copy of the template list.

    Mutations go to the service first and the list and statistics are
    refetched after each success; nothing is changed locally on failure.
    """

    def __init__(self, client):
        self.client = client
        self.templates: list[TemplateResponse] = []
        self.stats = TemplateStatsResponse()
        self.loading = False
        self.error: str | None = None

    async def refresh(self) -> list[TemplateResponse]:
        """Reload the template list and the statistics."""
        self.loading = True
        try:
            self.templates = await self.client.get_templates()
            self.stats = await self.client.get_template_stats()
            self.error = None
        except ServiceError as e:
            logger.error(f"Failed to load templates: {e.message}")
            self.error = e.message
            raise
        finally:
            self.loading = False
        return self.templates

    def get(self, template_id: str) -> TemplateResponse | None:
        return next((t for t in self.templates if t.id == template_id), None)

    async def create(self, data: dict) -> TemplateResponse:
        try:
            template = await self.client.create_template(data)
        except ServiceError as e:
            logger.error(f"Failed to create template: {e.message}")
            raise
        await self.refresh()
        return template

    async def update(self, template_id: str, data: dict) -> TemplateResponse:
        try:
            template = await self.client.update_template(template_id, data)
        except ServiceError as e:
            logger.error(f"Failed to update template {template_id}: {e.message}")
            raise
        await self.refresh()
        return template

    async def delete(self, template_id: str) -> None:
        try:
            await self.client.delete_template(template_id)
        except ServiceError as e:
            logger.error(f"Failed to delete template {template_id}: {e.message}")
            raise
        await self.refresh()

    async def duplicate(self, template_id: str) -> TemplateResponse:
        try:
            template = await self.client.duplicate_template(template_id)
        except ServiceError as e:
            logger.error(f"Failed to duplicate template {template_id}: {e.message}")
            raise
        await self.refresh()
        return template

    async def preview(self, template_id: str, data: dict[str, str] | None = None) -> TemplatePreviewResponse:
        try:
            return await self.client.preview_template(template_id, data)
        except ServiceError as e:
            logger.error(f"Failed to preview template {template_id}: {e.message}")
            raise

    async def test(self, template_id: str, destination: str) -> TemplateTestResponse:
        try:
            return await self.client.test_template(template_id, destination)
        except ServiceError as e:
            logger.error(f"Failed to send test of template {template_id}: {e.message}")
            raise
