"""Controller of the template management screen."""

import inspect
import logging
from collections.abc import Callable
from typing import Any, Literal

from shopadmin.config import get_settings
from shopadmin.console.bulk_operations import BulkOperationCoordinator, Confirm
from shopadmin.console.template_filters import FilterState
from shopadmin.console.template_repository import TemplateRepository
from shopadmin.exceptions import ServiceError
from shopadmin.schemas.template import TemplatePreviewResponse, TemplateResponse

logger = logging.getLogger(__name__)
settings = get_settings()

EDITOR_FIELDS = ("name", "description", "type", "category", "subject", "content", "variables", "isActive")


def empty_template_form() -> dict[str, Any]:
    return {
        "name": "",
        "description": "",
        "type": "email",
        "category": "order",
        "subject": "",
        "content": "",
        "variables": None,
        "isActive": True,
    }


class TemplateEditorForm:
    """Create/edit modal state for a single template."""

    def __init__(self):
        self.open = False
        self.mode: Literal["create", "edit"] = "create"
        self.template_id: str | None = None
        self.data: dict[str, Any] = empty_template_form()

    def open_create(self) -> None:
        self.open = True
        self.mode = "create"
        self.template_id = None
        self.data = empty_template_form()

    def open_edit(self, template: TemplateResponse) -> None:
        wire = template.model_dump(by_alias=True, mode="json")
        self.open = True
        self.mode = "edit"
        self.template_id = template.id
        self.data = {key: wire.get(key) for key in EDITOR_FIELDS}

    def close(self) -> None:
        self.open = False
        self.template_id = None
        self.data = empty_template_form()

    def update_field(self, field: str, value: Any) -> None:
        self.data[field] = value

    @property
    def is_valid(self) -> bool:
        """``name`` and ``content`` are required and may not be blank."""
        return bool((self.data.get("name") or "").strip() and (self.data.get("content") or "").strip())


class TemplateManager:
    """Ties the repository, filters, selection and editor form together.

    Failures of individual actions are logged, reported through ``notify``
    and leave the screen state untouched.
    """

    def __init__(
        self,
        client,
        confirm: Confirm | None = None,
        notify: Callable[[str, str], None] | None = None,
    ):
        self.repository = TemplateRepository(client)
        self.filters = FilterState()
        self.bulk = BulkOperationCoordinator(self.repository, confirm=confirm, notify=notify)
        self.editor = TemplateEditorForm()
        self.preview: TemplatePreviewResponse | None = None
        self._confirm = confirm
        self._notify = notify

    def notify(self, level: str, message: str) -> None:
        if self._notify is not None:
            self._notify(level, message)

    def _sync(self) -> None:
        self.filters.set_templates(self.repository.templates)

    @property
    def filtered_templates(self) -> list[TemplateResponse]:
        self._sync_if_stale()
        return self.filters.filtered

    def _sync_if_stale(self) -> None:
        if self.filters.templates is not self.repository.templates:
            self._sync()

    async def load(self) -> bool:
        try:
            await self.repository.refresh()
        except ServiceError as e:
            self.notify("error", e.message)
            return False
        self._sync()
        return True

    def select_all(self, checked: bool = True) -> None:
        """Select every template of the current filtered view, or clear the selection."""
        if checked:
            self.bulk.select_all(self.filtered_templates)
        else:
            self.bulk.clear_selection()

    async def save(self) -> bool:
        """Submit the editor form; the form stays open when saving fails."""
        if not self.editor.is_valid:
            self.notify("error", "Name and content are required")
            return False

        data = dict(self.editor.data)
        try:
            if self.editor.mode == "create":
                await self.repository.create(data)
                message = "Template created"
            else:
                await self.repository.update(self.editor.template_id, data)
                message = "Template updated"
        except ServiceError as e:
            self.notify("error", e.message)
            return False

        self.editor.close()
        self._sync()
        self.notify("success", message)
        return True

    async def _ask(self, message: str) -> bool:
        if self._confirm is None:
            return True
        answer = self._confirm(message)
        if inspect.isawaitable(answer):
            answer = await answer
        return bool(answer)

    async def delete(self, template_id: str) -> bool:
        if not await self._ask("Are you sure you want to delete this template?"):
            return False
        try:
            await self.repository.delete(template_id)
        except ServiceError as e:
            self.notify("error", e.message)
            return False
        self.bulk.deselect(template_id)
        self._sync()
        self.notify("success", "Template deleted")
        return True

    async def duplicate(self, template_id: str) -> TemplateResponse | None:
        try:
            template = await self.repository.duplicate(template_id)
        except ServiceError as e:
            self.notify("error", e.message)
            return None
        self._sync()
        self.notify("success", "Template duplicated")
        return template

    async def show_preview(self, template_id: str, data: dict[str, str] | None = None) -> TemplatePreviewResponse | None:
        try:
            self.preview = await self.repository.preview(template_id, data)
        except ServiceError as e:
            self.notify("error", e.message)
            return None
        return self.preview

    async def send_test(self, template_id: str, destination: str | None = None) -> bool:
        destination = destination or settings.template_test_recipient
        try:
            await self.repository.test(template_id, destination)
        except ServiceError as e:
            self.notify("error", e.message)
            return False
        self.notify("success", f"Test sent to {destination}")
        return True

    async def bulk_delete(self) -> bool:
        done = await self.bulk.bulk_delete()
        self._sync()
        return done

    async def bulk_set_active(self, is_active: bool) -> bool:
        done = await self.bulk.bulk_set_active(is_active)
        self._sync()
        return done
