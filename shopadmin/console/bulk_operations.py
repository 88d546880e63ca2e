"""Delete, activate and deactivate a selection of templates in one action."""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable

from shopadmin.console.template_repository import TemplateRepository
from shopadmin.exceptions import ServiceError
from shopadmin.schemas.template import TemplateResponse

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool | Awaitable[bool]]


class BulkOperationCoordinator:
    """Selection set plus the bulk actions that consume it.

    Calls for the selected templates are issued concurrently and the first
    rejection aborts the action. The selection is cleared once an action
    completes or is cancelled; it is kept when an action fails.
    """

    def __init__(
        self,
        repository: TemplateRepository,
        confirm: Confirm | None = None,
        notify: Callable[[str, str], None] | None = None,
    ):
        self.repository = repository
        self._confirm = confirm
        self._notify = notify
        self._selected: dict[str, None] = {}

    @property
    def selected(self) -> list[str]:
        return list(self._selected)

    def is_selected(self, template_id: str) -> bool:
        return template_id in self._selected

    def select(self, template_id: str) -> None:
        self._selected[template_id] = None

    def deselect(self, template_id: str) -> None:
        self._selected.pop(template_id, None)

    def toggle(self, template_id: str, selected: bool) -> None:
        if selected:
            self.select(template_id)
        else:
            self.deselect(template_id)

    def select_all(self, templates: Iterable[TemplateResponse]) -> None:
        """Replace the selection with every template of ``templates``."""
        self._selected = {t.id: None for t in templates}

    def clear_selection(self) -> None:
        self._selected = {}

    async def _ask(self, message: str) -> bool:
        if self._confirm is None:
            return True
        answer = self._confirm(message)
        if inspect.isawaitable(answer):
            answer = await answer
        return bool(answer)

    async def _refresh(self) -> None:
        try:
            await self.repository.refresh()
        except ServiceError:
            # already logged by the repository
            pass

    async def bulk_delete(self) -> bool:
        """Delete every selected template after confirmation."""
        if not self._selected:
            return False

        ids = self.selected
        if not await self._ask(f"Are you sure you want to delete {len(ids)} templates?"):
            self.clear_selection()
            return False

        client = self.repository.client
        try:
            await asyncio.gather(*(client.delete_template(template_id) for template_id in ids))
        except ServiceError as e:
            logger.error(f"Bulk delete of {len(ids)} templates failed: {e.message}")
            await self._refresh()
            return False

        self.clear_selection()
        logger.info(f"Deleted {len(ids)} templates")
        if self._notify is not None:
            self._notify("success", f"{len(ids)} templates deleted")
        await self._refresh()
        return True

    async def bulk_set_active(self, is_active: bool) -> bool:
        """Activate or deactivate every selected template."""
        if not self._selected:
            return False

        client = self.repository.client
        updates = []
        for template_id in self.selected:
            template = self.repository.get(template_id)
            if template is None:
                continue
            payload = template.model_dump(by_alias=True, mode="json")
            payload["isActive"] = is_active
            updates.append(client.update_template(template_id, payload))

        try:
            await asyncio.gather(*updates)
        except ServiceError as e:
            logger.error(f"Bulk status change failed: {e.message}")
            await self._refresh()
            return False

        self.clear_selection()
        state = "activated" if is_active else "deactivated"
        logger.info(f"{len(updates)} templates {state}")
        if self._notify is not None:
            self._notify("success", f"{len(updates)} templates {state}")
        await self._refresh()
        return True
