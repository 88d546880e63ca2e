"""Category-scoped settings state for the admin console.

The store keeps the active category and its editable form record. A record is
loaded when the category changes, mutated locally on every field edit and only
persisted on an explicit :meth:`SettingsStore.submit`.
"""

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from shopadmin.console.dispatcher import dispatch_update
from shopadmin.exceptions import ServiceError
from shopadmin.schemas.settings import SettingsCategory

logger = logging.getLogger(__name__)

Notify = Callable[[str, str], None]


class SettingsStore:
    """Form state and lifecycle of the settings screen."""

    def __init__(
        self,
        client,
        notify: Notify | None = None,
        category: SettingsCategory | str = SettingsCategory.GENERAL,
    ):
        self.client = client
        self.active_category = SettingsCategory(category)
        self.form_data: dict[str, Any] = {}
        self.saving: dict[SettingsCategory, bool] = {c: False for c in SettingsCategory}
        self.loading = False
        self.testing = False
        self.error: str | None = None
        self._notify = notify

    def notify(self, level: str, message: str) -> None:
        if self._notify is not None:
            self._notify(level, message)

    def _fail(self, message: str, exc: Exception) -> None:
        logger.error(f"{message}: {exc}")
        self.error = exc.message if isinstance(exc, ServiceError) else str(exc)
        self.notify("error", self.error)

    @property
    def is_saving(self) -> bool:
        """Whether a save of the active category is in flight."""
        return self.saving[self.active_category]

    async def load(self) -> None:
        """Fetch the record of the active category into the form."""
        self.loading = True
        self.error = None
        try:
            self.form_data = await self.client.get_settings(self.active_category)
        except ServiceError as e:
            self._fail(f"Failed to load {self.active_category.value} settings", e)
        finally:
            self.loading = False

    async def change_category(self, category: SettingsCategory | str) -> None:
        """Switch the active category and load its record."""
        self.active_category = SettingsCategory(category)
        self.form_data = {}
        await self.load()

    def update_field(self, field: str, value: Any) -> None:
        """Set one form field; dotted names address nested records (``smtp.host``)."""
        *parents, leaf = field.split(".")
        record = self.form_data
        for key in parents:
            child = record.get(key)
            if not isinstance(child, dict):
                child = {}
                record[key] = child
            record = child
        record[leaf] = value

    async def submit(self) -> bool:
        """Persist the form through the category's update operation.

        Returns False without calling the service when a save of the same
        category is already pending.
        """
        category = self.active_category
        if self.saving[category]:
            logger.warning(f"Save of {category.value} settings already in progress")
            return False

        self.saving[category] = True
        self.error = None
        try:
            saved = await dispatch_update(self.client, category, self.form_data)
        except ServiceError as e:
            self._fail(f"Failed to save {category.value} settings", e)
            return False
        finally:
            self.saving[category] = False

        if saved is not None and category == self.active_category:
            self.form_data = saved
        self.notify("success", f"{category.value.capitalize()} settings saved")
        return True

    async def test_email(self, test_email: str) -> bool:
        """Send a test email with the stored email settings."""
        return await self._run_test(self.client.test_email_settings, test_email, "email")

    async def test_sms(self, test_phone: str) -> bool:
        """Send a test SMS with the stored SMS settings."""
        return await self._run_test(self.client.test_sms_settings, test_phone, "SMS")

    async def _run_test(self, operation, destination: str, channel: str) -> bool:
        if not destination.strip():
            self.notify("error", f"Enter a destination for the test {channel}")
            return False

        self.testing = True
        try:
            message = await operation(destination.strip())
        except ServiceError as e:
            self._fail(f"Test {channel} to {destination} failed", e)
            return False
        finally:
            self.testing = False

        self.notify("success", message or f"Test {channel} sent")
        return True

    async def reset_to_defaults(self) -> bool:
        """Reset the active category on the server and reload the form."""
        category = self.active_category
        try:
            self.form_data = await self.client.reset_to_defaults(category)
        except ServiceError as e:
            self._fail(f"Failed to reset {category.value} settings", e)
            return False
        self.notify("success", f"{category.value.capitalize()} settings reset to defaults")
        return True

    async def export_to_file(self, path: str | Path) -> Path | None:
        """Write the exported settings document to ``path``."""
        path = Path(path)
        try:
            document = await self.client.export_settings()
        except ServiceError as e:
            self._fail("Failed to export settings", e)
            return None

        try:
            path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            self._fail(f"Failed to write settings to {path}", e)
            return None

        logger.info(f"Settings exported to {path}")
        self.notify("success", f"Settings exported to {path.name}")
        return path

    async def import_from_file(self, path: str | Path) -> bool:
        """Upload a settings document and reload the active category."""
        path = Path(path)
        try:
            content = path.read_bytes()
        except OSError as e:
            self._fail(f"Failed to read settings from {path}", e)
            return False

        try:
            await self.client.import_settings(path.name, content)
        except ServiceError as e:
            self._fail(f"Failed to import settings from {path.name}", e)
            return False

        self.notify("success", "Settings imported")
        await self.load()
        return True
