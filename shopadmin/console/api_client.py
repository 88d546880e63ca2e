"""HTTP client for the admin settings and template services."""

import logging
from typing import Any

import httpx

from shopadmin.config import get_settings
from shopadmin.exceptions import ServiceError
from shopadmin.schemas.settings import SettingsCategory
from shopadmin.schemas.template import (
    TemplatePreviewResponse,
    TemplateResponse,
    TemplateStatsResponse,
    TemplateTestResponse,
)

logger = logging.getLogger(__name__)
settings = get_settings()

SETTINGS_PATH = "/admin/settings"
TEMPLATES_PATH = "/admin/notifications/templates"


class AdminAPIClient:
    """Async wrapper around the admin API.

    Every method returns the ``data`` part of the response envelope and raises
    :class:`ServiceError` for a non-2xx response or a transport failure.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.admin_api_base_url
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.admin_api_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "AdminAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ServiceError(f"Could not reach the admin service: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error:
            message = body.get("message") if isinstance(body, dict) else None
            logger.warning(f"{method} {path} rejected with {response.status_code}: {message}")
            raise ServiceError(
                message or f"Request failed with status {response.status_code}",
                status_code=response.status_code,
            )
        return body

    async def _data(self, method: str, path: str, **kwargs) -> Any:
        body = await self._request(method, path, **kwargs)
        return body.get("data") if isinstance(body, dict) else None

    # Settings service

    async def get_all_settings(self) -> dict[str, dict]:
        return await self._data("GET", SETTINGS_PATH)

    async def get_settings(self, category: SettingsCategory | str) -> dict:
        return await self._data("GET", f"{SETTINGS_PATH}/{SettingsCategory(category).value}")

    async def _update_settings(self, category: SettingsCategory, data: dict) -> dict:
        return await self._data("PUT", f"{SETTINGS_PATH}/{category.value}", json=data)

    async def update_general_settings(self, data: dict) -> dict:
        return await self._update_settings(SettingsCategory.GENERAL, data)

    async def update_payment_settings(self, data: dict) -> dict:
        return await self._update_settings(SettingsCategory.PAYMENT, data)

    async def update_shipping_settings(self, data: dict) -> dict:
        return await self._update_settings(SettingsCategory.SHIPPING, data)

    async def update_email_settings(self, data: dict) -> dict:
        return await self._update_settings(SettingsCategory.EMAIL, data)

    async def update_sms_settings(self, data: dict) -> dict:
        return await self._update_settings(SettingsCategory.SMS, data)

    async def update_security_settings(self, data: dict) -> dict:
        return await self._update_settings(SettingsCategory.SECURITY, data)

    async def update_backup_settings(self, data: dict) -> dict:
        return await self._update_settings(SettingsCategory.BACKUP, data)

    async def reset_to_defaults(self, category: SettingsCategory | str) -> dict:
        return await self._data("POST", f"{SETTINGS_PATH}/{SettingsCategory(category).value}/reset")

    async def test_email_settings(self, test_email: str) -> str | None:
        body = await self._request("POST", f"{SETTINGS_PATH}/email/test", json={"testEmail": test_email})
        return body.get("message")

    async def test_sms_settings(self, test_phone: str) -> str | None:
        body = await self._request("POST", f"{SETTINGS_PATH}/sms/test", json={"testPhone": test_phone})
        return body.get("message")

    async def export_settings(self) -> dict:
        """Download the settings document (not wrapped in an envelope)."""
        return await self._request("GET", f"{SETTINGS_PATH}/export")

    async def import_settings(self, filename: str, content: bytes) -> dict[str, dict]:
        files = {"file": (filename, content, "application/json")}
        return await self._data("POST", f"{SETTINGS_PATH}/import", files=files)

    # Template service

    async def get_templates(self, filters: dict[str, str] | None = None) -> list[TemplateResponse]:
        params = {
            key: value
            for key, value in (filters or {}).items()
            if value and value != "all"
        }
        data = await self._data("GET", TEMPLATES_PATH, params=params)
        return [TemplateResponse.model_validate(t) for t in data["templates"]]

    async def get_template_stats(self) -> TemplateStatsResponse:
        return TemplateStatsResponse.model_validate(await self._data("GET", f"{TEMPLATES_PATH}/stats"))

    async def create_template(self, data: dict) -> TemplateResponse:
        return TemplateResponse.model_validate(await self._data("POST", TEMPLATES_PATH, json=data))

    async def update_template(self, template_id: str, data: dict) -> TemplateResponse:
        return TemplateResponse.model_validate(
            await self._data("PUT", f"{TEMPLATES_PATH}/{template_id}", json=data)
        )

    async def delete_template(self, template_id: str) -> None:
        await self._request("DELETE", f"{TEMPLATES_PATH}/{template_id}")

    async def duplicate_template(self, template_id: str) -> TemplateResponse:
        return TemplateResponse.model_validate(
            await self._data("POST", f"{TEMPLATES_PATH}/{template_id}/duplicate")
        )

    async def preview_template(
        self, template_id: str, data: dict[str, str] | None = None
    ) -> TemplatePreviewResponse:
        return TemplatePreviewResponse.model_validate(
            await self._data("POST", f"{TEMPLATES_PATH}/{template_id}/preview", json={"data": data or {}})
        )

    async def test_template(
        self, template_id: str, destination: str, data: dict[str, str] | None = None
    ) -> TemplateTestResponse:
        return TemplateTestResponse.model_validate(
            await self._data(
                "POST",
                f"{TEMPLATES_PATH}/{template_id}/test",
                json={"destination": destination, "data": data or {}},
            )
        )
