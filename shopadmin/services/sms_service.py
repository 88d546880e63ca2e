"""SMS service using the Kavenegar HTTP API."""

import logging

import httpx

from shopadmin.config import get_settings
from shopadmin.schemas.settings import SMSSettings

logger = logging.getLogger(__name__)
settings = get_settings()


class SmsService:
    """Service for sending SMS messages with the configured provider."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        """Initialize the SMS service."""
        self.api_url = settings.kavenegar_api_url
        self._transport = transport

    def is_configured(self, config: SMSSettings) -> bool:
        """Check if SMS sending is enabled and has credentials."""
        return bool(config.enabled and config.api_key and config.sender)

    async def send(self, config: SMSSettings, to_phone: str, message: str) -> dict | None:
        """
        Send a text message.

        Args:
            config: Current SMS settings
            to_phone: Recipient mobile number (e.g., 09121234567)
            message: Message text

        Returns:
            API response dict or None if failed
        """
        if not self.is_configured(config):
            logger.warning("SMS not configured or disabled, skipping message")
            return None

        if config.provider != "kavenegar":
            logger.warning(f"SMS provider {config.provider} is not supported for sending")
            return None

        url = f"{self.api_url}/{config.api_key}/sms/send.json"
        payload = {
            "receptor": to_phone,
            "sender": config.sender,
            "message": message,
        }

        try:
            async with httpx.AsyncClient(timeout=30.0, transport=self._transport) as client:
                response = await client.post(url, data=payload)

                if response.status_code == 200:
                    result = response.json()
                    logger.info(f"SMS sent to {to_phone}: {result.get('return', {}).get('message')}")
                    return result
                else:
                    logger.error(f"SMS API error: {response.status_code} - {response.text}")
                    return None

        except Exception as e:
            logger.error(f"Failed to send SMS to {to_phone}: {e}")
            return None

    async def send_settings_test(self, config: SMSSettings, to_phone: str) -> dict | None:
        """Send a test SMS to verify the current SMS settings."""
        return await self.send(
            config,
            to_phone,
            f"{settings.app_name}: test message. Your SMS settings are working.",
        )


# Singleton instance
_sms_service: SmsService | None = None


def get_sms_service() -> SmsService:
    """Get the SMS service singleton."""
    global _sms_service
    if _sms_service is None:
        _sms_service = SmsService()
    return _sms_service
