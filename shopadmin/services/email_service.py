"""Email service supporting SMTP and Resend providers.

Email configuration is the ``email`` settings category, stored in the
system_settings table and managed at runtime via the admin settings screen.
"""

import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path
from typing import Any

import aiosmtplib
import resend
from jinja2 import Environment, FileSystemLoader, select_autoescape

from shopadmin.config import get_settings
from shopadmin.schemas.settings import EmailSettings

logger = logging.getLogger(__name__)
settings = get_settings()


class EmailService:
    """Service for sending transactional emails via SMTP or Resend."""

    def __init__(self):
        """Initialize the email service."""
        templates_path = Path(__file__).parent.parent / "templates" / "emails"
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(templates_path)),
            autoescape=select_autoescape(["html", "xml"]),
        )

    def _render_template(self, template_name: str, context: dict[str, Any]) -> str:
        """Render an email template with the given context."""
        template = self.jinja_env.get_template(template_name)
        return template.render(**context)

    async def _send_via_smtp(
        self,
        config: EmailSettings,
        from_address: str,
        recipients: list[str],
        subject: str,
        html_body: str,
        reply_to: str | None,
    ) -> str:
        """Send email via SMTP."""
        msg = MIMEMultipart("alternative")
        msg["From"] = from_address
        msg["To"] = ", ".join(recipients)
        msg["Subject"] = subject

        if reply_to:
            msg["Reply-To"] = reply_to

        msg.attach(MIMEText(html_body, "html", "utf-8"))

        smtp = config.smtp

        # Port 465 = implicit SSL, anything else = STARTTLS when secure
        if smtp.port == 465:
            tls_kwargs = {"use_tls": True, "start_tls": False}
        else:
            tls_kwargs = {"use_tls": False, "start_tls": smtp.secure}

        await aiosmtplib.send(
            msg,
            hostname=smtp.host,
            port=smtp.port,
            username=smtp.username or None,
            password=smtp.password or None,
            recipients=recipients,
            timeout=30,
            **tls_kwargs,
        )

        return f"smtp-{id(msg)}"

    async def _send_via_resend(
        self,
        config: EmailSettings,
        from_address: str,
        recipients: list[str],
        subject: str,
        html_body: str,
        reply_to: str | None,
    ) -> str:
        """Send email via Resend."""
        resend.api_key = config.resend_api_key

        params: dict[str, Any] = {
            "from": from_address,
            "to": recipients,
            "subject": subject,
            "html": html_body,
        }

        if reply_to:
            params["reply_to"] = reply_to

        result = resend.Emails.send(params)
        return result.get("id", "resend-ok")

    async def send(
        self,
        config: EmailSettings,
        to: str | list[str],
        subject: str,
        template_name: str,
        context: dict[str, Any],
    ) -> str | None:
        """Send an email using a Jinja2 template.

        Returns a message ID string if successful, None if failed or not configured.
        """
        if not config.enabled:
            logger.warning("Email not configured or disabled, skipping send")
            return None

        provider = config.provider

        try:
            html_body = self._render_template(template_name, context)

            sender_name = config.from_name or settings.email_from_name
            from_email = config.from_email or settings.email_from_address
            from_address = f"{sender_name} <{from_email}>"
            reply_to = config.reply_to_email or None

            recipients = to if isinstance(to, list) else [to]

            if provider == "resend":
                result_id = await self._send_via_resend(
                    config, from_address, recipients, subject, html_body, reply_to,
                )
            else:
                result_id = await self._send_via_smtp(
                    config, from_address, recipients, subject, html_body, reply_to,
                )

            logger.info(f"Email sent via {provider} to {recipients}: {result_id}")
            return result_id

        except Exception as e:
            logger.error(f"Failed to send email via {provider} to {to}: {e}")
            return None

    async def send_settings_test(self, config: EmailSettings, to: str) -> str | None:
        """Send a test email to verify the current email settings."""
        return await self.send(
            config,
            to=to,
            subject=f"{settings.app_name} test email",
            template_name="settings_test.html",
            context={
                "app_name": settings.app_name,
                "provider": config.provider,
                "footer_text": config.footer_text,
            },
        )

    async def send_notification(
        self,
        config: EmailSettings,
        to: str,
        subject: str,
        body: str,
    ) -> str | None:
        """Send a rendered notification template."""
        return await self.send(
            config,
            to=to,
            subject=subject,
            template_name="notification.html",
            context={
                "subject": subject,
                "body": body,
                "app_name": settings.app_name,
                "footer_text": config.footer_text,
            },
        )


# Singleton instance
_email_service: EmailService | None = None


def get_email_service() -> EmailService:
    """Get the email service singleton."""
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service
