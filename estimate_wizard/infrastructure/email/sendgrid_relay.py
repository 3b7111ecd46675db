from __future__ import annotations

import logging
from typing import Any

from estimate_wizard.application.ports.email_delivery import EmailDeliveryPort
from estimate_wizard.application.utils.email_html import compose_notification_html, compose_notification_subject
from estimate_wizard.core.config import settings
from estimate_wizard.domain.entities.contact import FormContact
from estimate_wizard.infrastructure.wordpress.http_client import WordPressHttpClient


SEND_EMAIL_PATH = "/send-email"


class WordPressEmailRelay(EmailDeliveryPort):
    """Sends SendGrid-shaped payloads through the plugin's /send-email endpoint."""

    def __init__(
        self,
        client: WordPressHttpClient,
        from_address: str | None = None,
        from_name: str | None = None,
        notification_from_name: str | None = None,
        marketing_address: str | None = None,
        marketing_name: str | None = None,
    ) -> None:
        self._client = client
        self._from_address = from_address or settings.EMAIL_FROM_ADDRESS
        self._from_name = from_name or settings.EMAIL_FROM_NAME
        self._notification_from_name = notification_from_name or settings.NOTIFICATION_FROM_NAME
        self._marketing_address = marketing_address or settings.MARKETING_EMAIL_ADDRESS
        self._marketing_name = marketing_name or settings.MARKETING_EMAIL_NAME
        self._logger = logging.getLogger(__name__)

    async def send_confirmation_email(self, to_email: str, to_name: str, html_body: str, subject: str) -> None:
        payload = _sendgrid_payload(
            to_email=to_email,
            to_name=to_name,
            subject=subject,
            from_email=self._from_address,
            from_name=self._from_name,
            html=html_body,
        )
        await self._client.post(SEND_EMAIL_PATH, payload)
        self._logger.info("Confirmation email sent", extra={"to_email": to_email})

    async def send_internal_notification(self, contact: FormContact, breakdown_html: str) -> None:
        payload = _sendgrid_payload(
            to_email=self._marketing_address,
            to_name=self._marketing_name,
            subject=compose_notification_subject(contact),
            from_email=self._from_address,
            from_name=self._notification_from_name,
            html=compose_notification_html(contact, breakdown_html),
        )
        await self._client.post(SEND_EMAIL_PATH, payload)
        self._logger.info("Marketing notification sent", extra={"to_email": self._marketing_address})


def _sendgrid_payload(
    to_email: str,
    to_name: str,
    subject: str,
    from_email: str,
    from_name: str,
    html: str,
) -> dict[str, Any]:
    return {
        "personalizations": [
            {
                "to": [{"email": to_email, "name": to_name}],
                "subject": subject,
            }
        ],
        "from": {"email": from_email, "name": from_name},
        "content": [{"type": "text/html", "value": html}],
    }
