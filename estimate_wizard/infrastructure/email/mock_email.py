from __future__ import annotations

import logging

from estimate_wizard.application.ports.email_delivery import EmailDeliveryPort
from estimate_wizard.domain.entities.contact import FormContact


class MockEmailDelivery(EmailDeliveryPort):
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def send_confirmation_email(self, to_email: str, to_name: str, html_body: str, subject: str) -> None:
        self._logger.info("Mock confirmation email", extra={"to_email": to_email, "subject": subject})

    async def send_internal_notification(self, contact: FormContact, breakdown_html: str) -> None:
        self._logger.info("Mock marketing notification", extra={"to_email": contact.email})
