from __future__ import annotations

from abc import ABC, abstractmethod

from estimate_wizard.domain.entities.contact import FormContact


class EmailDeliveryPort(ABC):
    @abstractmethod
    async def send_confirmation_email(self, to_email: str, to_name: str, html_body: str, subject: str) -> None:
        """Deliver the confirmation email. Raises DeliveryError on failure."""
        raise NotImplementedError

    @abstractmethod
    async def send_internal_notification(self, contact: FormContact, breakdown_html: str) -> None:
        """Notify the operational inbox about a new lead. Raises DeliveryError on failure."""
        raise NotImplementedError
