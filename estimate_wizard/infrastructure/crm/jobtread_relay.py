from __future__ import annotations

import logging

from estimate_wizard.application.exceptions import DeliveryError
from estimate_wizard.application.ports.crm import CrmPort
from estimate_wizard.domain.entities.contact import FormContact
from estimate_wizard.infrastructure.wordpress.http_client import WordPressHttpClient


ACCOUNT_CONTACT_PATH = "/create-jobtread-account-contact"


class JobTreadCrmRelay(CrmPort):
    def __init__(self, client: WordPressHttpClient) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    async def create_account_and_contact(self, contact: FormContact) -> str:
        data = await self._client.post(ACCOUNT_CONTACT_PATH, contact.as_fields())
        account_id = data.get("account_id")
        if not account_id:
            self._logger.error("CRM response missing account id", extra={"to_email": contact.email})
            raise DeliveryError("Failed to extract account ID from CRM response")
        self._logger.info("CRM account and contact created", extra={"account_id": account_id})
        return str(account_id)
