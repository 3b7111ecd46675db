from __future__ import annotations

import logging
import uuid

from estimate_wizard.application.ports.crm import CrmPort
from estimate_wizard.domain.entities.contact import FormContact


class MockCrm(CrmPort):
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def create_account_and_contact(self, contact: FormContact) -> str:
        account_id = f"mock-{uuid.uuid4().hex[:12]}"
        self._logger.info("Mock CRM account created", extra={"account_id": account_id})
        return account_id
