from __future__ import annotations

from abc import ABC, abstractmethod

from estimate_wizard.domain.entities.contact import FormContact


class CrmPort(ABC):
    @abstractmethod
    async def create_account_and_contact(self, contact: FormContact) -> str:
        """Create (or upsert) a CRM account with its contact. Returns account_id."""
        raise NotImplementedError
