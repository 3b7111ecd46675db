from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from estimate_wizard.application.use_cases.wizard_session import WizardSession


class SessionStorePort(ABC):
    @abstractmethod
    def add(self, session: "WizardSession") -> str:
        """Register a session and return its id."""
        raise NotImplementedError

    @abstractmethod
    def get(self, session_id: str) -> "WizardSession | None":
        raise NotImplementedError
