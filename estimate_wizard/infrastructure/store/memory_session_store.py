from __future__ import annotations

import uuid

from estimate_wizard.application.ports.session_store import SessionStorePort
from estimate_wizard.application.use_cases.wizard_session import WizardSession


class MemorySessionStore(SessionStorePort):
    def __init__(self, limit: int = 1000) -> None:
        self._sessions: dict[str, WizardSession] = {}
        self._limit = limit

    def add(self, session: WizardSession) -> str:
        session_id = uuid.uuid4().hex
        self._sessions[session_id] = session
        if len(self._sessions) > self._limit:
            oldest = next(iter(self._sessions))
            self._sessions.pop(oldest, None)
        return session_id

    def get(self, session_id: str) -> WizardSession | None:
        return self._sessions.get(session_id)
