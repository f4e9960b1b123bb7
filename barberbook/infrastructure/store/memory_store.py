from __future__ import annotations

from barberbook.application.ports.session_store import SessionStorePort
from barberbook.domain.entities.session import Session


class MemorySessionStore(SessionStorePort):
    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    def load(self, token: str) -> Session | None:
        return self._sessions.get(token)

    def save(self, session: Session) -> None:
        self._sessions[session.token] = session

    def clear(self, token: str) -> None:
        self._sessions.pop(token, None)
