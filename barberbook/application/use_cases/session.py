from __future__ import annotations

import logging
import time

from barberbook.application.exceptions import BookingApiError, BookingApiUnavailableError, SessionRequiredError
from barberbook.application.ports.auth_api import AuthApiPort
from barberbook.application.ports.session_store import SessionStorePort
from barberbook.domain.entities.session import Session


class SessionUseCase:
    """Explicit session lifecycle: login saves, every request loads, logout clears."""

    def __init__(self, auth_api: AuthApiPort, store: SessionStorePort) -> None:
        self._auth_api = auth_api
        self._store = store
        self._logger = logging.getLogger(__name__)

    def login(self, email: str, password: str) -> Session:
        if not email.strip() or not password:
            raise ValueError("Email and password are required")
        try:
            session = self._auth_api.login(email.strip(), password)
        except BookingApiUnavailableError:
            raise
        except BookingApiError as e:
            self._logger.warning("Login rejected", extra={"error": str(e)})
            raise SessionRequiredError(f"Login failed: {e}") from e
        self._store.save(session)
        self._logger.info("Session started", extra={"role": session.role.value})
        return session

    def current(self, token: str | None, now_ts: float | None = None) -> Session:
        if not token:
            raise SessionRequiredError("Not logged in")
        session = self._store.load(token)
        if session is None:
            raise SessionRequiredError("Session not found")
        if _is_expired(session, now_ts if now_ts is not None else time.time()):
            self._store.clear(token)
            raise SessionRequiredError("Session expired")
        return session

    def logout(self, token: str) -> None:
        self._store.clear(token)
        self._logger.info("Session ended")


def _is_expired(session: Session, now_ts: float) -> bool:
    if session.expires_in is None or session.created_at is None:
        return False
    return now_ts >= session.created_at + session.expires_in
