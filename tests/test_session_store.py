"""
Tests for session persistence and the login/logout lifecycle.
"""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

from barberbook.application.exceptions import SessionRequiredError
from barberbook.application.use_cases.session import SessionUseCase
from barberbook.domain.entities.session import Role, Session
from barberbook.infrastructure.mock.demo_data import CUSTOMER, DEMO_PASSWORD, build_demo_api
from barberbook.infrastructure.store.json_store import JsonSessionStore
from barberbook.infrastructure.store.memory_store import MemorySessionStore

NOW = datetime(2026, 3, 10, 18, 0, tzinfo=timezone.utc)


def _session(token: str = "secret-token") -> Session:
    return Session(
        token=token,
        refresh_token="refresh",
        user_id="barber_1",
        role=Role.BARBER,
        email="marco@example.com",
        first_name="Marco",
        last_name="Reyes",
        expires_in=3600,
        created_at=1_700_000_000.0,
    )


def test_json_store_persistence():
    """A saved session is read back intact by a fresh store on the same directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        JsonSessionStore(data_dir=tmpdir).save(_session())

        restored = JsonSessionStore(data_dir=tmpdir).load("secret-token")

        assert restored == _session()


def test_token_is_not_used_as_file_name():
    with tempfile.TemporaryDirectory() as tmpdir:
        JsonSessionStore(data_dir=tmpdir).save(_session())
        names = os.listdir(tmpdir)
        assert len(names) == 1
        assert "secret-token" not in names[0]


def test_clear_removes_the_session():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonSessionStore(data_dir=tmpdir)
        store.save(_session())
        store.clear("secret-token")
        store.clear("secret-token")

        assert store.load("secret-token") is None


def test_unreadable_file_is_treated_as_missing():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonSessionStore(data_dir=tmpdir)
        store.save(_session())
        path = next(Path(tmpdir).iterdir())
        path.write_text("{not json", encoding="utf-8")

        assert store.load("secret-token") is None


def test_login_saves_and_logout_clears():
    store = MemorySessionStore()
    uc = SessionUseCase(auth_api=build_demo_api(clock=lambda: NOW), store=store)

    session = uc.login(CUSTOMER.email, DEMO_PASSWORD)

    assert session.role is Role.CUSTOMER
    assert session.user_id == CUSTOMER.id
    assert uc.current(session.token, now_ts=NOW.timestamp() + 60) == session

    uc.logout(session.token)
    with pytest.raises(SessionRequiredError):
        uc.current(session.token, now_ts=NOW.timestamp())


def test_expired_session_is_dropped():
    store = MemorySessionStore()
    uc = SessionUseCase(auth_api=build_demo_api(clock=lambda: NOW), store=store)
    session = uc.login(CUSTOMER.email, DEMO_PASSWORD)

    with pytest.raises(SessionRequiredError):
        uc.current(session.token, now_ts=NOW.timestamp() + 3600)
    assert store.load(session.token) is None


def test_bad_credentials_and_missing_token():
    uc = SessionUseCase(auth_api=build_demo_api(), store=MemorySessionStore())

    with pytest.raises(SessionRequiredError):
        uc.login(CUSTOMER.email, "wrong")
    with pytest.raises(ValueError):
        uc.login("  ", DEMO_PASSWORD)
    with pytest.raises(SessionRequiredError):
        uc.current(None)


if __name__ == "__main__":
    test_json_store_persistence()
    test_token_is_not_used_as_file_name()
    test_clear_removes_the_session()
    test_unreadable_file_is_treated_as_missing()
    print("All tests passed!")
