from __future__ import annotations

import hashlib
import json
import logging
import threading
from pathlib import Path
from typing import Any

from barberbook.application.ports.session_store import SessionStorePort
from barberbook.domain.entities.session import Role, Session


class JsonSessionStore(SessionStorePort):
    def __init__(self, data_dir: str = "./data/sessions") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # guards the locks dict
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, key: str) -> threading.Lock:
        with self._lock_lock:
            if key not in self._locks:
                self._locks[key] = threading.Lock()
            return self._locks[key]

    def _get_file_path(self, key: str) -> Path:
        return self._data_dir / f"{key}.json"

    @staticmethod
    def _key(token: str) -> str:
        """Tokens never hit the filesystem as file names."""
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    def load(self, token: str) -> Session | None:
        key = self._key(token)
        with self._get_lock(key):
            file_path = self._get_file_path(key)
            if not file_path.exists():
                return None
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                self._logger.warning("Discarding unreadable session file", extra={"error": str(e)})
                return None
            return self._deserialize(data)

    def save(self, session: Session) -> None:
        key = self._key(session.token)
        with self._get_lock(key):
            file_path = self._get_file_path(key)
            temp_path = file_path.with_suffix(".json.tmp")
            try:
                with open(temp_path, "w", encoding="utf-8") as f:
                    json.dump(self._serialize(session), f, indent=2, ensure_ascii=False)
                temp_path.replace(file_path)
            except Exception:
                if temp_path.exists():
                    temp_path.unlink()
                raise

    def clear(self, token: str) -> None:
        key = self._key(token)
        with self._get_lock(key):
            self._get_file_path(key).unlink(missing_ok=True)

    def _serialize(self, session: Session) -> dict[str, Any]:
        return {
            "token": session.token,
            "refresh_token": session.refresh_token,
            "user_id": session.user_id,
            "role": session.role.value,
            "email": session.email,
            "first_name": session.first_name,
            "last_name": session.last_name,
            "expires_in": session.expires_in,
            "created_at": session.created_at,
            "version": 1,
        }

    def _deserialize(self, data: dict[str, Any]) -> Session | None:
        try:
            role = Role(data.get("role"))
        except ValueError:
            return None
        if not data.get("token") or not data.get("user_id"):
            return None
        return Session(
            token=data["token"],
            refresh_token=data.get("refresh_token"),
            user_id=data["user_id"],
            role=role,
            email=data.get("email") or "",
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            expires_in=data.get("expires_in"),
            created_at=data.get("created_at"),
        )
