from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    CUSTOMER = "CUSTOMER"
    BARBER = "BARBER"
    OWNER = "OWNER"
    ADMIN = "ADMIN"


@dataclass(frozen=True)
class Session:
    token: str
    refresh_token: str | None
    user_id: str
    role: Role
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    expires_in: int | None = None  # seconds, as issued by the API
    created_at: float | None = None
