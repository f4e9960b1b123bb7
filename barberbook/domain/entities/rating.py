from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class RatedType(str, Enum):
    USER = "USER"
    BARBER = "BARBER"
    BARBERSHOP = "BARBERSHOP"


@dataclass(frozen=True)
class Rating:
    id: str
    rating: int  # 1..5
    comment: str | None
    rater_id: str | None
    rater_name: str = ""
    created_at: datetime | None = None
