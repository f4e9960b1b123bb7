from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset(
    {BookingStatus.COMPLETED, BookingStatus.CANCELLED, BookingStatus.NO_SHOW}
)


@dataclass(frozen=True)
class PartyRef:
    """Customer or barber as embedded in a booking."""

    id: str
    first_name: str = ""
    last_name: str = ""
    email: str | None = None
    phone: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class ShopRef:
    id: str
    name: str = ""
    city: str | None = None


@dataclass(frozen=True)
class ServiceSnapshot:
    id: str
    name: str
    price: Decimal
    duration_minutes: int
    is_active: bool = True
    description: str | None = None
    category: str | None = None


@dataclass(frozen=True)
class Booking:
    id: str
    start_time: datetime
    end_time: datetime
    status: BookingStatus
    total_price: Decimal
    customer: PartyRef
    barber: PartyRef
    shop: ShopRef
    service: ServiceSnapshot
    notes: str | None = None
    cancel_reason: str | None = None  # only set when status is CANCELLED
    created_at: datetime | None = None
    updated_at: datetime | None = None
