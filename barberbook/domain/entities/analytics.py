from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class TimeRange:
    key: str  # "today", "this_week", "this_month", "last_30_days", "last_3_months", "custom"
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class ServiceStat:
    name: str
    count: int
    revenue: Decimal


@dataclass(frozen=True)
class BookingStats:
    total: int
    completed: int
    cancelled: int
    pending: int
    revenue: Decimal
    average_price: Decimal
    success_rate: float  # percent of total that completed
    top_services: list[ServiceStat] = field(default_factory=list)


@dataclass(frozen=True)
class ShopStats:
    shop_id: str
    shop_name: str
    stats: BookingStats
