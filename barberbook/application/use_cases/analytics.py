from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable
from zoneinfo import ZoneInfo

from barberbook.application.ports.booking_api import BookingApiPort
from barberbook.application.ports.marketplace_api import MarketplaceApiPort
from barberbook.application.utils.access import require
from barberbook.application.utils.clock import utc_now
from barberbook.domain.entities.analytics import BookingStats, ServiceStat, ShopStats, TimeRange
from barberbook.domain.entities.booking import Booking, BookingStatus
from barberbook.domain.entities.session import Session
from barberbook.domain.policies.authorization import VIEW, Resource

TIME_RANGE_KEYS = ("today", "this_week", "this_month", "last_30_days", "last_3_months", "custom")
TOP_SERVICES_LIMIT = 5
_CENT = Decimal("0.01")


def _day_start(day: date, tz: ZoneInfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def _day_end(day: date, tz: ZoneInfo) -> datetime:
    return datetime.combine(day, time.max, tzinfo=tz)


def _shift_months(moment: datetime, months: int) -> datetime:
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def resolve_time_range(
    key: str,
    now: datetime,
    tz: ZoneInfo,
    start_date: date | None = None,
    end_date: date | None = None,
) -> TimeRange:
    """
    Bounds for a named reporting window in the business timezone.

    Weeks start on Sunday. Both bounds are inclusive.
    """
    local_now = now.astimezone(tz)
    today = local_now.date()

    if key == "today":
        return TimeRange(key, _day_start(today, tz), _day_end(today, tz))
    if key == "this_week":
        # date.weekday(): Monday == 0, so Sunday is 6
        week_start = today - timedelta(days=(today.weekday() + 1) % 7)
        return TimeRange(key, _day_start(week_start, tz), _day_end(week_start + timedelta(days=6), tz))
    if key == "this_month":
        last_day = calendar.monthrange(today.year, today.month)[1]
        return TimeRange(
            key,
            _day_start(today.replace(day=1), tz),
            _day_end(today.replace(day=last_day), tz),
        )
    if key == "last_30_days":
        return TimeRange(key, local_now - timedelta(days=30), local_now)
    if key == "last_3_months":
        return TimeRange(key, _shift_months(local_now, -3), local_now)
    if key == "custom":
        if start_date is None or end_date is None:
            raise ValueError("A custom range needs both a start and an end date")
        if end_date < start_date:
            raise ValueError("The end date must not be before the start date")
        return TimeRange(key, _day_start(start_date, tz), _day_end(end_date, tz))
    raise ValueError(f"Unknown time range {key!r}")


def within(bookings: Iterable[Booking], time_range: TimeRange) -> list[Booking]:
    return [b for b in bookings if time_range.contains(b.start_time)]


def compute_stats(bookings: list[Booking]) -> BookingStats:
    completed = [b for b in bookings if b.status is BookingStatus.COMPLETED]
    cancelled = [b for b in bookings if b.status is BookingStatus.CANCELLED]
    pending = [b for b in bookings if b.status is BookingStatus.PENDING]
    revenue = sum((b.total_price for b in completed), Decimal("0"))
    average = (revenue / len(completed)).quantize(_CENT, rounding=ROUND_HALF_UP) if completed else Decimal("0")
    success_rate = round(len(completed) / len(bookings) * 100, 1) if bookings else 0.0

    return BookingStats(
        total=len(bookings),
        completed=len(completed),
        cancelled=len(cancelled),
        pending=len(pending),
        revenue=revenue,
        average_price=average,
        success_rate=success_rate,
        top_services=top_services(completed),
    )


def top_services(completed: list[Booking], limit: int = TOP_SERVICES_LIMIT) -> list[ServiceStat]:
    counts: dict[str, int] = {}
    revenue: dict[str, Decimal] = {}
    for booking in completed:
        name = booking.service.name
        counts[name] = counts.get(name, 0) + 1
        revenue[name] = revenue.get(name, Decimal("0")) + booking.total_price
    ranked = sorted(counts, key=lambda name: counts[name], reverse=True)
    return [ServiceStat(name=name, count=counts[name], revenue=revenue[name]) for name in ranked[:limit]]


@dataclass(frozen=True)
class BarberReport:
    time_range: TimeRange
    stats: BookingStats
    bookings: list[Booking]


@dataclass(frozen=True)
class OwnerReport:
    time_range: TimeRange
    stats: BookingStats
    shops: list[ShopStats]
    bookings: list[Booking]


class AnalyticsUseCase:
    def __init__(
        self,
        booking_api: BookingApiPort,
        marketplace_api: MarketplaceApiPort,
        timezone: ZoneInfo,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._booking_api = booking_api
        self._marketplace_api = marketplace_api
        self._timezone = timezone
        self._clock = clock

    def barber_report(self, session: Session, range_key: str = "this_month") -> BarberReport:
        require(session, Resource.BARBER_ANALYTICS, VIEW)
        time_range = resolve_time_range(range_key, self._clock(), self._timezone)
        bookings = within(self._booking_api.bookings_by_barber(session.user_id), time_range)
        return BarberReport(time_range=time_range, stats=compute_stats(bookings), bookings=bookings)

    def owner_report(
        self,
        session: Session,
        range_key: str = "this_month",
        shop_id: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> OwnerReport:
        require(session, Resource.OWNER_ANALYTICS, VIEW)
        time_range = resolve_time_range(range_key, self._clock(), self._timezone, start_date, end_date)
        bookings = within(self._booking_api.owner_appointments(session.user_id), time_range)
        if shop_id:
            bookings = [b for b in bookings if b.shop.id == shop_id]

        shops = [
            ShopStats(
                shop_id=shop.id,
                shop_name=shop.name,
                stats=compute_stats([b for b in bookings if b.shop.id == shop.id]),
            )
            for shop in self._marketplace_api.owner_barber_shops(session.user_id)
            if not shop_id or shop.id == shop_id
        ]
        return OwnerReport(time_range=time_range, stats=compute_stats(bookings), shops=shops, bookings=bookings)
