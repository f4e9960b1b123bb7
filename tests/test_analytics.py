from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from barberbook.application.exceptions import ActionNotAllowedError
from barberbook.application.use_cases.analytics import AnalyticsUseCase, compute_stats, resolve_time_range
from barberbook.domain.entities.booking import Booking, BookingStatus, ServiceSnapshot, ShopRef
from barberbook.domain.entities.session import Role, Session
from barberbook.infrastructure.mock.demo_data import (
    BARBER,
    BEARD_TRIM,
    CLASSIC_CUT,
    CUSTOMER,
    DEMO_SHOP,
    OWNER,
    build_demo_api,
)

TZ = ZoneInfo("America/Los_Angeles")
# Tuesday, 11:00 in Los Angeles
NOW = datetime(2026, 3, 10, 18, 0, tzinfo=timezone.utc)


def _booking(
    booking_id: str,
    start: datetime,
    status: BookingStatus,
    service: ServiceSnapshot = CLASSIC_CUT,
) -> Booking:
    return Booking(
        id=booking_id,
        start_time=start,
        end_time=start + timedelta(minutes=service.duration_minutes),
        status=status,
        total_price=service.price,
        customer=CUSTOMER,
        barber=BARBER,
        shop=ShopRef(id=DEMO_SHOP.id, name=DEMO_SHOP.name),
        service=service,
    )


def test_today_covers_the_whole_local_day():
    r = resolve_time_range("today", NOW, TZ)
    assert r.start == datetime(2026, 3, 10, 0, 0, tzinfo=TZ)
    assert r.end.date() == date(2026, 3, 10)
    assert r.contains(datetime(2026, 3, 11, 6, 59, tzinfo=timezone.utc))
    assert not r.contains(datetime(2026, 3, 11, 7, 0, tzinfo=timezone.utc))


def test_week_starts_on_sunday():
    r = resolve_time_range("this_week", NOW, TZ)
    assert r.start.date() == date(2026, 3, 8)
    assert r.end.date() == date(2026, 3, 14)


def test_month_and_rolling_ranges():
    month = resolve_time_range("this_month", NOW, TZ)
    assert month.start.date() == date(2026, 3, 1)
    assert month.end.date() == date(2026, 3, 31)

    last_30 = resolve_time_range("last_30_days", NOW, TZ)
    assert last_30.end - last_30.start == timedelta(days=30)

    last_3 = resolve_time_range("last_3_months", NOW, TZ)
    assert last_3.start.date() == date(2025, 12, 10)


def test_custom_range():
    r = resolve_time_range("custom", NOW, TZ, date(2026, 2, 1), date(2026, 2, 28))
    assert r.start.date() == date(2026, 2, 1)
    assert r.end.date() == date(2026, 2, 28)

    with pytest.raises(ValueError):
        resolve_time_range("custom", NOW, TZ, date(2026, 2, 1))
    with pytest.raises(ValueError):
        resolve_time_range("custom", NOW, TZ, date(2026, 2, 28), date(2026, 2, 1))


def test_unknown_range_key():
    with pytest.raises(ValueError):
        resolve_time_range("forever", NOW, TZ)


def test_stats_count_completed_revenue_only():
    start = NOW - timedelta(days=1)
    stats = compute_stats(
        [
            _booking("b1", start, BookingStatus.COMPLETED),
            _booking("b2", start, BookingStatus.COMPLETED),
            _booking("b3", start, BookingStatus.COMPLETED, BEARD_TRIM),
            _booking("b4", start, BookingStatus.CANCELLED, BEARD_TRIM),
            _booking("b5", start, BookingStatus.PENDING),
        ]
    )

    assert stats.total == 5
    assert stats.completed == 3
    assert stats.cancelled == 1
    assert stats.pending == 1
    assert stats.revenue == Decimal("75.00")
    assert stats.average_price == Decimal("25.00")
    assert stats.success_rate == 60.0
    assert stats.top_services[0].name == "Classic Cut"
    assert stats.top_services[0].count == 2
    assert stats.top_services[0].revenue == Decimal("40.00")


def test_stats_for_no_bookings():
    stats = compute_stats([])
    assert stats.total == 0
    assert stats.revenue == Decimal("0")
    assert stats.success_rate == 0.0
    assert stats.top_services == []


def _use_case():
    api = build_demo_api(clock=lambda: NOW)
    api.add_booking(_booking("in_range", NOW - timedelta(days=2), BookingStatus.COMPLETED))
    api.add_booking(_booking("old", NOW - timedelta(days=60), BookingStatus.COMPLETED))
    return AnalyticsUseCase(booking_api=api, marketplace_api=api, timezone=TZ, clock=lambda: NOW)


def test_barber_report_filters_by_range():
    session = Session(token="t", refresh_token=None, user_id=BARBER.id, role=Role.BARBER)
    report = _use_case().barber_report(session, "this_month")

    assert [b.id for b in report.bookings] == ["in_range"]
    assert report.stats.revenue == Decimal("20.00")


def test_owner_report_breaks_down_per_shop():
    session = Session(token="t", refresh_token=None, user_id=OWNER.id, role=Role.OWNER)
    report = _use_case().owner_report(session, "last_3_months")

    assert report.stats.completed == 2
    assert [s.shop_id for s in report.shops] == [DEMO_SHOP.id]
    assert report.shops[0].stats.revenue == Decimal("40.00")


def test_reports_are_role_gated():
    customer = Session(token="t", refresh_token=None, user_id=CUSTOMER.id, role=Role.CUSTOMER)
    uc = _use_case()
    with pytest.raises(ActionNotAllowedError):
        uc.barber_report(customer)
    with pytest.raises(ActionNotAllowedError):
        uc.owner_report(customer)
