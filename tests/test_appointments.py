from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from barberbook.application.exceptions import ActionNotAllowedError
from barberbook.application.ports.booking_api import AppointmentFilters
from barberbook.application.use_cases.appointments import OwnerAppointmentsUseCase
from barberbook.domain.entities.booking import Booking, BookingStatus, PartyRef, ShopRef
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

NOW = datetime(2026, 3, 10, 18, 0, tzinfo=timezone.utc)
OWNER_SESSION = Session(token="t-owner", refresh_token=None, user_id=OWNER.id, role=Role.OWNER)
OTHER_CUSTOMER = PartyRef(id="user_2", first_name="Bruno", last_name="Costa")


def _use_case(page_size: int = 10) -> OwnerAppointmentsUseCase:
    api = build_demo_api(clock=lambda: NOW)
    for i in range(5):
        customer = CUSTOMER if i % 2 == 0 else OTHER_CUSTOMER
        service = CLASSIC_CUT if i < 4 else BEARD_TRIM
        start = NOW + timedelta(days=i)
        api.add_booking(
            Booking(
                id=f"b{i}",
                start_time=start,
                end_time=start + timedelta(minutes=service.duration_minutes),
                status=BookingStatus.CONFIRMED if i == 0 else BookingStatus.PENDING,
                total_price=service.price,
                customer=customer,
                barber=BARBER,
                shop=ShopRef(id=DEMO_SHOP.id, name=DEMO_SHOP.name),
                service=service,
            )
        )
    return OwnerAppointmentsUseCase(api=api, page_size=page_size)


def test_search_matches_customer_and_service_names():
    uc = _use_case()

    by_customer = uc.list_appointments(OWNER_SESSION, search="bruno")
    assert [b.id for b in by_customer.items] == ["b1", "b3"]

    by_service = uc.list_appointments(OWNER_SESSION, search="BEARD")
    assert [b.id for b in by_service.items] == ["b4"]

    by_barber = uc.list_appointments(OWNER_SESSION, search="marco")
    assert by_barber.total == 5


def test_paging():
    uc = _use_case(page_size=2)

    first = uc.list_appointments(OWNER_SESSION)
    last = uc.list_appointments(OWNER_SESSION, page=2)

    assert [b.id for b in first.items] == ["b0", "b1"]
    assert [b.id for b in last.items] == ["b4"]
    assert last.total == 5
    assert last.page_size == 2


def test_server_filters_apply_before_search():
    uc = _use_case()
    page = uc.list_appointments(OWNER_SESSION, AppointmentFilters(status=BookingStatus.CONFIRMED))
    assert [b.id for b in page.items] == ["b0"]


def test_invalid_paging():
    uc = _use_case()
    with pytest.raises(ValueError):
        uc.list_appointments(OWNER_SESSION, page=-1)


def test_only_owners_list_appointments():
    customer = Session(token="t", refresh_token=None, user_id=CUSTOMER.id, role=Role.CUSTOMER)
    with pytest.raises(ActionNotAllowedError):
        _use_case().list_appointments(customer)
