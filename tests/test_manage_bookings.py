"""
Tests for listing bookings and running transition actions against the in-memory API.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from barberbook.application.exceptions import (
    ActionInFlightError,
    ActionNotAllowedError,
    BookingApiError,
    NotFoundError,
)
from barberbook.application.use_cases.manage_bookings import ManageBookingsUseCase
from barberbook.application.utils.in_flight import InFlightGuard
from barberbook.domain.entities.booking import Booking, BookingStatus, ShopRef
from barberbook.domain.entities.session import Role, Session
from barberbook.domain.policies.authorization import BookingAction
from barberbook.infrastructure.mock.demo_data import BARBER, CLASSIC_CUT, CUSTOMER, DEMO_SHOP, OWNER, build_demo_api

NOW = datetime(2026, 3, 10, 18, 0, tzinfo=timezone.utc)

CUSTOMER_SESSION = Session(token="t-customer", refresh_token=None, user_id=CUSTOMER.id, role=Role.CUSTOMER)
BARBER_SESSION = Session(token="t-barber", refresh_token=None, user_id=BARBER.id, role=Role.BARBER)
OWNER_SESSION = Session(token="t-owner", refresh_token=None, user_id=OWNER.id, role=Role.OWNER)


def _booking(booking_id: str, start: datetime, status: BookingStatus = BookingStatus.PENDING) -> Booking:
    return Booking(
        id=booking_id,
        start_time=start,
        end_time=start + timedelta(minutes=CLASSIC_CUT.duration_minutes),
        status=status,
        total_price=CLASSIC_CUT.price,
        customer=CUSTOMER,
        barber=BARBER,
        shop=ShopRef(id=DEMO_SHOP.id, name=DEMO_SHOP.name),
        service=CLASSIC_CUT,
    )


def _setup(*bookings: Booking, guard: InFlightGuard | None = None):
    api = build_demo_api(clock=lambda: NOW)
    for booking in bookings:
        api.add_booking(booking)
    return api, ManageBookingsUseCase(api=api, guard=guard, clock=lambda: NOW)


def test_list_bookings_attaches_actions():
    api, uc = _setup(_booking("b1", NOW + timedelta(hours=48)), _booking("b2", NOW + timedelta(hours=2)))

    views = {v.booking.id: v.actions for v in uc.list_bookings(CUSTOMER_SESSION)}

    assert views["b1"] == [BookingAction.CANCEL, BookingAction.RESCHEDULE]
    assert views["b2"] == []


def test_upcoming_scope_skips_past_and_closed_bookings():
    api, uc = _setup(
        _booking("past", NOW - timedelta(days=1)),
        _booking("done", NOW + timedelta(days=1), BookingStatus.COMPLETED),
        _booking("next", NOW + timedelta(days=2)),
    )

    views = uc.list_bookings(CUSTOMER_SESSION, scope="upcoming")

    assert [v.booking.id for v in views] == ["next"]


def test_unknown_scope_is_rejected():
    _, uc = _setup()
    with pytest.raises(ValueError):
        uc.list_bookings(CUSTOMER_SESSION, scope="yesterday")


def test_barber_walks_booking_to_completed():
    api, uc = _setup(_booking("b1", NOW + timedelta(hours=2)))

    confirmed = uc.perform(BARBER_SESSION, "b1", BookingAction.CONFIRM)
    assert confirmed.succeeded is True
    assert confirmed.booking.status is BookingStatus.CONFIRMED
    assert confirmed.bookings[0].actions == [BookingAction.START]

    started = uc.perform(BARBER_SESSION, "b1", BookingAction.START)
    assert started.booking.status is BookingStatus.IN_PROGRESS

    completed = uc.perform(BARBER_SESSION, "b1", BookingAction.COMPLETE)
    assert completed.booking.status is BookingStatus.COMPLETED
    assert completed.bookings[0].actions == []
    assert api.get_booking("b1").status is BookingStatus.COMPLETED


def test_action_not_offered_is_refused_before_any_request():
    api, uc = _setup(_booking("b1", NOW + timedelta(hours=2)))

    with pytest.raises(ActionNotAllowedError):
        uc.perform(BARBER_SESSION, "b1", BookingAction.COMPLETE)
    with pytest.raises(ActionNotAllowedError):
        uc.perform(CUSTOMER_SESSION, "b1", BookingAction.CANCEL)

    assert api.get_booking("b1").status is BookingStatus.PENDING


def test_cancel_requires_a_reason():
    api, uc = _setup(_booking("b1", NOW + timedelta(hours=48)))

    with pytest.raises(ValueError):
        uc.perform(CUSTOMER_SESSION, "b1", BookingAction.CANCEL, reason="   ")

    outcome = uc.perform(CUSTOMER_SESSION, "b1", BookingAction.CANCEL, reason="Out of town")

    assert outcome.succeeded is True
    assert outcome.booking.status is BookingStatus.CANCELLED
    assert outcome.booking.cancel_reason == "Out of town"


def test_owner_can_cancel_shop_booking():
    api, uc = _setup(_booking("b1", NOW + timedelta(days=3)))

    outcome = uc.perform(OWNER_SESSION, "b1", BookingAction.CANCEL, reason="Shop closed")

    assert outcome.booking.status is BookingStatus.CANCELLED


def test_reschedule_keeps_duration():
    api, uc = _setup(_booking("b1", NOW + timedelta(hours=48)))
    new_start = NOW + timedelta(days=4)

    outcome = uc.perform(CUSTOMER_SESSION, "b1", BookingAction.RESCHEDULE, new_start_time=new_start)

    assert outcome.booking.start_time == new_start
    assert outcome.booking.end_time == new_start + timedelta(minutes=30)


def test_reschedule_needs_an_aware_start_time():
    _, uc = _setup(_booking("b1", NOW + timedelta(hours=48)))

    with pytest.raises(ValueError):
        uc.perform(CUSTOMER_SESSION, "b1", BookingAction.RESCHEDULE)
    with pytest.raises(ValueError):
        uc.perform(CUSTOMER_SESSION, "b1", BookingAction.RESCHEDULE, new_start_time=datetime(2026, 3, 20, 10, 0))


def test_api_failure_leaves_booking_untouched():
    api, uc = _setup(_booking("b1", NOW + timedelta(hours=2)))

    def reject(*args, **kwargs):
        raise BookingApiError("Barber is not available at the requested time")

    api.update_booking_status = reject

    outcome = uc.perform(BARBER_SESSION, "b1", BookingAction.CONFIRM)

    assert outcome.succeeded is False
    assert outcome.error == "Barber is not available at the requested time"
    assert outcome.booking is None
    assert api.get_booking("b1").status is BookingStatus.PENDING


def test_second_submission_while_in_flight_is_rejected():
    guard = InFlightGuard()
    api, uc = _setup(_booking("b1", NOW + timedelta(hours=2)), guard=guard)

    with guard.hold("booking:b1"):
        with pytest.raises(ActionInFlightError):
            uc.perform(BARBER_SESSION, "b1", BookingAction.CONFIRM)

    assert guard.is_held("booking:b1") is False
    assert uc.perform(BARBER_SESSION, "b1", BookingAction.CONFIRM).succeeded is True


def test_unknown_booking():
    _, uc = _setup(_booking("b1", NOW + timedelta(hours=48)))
    with pytest.raises(NotFoundError):
        uc.perform(CUSTOMER_SESSION, "missing", BookingAction.CANCEL, reason="x")
