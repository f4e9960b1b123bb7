from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from barberbook.application.exceptions import (
    ActionNotAllowedError,
    BookingApiContractError,
    BookingApiError,
    NotFoundError,
)
from barberbook.application.ports.booking_api import BookingApiPort
from barberbook.application.utils.access import require
from barberbook.application.utils.clock import utc_now
from barberbook.application.utils.in_flight import InFlightGuard
from barberbook.domain.entities.booking import Booking
from barberbook.domain.entities.session import Role, Session
from barberbook.domain.policies.authorization import (
    VIEW,
    BookingAction,
    Resource,
    available_actions,
    target_status,
)
from barberbook.domain.policies.eligibility import EligibilityPolicy


@dataclass(frozen=True)
class BookingView:
    booking: Booking
    actions: list[BookingAction]


@dataclass(frozen=True)
class ActionOutcome:
    action: BookingAction
    booking_id: str
    succeeded: bool
    booking: Booking | None = None  # server-confirmed state after the mutation
    bookings: list[BookingView] | None = None  # refetched list; None when not refreshed
    error: str | None = None


class ManageBookingsUseCase:
    def __init__(
        self,
        api: BookingApiPort,
        policy: EligibilityPolicy | None = None,
        guard: InFlightGuard | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._api = api
        self._policy = policy or EligibilityPolicy()
        self._guard = guard or InFlightGuard()
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def list_bookings(self, session: Session, scope: str = "all") -> list[BookingView]:
        require(session, Resource.BOOKING, VIEW)
        bookings = self._fetch(session, scope)
        now = self._clock()
        return [
            BookingView(booking=b, actions=available_actions(b, session.role, now, self._policy))
            for b in bookings
        ]

    def perform(
        self,
        session: Session,
        booking_id: str,
        action: BookingAction,
        reason: str | None = None,
        new_start_time: datetime | None = None,
    ) -> ActionOutcome:
        """
        Run one transition action against the Booking API.

        The booking is looked up in the session's own list and the offered
        action set is recomputed before anything is sent. Exactly one
        mutation is issued. On failure the outcome carries the error and no
        local state is touched; on success the list is refetched.
        """
        booking = self._find(session, booking_id)
        offered = available_actions(booking, session.role, self._clock(), self._policy)
        if action not in offered:
            raise ActionNotAllowedError(
                f"{action.value} is not available for a {booking.status.value} booking"
            )

        if action is BookingAction.CANCEL:
            reason = (reason or "").strip()
            if not reason:
                raise ValueError("A cancellation reason is required")
        if action is BookingAction.RESCHEDULE:
            if new_start_time is None:
                raise ValueError("A new start time is required to reschedule")
            if new_start_time.tzinfo is None:
                raise ValueError("The new start time must include a timezone offset")

        with self._guard.hold(f"booking:{booking_id}"):
            try:
                updated = self._send(booking_id, action, reason, new_start_time)
            except (BookingApiError, BookingApiContractError) as e:
                self._logger.error(
                    "Booking action failed",
                    extra={"booking_id": booking_id, "action": action.value, "error": str(e)},
                )
                return ActionOutcome(action=action, booking_id=booking_id, succeeded=False, error=str(e))

        self._logger.info(
            "Booking action applied",
            extra={"booking_id": booking_id, "action": action.value, "status": updated.status.value},
        )
        return ActionOutcome(
            action=action,
            booking_id=booking_id,
            succeeded=True,
            booking=updated,
            bookings=self._refetch(session),
        )

    def _send(
        self,
        booking_id: str,
        action: BookingAction,
        reason: str | None,
        new_start_time: datetime | None,
    ) -> Booking:
        if action is BookingAction.RESCHEDULE:
            return self._api.reschedule_booking(booking_id, new_start_time)
        status = target_status(action)
        return self._api.update_booking_status(
            booking_id,
            status,
            reason=reason if action is BookingAction.CANCEL else None,
        )

    def _refetch(self, session: Session) -> list[BookingView] | None:
        try:
            return self.list_bookings(session)
        except (BookingApiError, BookingApiContractError) as e:
            self._logger.warning("Refetch after booking action failed", extra={"error": str(e)})
            return None

    def _find(self, session: Session, booking_id: str) -> Booking:
        require(session, Resource.BOOKING, VIEW)
        for booking in self._fetch(session, "all"):
            if booking.id == booking_id:
                return booking
        raise NotFoundError(f"Booking {booking_id} not found")

    def _fetch(self, session: Session, scope: str) -> list[Booking]:
        if scope not in ("all", "upcoming"):
            raise ValueError(f"Unknown booking scope {scope!r}")
        upcoming = scope == "upcoming"
        if session.role is Role.CUSTOMER:
            if upcoming:
                return self._api.upcoming_bookings(session.user_id)
            return self._api.bookings_by_user(session.user_id)
        if session.role is Role.BARBER:
            if upcoming:
                return self._api.upcoming_bookings_by_barber(session.user_id)
            return self._api.bookings_by_barber(session.user_id)
        # owners and admins see the appointments of the shops they run
        return self._api.owner_appointments(session.user_id)
