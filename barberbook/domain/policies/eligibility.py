from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from barberbook.domain.entities.booking import Booking, BookingStatus

DEFAULT_LEAD_TIME = timedelta(hours=24)

OPEN_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})


def lead_time(booking: Booking, now: datetime) -> timedelta:
    return booking.start_time - now


@dataclass(frozen=True)
class EligibilityPolicy:
    """
    Decides whether a booking can still be cancelled or rescheduled.

    Both `now` and the booking start time must be timezone-aware. The lead
    time has to be strictly greater than the threshold: a booking exactly
    24h out is no longer eligible.
    """

    cancel_lead: timedelta = DEFAULT_LEAD_TIME
    reschedule_lead: timedelta = DEFAULT_LEAD_TIME

    def can_cancel(self, booking: Booking, now: datetime) -> bool:
        return booking.status in OPEN_STATUSES and lead_time(booking, now) > self.cancel_lead

    def can_reschedule(self, booking: Booking, now: datetime) -> bool:
        return booking.status in OPEN_STATUSES and lead_time(booking, now) > self.reschedule_lead


_default_policy = EligibilityPolicy()


def can_cancel(booking: Booking, now: datetime) -> bool:
    return _default_policy.can_cancel(booking, now)


def can_reschedule(booking: Booking, now: datetime) -> bool:
    return _default_policy.can_reschedule(booking, now)
