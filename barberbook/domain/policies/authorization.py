from __future__ import annotations

from datetime import datetime
from enum import Enum

from barberbook.domain.entities.booking import Booking, BookingStatus
from barberbook.domain.entities.session import Role
from barberbook.domain.policies.eligibility import EligibilityPolicy


class Resource(str, Enum):
    BOOKING = "booking"
    FAVORITE = "favorite"
    REVIEW = "review"
    BARBER_ANALYTICS = "barber_analytics"
    OWNER_ANALYTICS = "owner_analytics"
    APPOINTMENTS = "appointments"


class BookingAction(str, Enum):
    CONFIRM = "confirm"
    START = "start"
    COMPLETE = "complete"
    CANCEL = "cancel"
    RESCHEDULE = "reschedule"


VIEW = "view"
WRITE = "write"
CREATE = "create"

# role x resource -> allowed actions. Anything missing is denied.
PERMISSIONS: dict[Role, dict[Resource, frozenset[str]]] = {
    Role.CUSTOMER: {
        Resource.BOOKING: frozenset(
            {VIEW, CREATE, BookingAction.CANCEL.value, BookingAction.RESCHEDULE.value}
        ),
        Resource.FAVORITE: frozenset({VIEW, WRITE}),
        Resource.REVIEW: frozenset({VIEW, WRITE}),
    },
    Role.BARBER: {
        Resource.BOOKING: frozenset(
            {
                VIEW,
                BookingAction.CONFIRM.value,
                BookingAction.START.value,
                BookingAction.COMPLETE.value,
                BookingAction.CANCEL.value,
            }
        ),
        Resource.REVIEW: frozenset({VIEW}),
        Resource.BARBER_ANALYTICS: frozenset({VIEW}),
    },
    Role.OWNER: {
        Resource.BOOKING: frozenset({VIEW, BookingAction.CANCEL.value}),
        Resource.REVIEW: frozenset({VIEW}),
        Resource.OWNER_ANALYTICS: frozenset({VIEW}),
        Resource.APPOINTMENTS: frozenset({VIEW}),
    },
    Role.ADMIN: {
        Resource.BOOKING: frozenset({VIEW, BookingAction.CANCEL.value}),
        Resource.REVIEW: frozenset({VIEW}),
        Resource.OWNER_ANALYTICS: frozenset({VIEW}),
        Resource.APPOINTMENTS: frozenset({VIEW}),
    },
}

# Status-driven transitions: action -> (required current status, resulting status)
STATUS_TRANSITIONS: dict[BookingAction, tuple[BookingStatus, BookingStatus]] = {
    BookingAction.CONFIRM: (BookingStatus.PENDING, BookingStatus.CONFIRMED),
    BookingAction.START: (BookingStatus.CONFIRMED, BookingStatus.IN_PROGRESS),
    BookingAction.COMPLETE: (BookingStatus.IN_PROGRESS, BookingStatus.COMPLETED),
}

ACTION_ORDER = (
    BookingAction.CONFIRM,
    BookingAction.START,
    BookingAction.COMPLETE,
    BookingAction.CANCEL,
    BookingAction.RESCHEDULE,
)


def is_allowed(role: Role, resource: Resource, action: str) -> bool:
    return action in PERMISSIONS.get(role, {}).get(resource, frozenset())


def target_status(action: BookingAction) -> BookingStatus | None:
    """Status requested by a status-update action; None for reschedule."""
    if action is BookingAction.CANCEL:
        return BookingStatus.CANCELLED
    transition = STATUS_TRANSITIONS.get(action)
    return transition[1] if transition else None


def available_actions(
    booking: Booking,
    role: Role,
    now: datetime,
    policy: EligibilityPolicy | None = None,
) -> list[BookingAction]:
    """
    Actions offered to `role` for `booking` at `now`.

    Depends only on status, role, now and start time.
    """
    if booking.status.is_terminal:
        return []
    policy = policy or EligibilityPolicy()
    offered: list[BookingAction] = []
    for action in ACTION_ORDER:
        if not is_allowed(role, Resource.BOOKING, action.value):
            continue
        if action in STATUS_TRANSITIONS:
            if booking.status is STATUS_TRANSITIONS[action][0]:
                offered.append(action)
        elif action is BookingAction.CANCEL:
            if policy.can_cancel(booking, now):
                offered.append(action)
        elif action is BookingAction.RESCHEDULE:
            if policy.can_reschedule(booking, now):
                offered.append(action)
    return offered
