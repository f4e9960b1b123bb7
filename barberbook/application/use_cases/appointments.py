from __future__ import annotations

from dataclasses import dataclass

from barberbook.application.ports.booking_api import AppointmentFilters, BookingApiPort
from barberbook.application.utils.access import require
from barberbook.domain.entities.booking import Booking
from barberbook.domain.entities.session import Session
from barberbook.domain.policies.authorization import VIEW, Resource


@dataclass(frozen=True)
class AppointmentPage:
    items: list[Booking]
    total: int
    page: int
    page_size: int


def matches_search(booking: Booking, term: str) -> bool:
    haystack = " ".join(
        (
            booking.customer.full_name,
            booking.barber.full_name,
            booking.shop.name,
            booking.service.name,
        )
    ).lower()
    return term.lower() in haystack


class OwnerAppointmentsUseCase:
    def __init__(self, api: BookingApiPort, page_size: int = 10) -> None:
        self._api = api
        self._page_size = page_size

    def list_appointments(
        self,
        session: Session,
        filters: AppointmentFilters | None = None,
        search: str = "",
        page: int = 0,
        page_size: int | None = None,
    ) -> AppointmentPage:
        require(session, Resource.APPOINTMENTS, VIEW)
        if page < 0:
            raise ValueError("Page must not be negative")
        size = page_size or self._page_size
        if size <= 0:
            raise ValueError("Page size must be positive")

        appointments = self._api.owner_appointments(session.user_id, filters)
        term = search.strip()
        if term:
            appointments = [a for a in appointments if matches_search(a, term)]

        offset = page * size
        return AppointmentPage(
            items=appointments[offset : offset + size],
            total=len(appointments),
            page=page,
            page_size=size,
        )
