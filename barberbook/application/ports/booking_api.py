from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from barberbook.domain.entities.booking import Booking, BookingStatus


@dataclass(frozen=True)
class AppointmentFilters:
    barber_shop_id: str | None = None
    barber_id: str | None = None
    status: BookingStatus | None = None
    start_date: str | None = None  # YYYY-MM-DD
    end_date: str | None = None


class BookingApiPort(ABC):
    @abstractmethod
    def create_booking(
        self,
        customer_id: str,
        barber_id: str,
        shop_id: str,
        service_id: str,
        start_time: datetime,
        notes: str | None = None,
    ) -> Booking:
        """Create one booking for one service. Conflicts are rejected upstream."""
        raise NotImplementedError

    @abstractmethod
    def update_booking_status(
        self,
        booking_id: str,
        status: BookingStatus,
        reason: str | None = None,
    ) -> Booking:
        """Request a status transition. `reason` only matters for CANCELLED."""
        raise NotImplementedError

    @abstractmethod
    def reschedule_booking(self, booking_id: str, new_start_time: datetime) -> Booking:
        raise NotImplementedError

    @abstractmethod
    def bookings_by_user(self, user_id: str) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def bookings_by_barber(self, barber_id: str) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def upcoming_bookings(self, user_id: str) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def upcoming_bookings_by_barber(self, barber_id: str) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def owner_appointments(self, owner_id: str, filters: AppointmentFilters | None = None) -> list[Booking]:
        """Bookings across every shop the owner runs, filtered server-side."""
        raise NotImplementedError
