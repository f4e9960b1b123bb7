from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from barberbook.application.exceptions import BookingApiContractError
from barberbook.application.ports.booking_api import AppointmentFilters, BookingApiPort
from barberbook.domain.entities.booking import Booking, BookingStatus
from barberbook.infrastructure.graphql import documents
from barberbook.infrastructure.graphql.client import GraphQLClient
from barberbook.infrastructure.graphql.mappers import booking_from_payload, format_instant


class GraphQLBookingApi(BookingApiPort):
    def __init__(self, client: GraphQLClient) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    def create_booking(
        self,
        customer_id: str,
        barber_id: str,
        shop_id: str,
        service_id: str,
        start_time: datetime,
        notes: str | None = None,
    ) -> Booking:
        variables = {
            "input": {
                "userId": customer_id,
                "barberId": barber_id,
                "barberShopId": shop_id,
                "managementServiceId": service_id,
                "startTime": format_instant(start_time),
                "notes": notes or "",
            }
        }
        data = self._client.execute(documents.CREATE_BOOKING, variables)
        booking = booking_from_payload(_field(data, "createBooking"))
        self._logger.info("Booking created", extra={"booking_id": booking.id, "service_id": service_id})
        return booking

    def update_booking_status(
        self,
        booking_id: str,
        status: BookingStatus,
        reason: str | None = None,
    ) -> Booking:
        variables: dict[str, Any] = {"id": booking_id, "status": status.value}
        if reason is not None:
            variables["reason"] = reason
        data = self._client.execute(documents.UPDATE_BOOKING_STATUS, variables)
        booking = booking_from_payload(_field(data, "updateBookingStatus"))
        self._logger.info("Booking status updated", extra={"booking_id": booking_id, "status": booking.status.value})
        return booking

    def reschedule_booking(self, booking_id: str, new_start_time: datetime) -> Booking:
        variables = {"id": booking_id, "newStartTime": format_instant(new_start_time)}
        data = self._client.execute(documents.RESCHEDULE_BOOKING, variables)
        booking = booking_from_payload(_field(data, "rescheduleBooking"))
        self._logger.info("Booking rescheduled", extra={"booking_id": booking_id})
        return booking

    def bookings_by_user(self, user_id: str) -> list[Booking]:
        return self._list(documents.BOOKINGS_BY_USER, "bookingsByUser", {"userId": user_id})

    def bookings_by_barber(self, barber_id: str) -> list[Booking]:
        return self._list(documents.BOOKINGS_BY_BARBER, "bookingsByBarber", {"barberId": barber_id})

    def upcoming_bookings(self, user_id: str) -> list[Booking]:
        return self._list(documents.UPCOMING_BOOKINGS, "upcomingBookings", {"userId": user_id})

    def upcoming_bookings_by_barber(self, barber_id: str) -> list[Booking]:
        return self._list(
            documents.UPCOMING_BOOKINGS_BY_BARBER, "upcomingBookingsByBarber", {"barberId": barber_id}
        )

    def owner_appointments(self, owner_id: str, filters: AppointmentFilters | None = None) -> list[Booking]:
        filters = filters or AppointmentFilters()
        variables = {
            "ownerId": owner_id,
            "barberShopId": filters.barber_shop_id or None,
            "barberId": filters.barber_id or None,
            "status": filters.status.value if filters.status else None,
            "startDate": filters.start_date or None,
            "endDate": filters.end_date or None,
        }
        return self._list(documents.OWNER_APPOINTMENTS, "ownerAppointmentsWithFilters", variables)

    def _list(self, document: str, field: str, variables: dict[str, Any]) -> list[Booking]:
        data = self._client.execute(document, variables)
        items = data.get(field)
        if items is None:
            return []
        if not isinstance(items, list):
            raise BookingApiContractError(f"Expected a list for {field}")
        return [booking_from_payload(item) for item in items]


def _field(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name)
    if not isinstance(value, dict):
        raise BookingApiContractError(f"Booking API response has no {name}")
    return value
