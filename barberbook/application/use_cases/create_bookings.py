from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, time
from decimal import Decimal
from typing import Sequence
from zoneinfo import ZoneInfo

from barberbook.application.exceptions import BookingApiContractError, BookingApiError, NotFoundError
from barberbook.application.ports.booking_api import BookingApiPort
from barberbook.application.ports.marketplace_api import MarketplaceApiPort
from barberbook.application.utils.access import require
from barberbook.application.utils.clock import combine_local
from barberbook.application.utils.in_flight import InFlightGuard
from barberbook.domain.entities.booking import Booking, ServiceSnapshot
from barberbook.domain.entities.session import Session
from barberbook.domain.entities.shop import BarberShop
from barberbook.domain.policies.authorization import CREATE, Resource


@dataclass(frozen=True)
class BookingQuote:
    services: list[ServiceSnapshot]
    total_price: Decimal
    total_duration_minutes: int


@dataclass(frozen=True)
class BookingRequest:
    shop_id: str
    service_ids: list[str]
    day: date
    at: time
    barber_id: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class BatchOutcome:
    quote: BookingQuote
    created: list[Booking] = field(default_factory=list)
    failed_service: ServiceSnapshot | None = None
    not_attempted: list[ServiceSnapshot] = field(default_factory=list)
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.failed_service is None


def aggregate(services: Sequence[ServiceSnapshot]) -> BookingQuote:
    """Display totals for a multi-service appointment. The API's totals stay authoritative."""
    if not services:
        raise ValueError("Select at least one service")
    return BookingQuote(
        services=list(services),
        total_price=sum((s.price for s in services), Decimal("0")),
        total_duration_minutes=sum(s.duration_minutes for s in services),
    )


class CreateBookingsUseCase:
    def __init__(
        self,
        booking_api: BookingApiPort,
        marketplace_api: MarketplaceApiPort,
        timezone: ZoneInfo,
        guard: InFlightGuard | None = None,
    ) -> None:
        self._booking_api = booking_api
        self._marketplace_api = marketplace_api
        self._timezone = timezone
        self._guard = guard or InFlightGuard()
        self._logger = logging.getLogger(__name__)

    def quote(self, shop_id: str, service_ids: Sequence[str]) -> BookingQuote:
        shop = self._require_shop(shop_id)
        return aggregate(self._resolve_services(shop, service_ids))

    def submit(self, session: Session, request: BookingRequest) -> BatchOutcome:
        """
        Create one booking per selected service, one request at a time.

        Every booking gets the same start time. A failure stops the batch;
        bookings created before it are kept as they are.
        """
        require(session, Resource.BOOKING, CREATE)
        shop = self._require_shop(request.shop_id)
        services = self._resolve_services(shop, request.service_ids)
        quote = aggregate(services)

        barber_id = request.barber_id or self._fallback_barber(shop)
        start_time = combine_local(request.day, request.at, self._timezone)
        notes = (request.notes or "").strip() or None

        created: list[Booking] = []
        with self._guard.hold(f"batch:{session.user_id}"):
            for index, service in enumerate(services):
                try:
                    booking = self._booking_api.create_booking(
                        customer_id=session.user_id,
                        barber_id=barber_id,
                        shop_id=shop.id,
                        service_id=service.id,
                        start_time=start_time,
                        notes=notes,
                    )
                except (BookingApiError, BookingApiContractError) as e:
                    self._logger.error(
                        "Error creating booking",
                        extra={
                            "service_id": service.id,
                            "error": str(e),
                            "reason": f"{len(created)} of {len(services)} created before failure",
                        },
                    )
                    return BatchOutcome(
                        quote=quote,
                        created=created,
                        failed_service=service,
                        not_attempted=services[index + 1 :],
                        error=str(e),
                    )
                created.append(booking)

        self._logger.info(
            "Booking confirmed for: %s | Total Price: $%s",
            ", ".join(s.name for s in services),
            quote.total_price,
        )
        return BatchOutcome(quote=quote, created=created)

    def _require_shop(self, shop_id: str) -> BarberShop:
        shop = self._marketplace_api.barber_shop(shop_id)
        if shop is None:
            raise NotFoundError(f"Barber shop {shop_id} not found")
        return shop

    def _resolve_services(self, shop: BarberShop, service_ids: Sequence[str]) -> list[ServiceSnapshot]:
        services: list[ServiceSnapshot] = []
        seen: set[str] = set()
        for service_id in service_ids:
            if service_id in seen:
                continue
            seen.add(service_id)
            service = shop.find_service(service_id)
            if service is None:
                raise ValueError(f"Service {service_id} is not offered by {shop.name}")
            if not service.is_active:
                raise ValueError(f"{service.name} is not currently available")
            services.append(service)
        if not services:
            raise ValueError("Select at least one service")
        return services

    @staticmethod
    def _fallback_barber(shop: BarberShop) -> str:
        barber = shop.first_active_barber()
        if barber is None:
            raise ValueError("No available barber found. Please try again later.")
        return barber.id
