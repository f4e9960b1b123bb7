from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Callable

from barberbook.application.exceptions import BookingApiError
from barberbook.application.ports.auth_api import AuthApiPort
from barberbook.application.ports.booking_api import AppointmentFilters, BookingApiPort
from barberbook.application.ports.marketplace_api import MarketplaceApiPort
from barberbook.domain.entities.booking import Booking, BookingStatus, PartyRef, ShopRef
from barberbook.domain.entities.rating import RatedType, Rating
from barberbook.domain.entities.session import Role, Session
from barberbook.domain.entities.shop import BarberShop

# Transitions the server accepts; the client only ever offers a subset.
SERVER_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED, BookingStatus.NO_SHOW}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.IN_PROGRESS, BookingStatus.CANCELLED, BookingStatus.NO_SHOW}),
    BookingStatus.IN_PROGRESS: frozenset({BookingStatus.COMPLETED}),
}

_BLOCKING_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.IN_PROGRESS})


class MockBarberApi(BookingApiPort, MarketplaceApiPort, AuthApiPort):
    """In-memory stand-in for the GraphQL Booking API, used in dev and tests."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._users: dict[str, tuple[str, PartyRef, Role]] = {}
        self._shops: dict[str, BarberShop] = {}
        self._shop_owners: dict[str, str] = {}
        self._bookings: dict[str, Booking] = {}
        self._favorites: set[tuple[str, str]] = set()
        self._ratings: dict[str, tuple[str, RatedType, Rating]] = {}
        self._lock = threading.Lock()
        self._seq = 0
        self._logger = logging.getLogger(__name__)

    def _next_id(self, prefix: str) -> str:
        self._seq += 1
        return f"{prefix}_{self._seq}"

    # Seeding

    def add_user(self, email: str, password: str, profile: PartyRef, role: Role) -> None:
        with self._lock:
            self._users[email.lower()] = (password, profile, role)

    def add_shop(self, shop: BarberShop, owner_id: str | None = None) -> None:
        with self._lock:
            self._shops[shop.id] = shop
            if owner_id:
                self._shop_owners[shop.id] = owner_id

    def add_booking(self, booking: Booking) -> None:
        with self._lock:
            self._bookings[booking.id] = booking

    def get_booking(self, booking_id: str) -> Booking | None:
        return self._bookings.get(booking_id)

    # AuthApiPort

    def login(self, email: str, password: str) -> Session:
        entry = self._users.get(email.lower())
        if not entry or entry[0] != password:
            raise BookingApiError("Invalid email or password")
        _, profile, role = entry
        with self._lock:
            token = self._next_id("mock_token")
        return Session(
            token=token,
            refresh_token=f"{token}_refresh",
            user_id=profile.id,
            role=role,
            email=profile.email or email,
            first_name=profile.first_name,
            last_name=profile.last_name,
            expires_in=3600,
            created_at=self._clock().timestamp(),
        )

    # BookingApiPort

    def create_booking(
        self,
        customer_id: str,
        barber_id: str,
        shop_id: str,
        service_id: str,
        start_time: datetime,
        notes: str | None = None,
    ) -> Booking:
        shop = self._shops.get(shop_id)
        if not shop:
            raise BookingApiError(f"Barber shop {shop_id} not found")
        service = shop.find_service(service_id)
        if not service or not service.is_active:
            raise BookingApiError(f"Service {service_id} is not offered by this shop")
        barber = next((b.barber for b in shop.barbers if b.barber.id == barber_id), None)
        if not barber:
            raise BookingApiError(f"Barber {barber_id} does not work at this shop")

        end_time = start_time + timedelta(minutes=service.duration_minutes)
        with self._lock:
            self._ensure_barber_free(barber_id, start_time, end_time, customer_id=customer_id)
            now = self._clock()
            booking = Booking(
                id=self._next_id("booking"),
                start_time=start_time,
                end_time=end_time,
                status=BookingStatus.PENDING,
                total_price=service.price,
                customer=self._party(customer_id),
                barber=barber,
                shop=ShopRef(id=shop.id, name=shop.name, city=shop.city),
                service=service,
                notes=notes or None,
                created_at=now,
                updated_at=now,
            )
            self._bookings[booking.id] = booking

        self._logger.info("Mock booking created", extra={"booking_id": booking.id, "service_id": service_id})
        return booking

    def update_booking_status(
        self,
        booking_id: str,
        status: BookingStatus,
        reason: str | None = None,
    ) -> Booking:
        with self._lock:
            booking = self._require_booking(booking_id)
            if status not in SERVER_TRANSITIONS.get(booking.status, frozenset()):
                raise BookingApiError(f"Cannot change booking from {booking.status.value} to {status.value}")
            updated = replace(
                booking,
                status=status,
                cancel_reason=reason if status is BookingStatus.CANCELLED else None,
                updated_at=self._clock(),
            )
            self._bookings[booking_id] = updated
        return updated

    def reschedule_booking(self, booking_id: str, new_start_time: datetime) -> Booking:
        with self._lock:
            booking = self._require_booking(booking_id)
            if booking.status not in (BookingStatus.PENDING, BookingStatus.CONFIRMED):
                raise BookingApiError(f"Cannot reschedule a {booking.status.value} booking")
            new_end_time = new_start_time + (booking.end_time - booking.start_time)
            self._ensure_barber_free(
                booking.barber.id,
                new_start_time,
                new_end_time,
                customer_id=booking.customer.id,
                ignore_id=booking_id,
            )
            updated = replace(booking, start_time=new_start_time, end_time=new_end_time, updated_at=self._clock())
            self._bookings[booking_id] = updated
        return updated

    def bookings_by_user(self, user_id: str) -> list[Booking]:
        return self._sorted(b for b in self._all_bookings() if b.customer.id == user_id)

    def bookings_by_barber(self, barber_id: str) -> list[Booking]:
        return self._sorted(b for b in self._all_bookings() if b.barber.id == barber_id)

    def upcoming_bookings(self, user_id: str) -> list[Booking]:
        return [b for b in self.bookings_by_user(user_id) if self._is_upcoming(b)]

    def upcoming_bookings_by_barber(self, barber_id: str) -> list[Booking]:
        return [b for b in self.bookings_by_barber(barber_id) if self._is_upcoming(b)]

    def owner_appointments(self, owner_id: str, filters: AppointmentFilters | None = None) -> list[Booking]:
        filters = filters or AppointmentFilters()
        shop_ids = {shop.id for shop in self.owner_barber_shops(owner_id)}
        results = []
        for booking in self._all_bookings():
            if booking.shop.id not in shop_ids:
                continue
            if filters.barber_shop_id and booking.shop.id != filters.barber_shop_id:
                continue
            if filters.barber_id and booking.barber.id != filters.barber_id:
                continue
            if filters.status and booking.status is not filters.status:
                continue
            day = booking.start_time.astimezone(timezone.utc).date().isoformat()
            if filters.start_date and day < filters.start_date:
                continue
            if filters.end_date and day > filters.end_date:
                continue
            results.append(booking)
        return self._sorted(results)

    # MarketplaceApiPort

    def barber_shop(self, shop_id: str) -> BarberShop | None:
        return self._shops.get(shop_id)

    def owner_barber_shops(self, owner_id: str) -> list[BarberShop]:
        with self._lock:
            return [shop for shop_id, shop in self._shops.items() if self._shop_owners.get(shop_id) == owner_id]

    def is_favorite(self, user_id: str, shop_id: str) -> bool:
        with self._lock:
            return (user_id, shop_id) in self._favorites

    def add_to_favorites(self, user_id: str, shop_id: str) -> None:
        if shop_id not in self._shops:
            raise BookingApiError(f"Barber shop {shop_id} not found")
        with self._lock:
            self._favorites.add((user_id, shop_id))

    def remove_from_favorites(self, user_id: str, shop_id: str) -> None:
        with self._lock:
            self._favorites.discard((user_id, shop_id))

    def ratings_by_entity(self, entity_id: str, entity_type: RatedType) -> list[Rating]:
        with self._lock:
            ratings = list(self._ratings.values())
        return [
            rating
            for rated_id, rated_type, rating in ratings
            if rated_id == entity_id and rated_type is entity_type
        ]

    def create_user_rating(
        self,
        user_id: str,
        entity_id: str,
        entity_type: RatedType,
        rating: int,
        comment: str | None = None,
        booking_id: str | None = None,
    ) -> Rating:
        rater = self._party(user_id)
        with self._lock:
            created = Rating(
                id=self._next_id("rating"),
                rating=rating,
                comment=comment,
                rater_id=user_id,
                rater_name=rater.full_name,
                created_at=self._clock(),
            )
            self._ratings[created.id] = (entity_id, entity_type, created)
        return created

    def update_rating(self, rating_id: str, rating: int, comment: str | None = None) -> Rating:
        with self._lock:
            entry = self._ratings.get(rating_id)
            if not entry:
                raise BookingApiError(f"Rating {rating_id} not found")
            entity_id, entity_type, current = entry
            updated = replace(current, rating=rating, comment=comment)
            self._ratings[rating_id] = (entity_id, entity_type, updated)
        return updated

    def delete_rating(self, rating_id: str) -> None:
        with self._lock:
            if self._ratings.pop(rating_id, None) is None:
                raise BookingApiError(f"Rating {rating_id} not found")

    # Helpers

    def _require_booking(self, booking_id: str) -> Booking:
        booking = self._bookings.get(booking_id)
        if not booking:
            raise BookingApiError(f"Booking {booking_id} not found")
        return booking

    def _ensure_barber_free(
        self,
        barber_id: str,
        start: datetime,
        end: datetime,
        customer_id: str,
        ignore_id: str | None = None,
    ) -> None:
        for other in self._bookings.values():
            if other.id == ignore_id or other.barber.id != barber_id:
                continue
            # a customer may stack several services into one slot
            if other.customer.id == customer_id:
                continue
            if other.status not in _BLOCKING_STATUSES:
                continue
            if not (end <= other.start_time or start >= other.end_time):
                raise BookingApiError("Barber is not available at the requested time")

    def _party(self, user_id: str) -> PartyRef:
        for _, profile, _ in list(self._users.values()):
            if profile.id == user_id:
                return profile
        return PartyRef(id=user_id)

    def _all_bookings(self) -> list[Booking]:
        with self._lock:
            return list(self._bookings.values())

    def _is_upcoming(self, booking: Booking) -> bool:
        return booking.start_time > self._clock() and booking.status in (
            BookingStatus.PENDING,
            BookingStatus.CONFIRMED,
        )

    @staticmethod
    def _sorted(bookings) -> list[Booking]:
        return sorted(bookings, key=lambda b: b.start_time)
