from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from barberbook.application.exceptions import BookingApiContractError
from barberbook.domain.entities.booking import Booking, BookingStatus, PartyRef, ServiceSnapshot, ShopRef
from barberbook.domain.entities.rating import Rating
from barberbook.domain.entities.session import Role, Session
from barberbook.domain.entities.shop import BarberShop, ShopBarber


def parse_instant(value: Any) -> datetime:
    """ISO-8601 string to an aware datetime. Naive values are taken as UTC."""
    if not isinstance(value, str) or not value:
        raise BookingApiContractError(f"Expected ISO-8601 timestamp, got {value!r}")
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise BookingApiContractError(f"Invalid timestamp {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _optional_instant(value: Any) -> datetime | None:
    if not value:
        return None
    try:
        return parse_instant(value)
    except BookingApiContractError:
        return None


def to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise BookingApiContractError(f"Invalid amount {value!r}") from e


def to_int(value: Any) -> int:
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise BookingApiContractError(f"Invalid integer {value!r}") from e


def format_instant(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def party_from_payload(data: dict[str, Any] | None) -> PartyRef:
    data = data or {}
    return PartyRef(
        id=str(data.get("id") or ""),
        first_name=data.get("firstName") or "",
        last_name=data.get("lastName") or "",
        email=data.get("email"),
        phone=data.get("phone"),
    )


def service_from_payload(data: dict[str, Any] | None) -> ServiceSnapshot:
    data = data or {}
    category = data.get("category") or {}
    return ServiceSnapshot(
        id=str(data.get("id") or ""),
        name=data.get("name") or "",
        price=to_decimal(data.get("price")),
        duration_minutes=to_int(data.get("durationMinutes")),
        is_active=data.get("isActive", True) is not False,
        description=data.get("description"),
        category=category.get("name") if isinstance(category, dict) else None,
    )


def booking_from_payload(data: dict[str, Any] | None) -> Booking:
    if not data or not data.get("id"):
        raise BookingApiContractError("Booking payload is missing an id")
    try:
        status = BookingStatus(data.get("status"))
    except ValueError as e:
        raise BookingApiContractError(f"Unknown booking status {data.get('status')!r}") from e

    shop = data.get("barberShop") or {}
    return Booking(
        id=str(data["id"]),
        start_time=parse_instant(data.get("startTime")),
        end_time=parse_instant(data.get("endTime")),
        status=status,
        total_price=to_decimal(data.get("totalPrice")),
        customer=party_from_payload(data.get("user")),
        barber=party_from_payload(data.get("barber")),
        shop=ShopRef(id=str(shop.get("id") or ""), name=shop.get("name") or "", city=shop.get("city")),
        service=service_from_payload(data.get("managementService")),
        notes=data.get("notes") or None,
        cancel_reason=data.get("cancelReason") if status is BookingStatus.CANCELLED else None,
        created_at=_optional_instant(data.get("createdAt")),
        updated_at=_optional_instant(data.get("updatedAt")),
    )


def shop_from_payload(data: dict[str, Any]) -> BarberShop:
    return BarberShop(
        id=str(data.get("id") or ""),
        name=data.get("name") or "",
        city=data.get("city"),
        address=data.get("address"),
        is_active=data.get("isActive", True) is not False,
        barbers=[
            ShopBarber(barber=party_from_payload(b), is_active=b.get("isActive", True) is not False)
            for b in data.get("barbers") or []
        ],
        services=[service_from_payload(s) for s in data.get("services") or []],
    )


def rating_from_payload(data: dict[str, Any]) -> Rating:
    if not data or not data.get("id"):
        raise BookingApiContractError("Rating payload is missing an id")
    rater = data.get("rater") or {}
    return Rating(
        id=str(data["id"]),
        rating=to_int(data.get("rating")),
        comment=data.get("comment"),
        rater_id=str(rater["id"]) if rater.get("id") else None,
        rater_name=f"{rater.get('firstName') or ''} {rater.get('lastName') or ''}".strip(),
        created_at=_optional_instant(data.get("createdAt")),
    )


def session_from_login(data: dict[str, Any] | None, now_ts: float | None = None) -> Session:
    """Login payload carries either a `user` or a `barber` profile."""
    if not data or not data.get("token"):
        raise BookingApiContractError("Login payload is missing a token")
    profile = data.get("user") or data.get("barber")
    if not profile or not profile.get("id"):
        raise BookingApiContractError("Login payload has neither user nor barber")
    try:
        role = Role(profile.get("role"))
    except ValueError as e:
        raise BookingApiContractError(f"Unknown role {profile.get('role')!r}") from e
    return Session(
        token=data["token"],
        refresh_token=data.get("refreshToken"),
        user_id=str(profile["id"]),
        role=role,
        email=profile.get("email") or "",
        first_name=profile.get("firstName") or "",
        last_name=profile.get("lastName") or "",
        expires_in=data.get("expiresIn"),
        created_at=now_ts,
    )
