from datetime import date, datetime, time
from decimal import Decimal

from pydantic import BaseModel, Field

from barberbook.domain.entities.analytics import BookingStats, TimeRange
from barberbook.domain.entities.booking import Booking, BookingStatus, PartyRef, ServiceSnapshot
from barberbook.domain.entities.rating import Rating
from barberbook.domain.entities.session import Role


class LoginRequestSchema(BaseModel):
    email: str
    password: str


class SessionSchema(BaseModel):
    token: str
    user_id: str
    role: Role
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    expires_in: int | None = None


class PartySchema(BaseModel):
    id: str
    name: str
    email: str | None = None
    phone: str | None = None


class ServiceSchema(BaseModel):
    id: str
    name: str
    price: Decimal
    duration_minutes: int
    category: str | None = None
    description: str | None = None


class BookingSchema(BaseModel):
    id: str
    start_time: datetime
    end_time: datetime
    status: BookingStatus
    total_price: Decimal
    customer: PartySchema
    barber: PartySchema
    shop_id: str
    shop_name: str
    service: ServiceSchema
    notes: str | None = None
    cancel_reason: str | None = None
    actions: list[str] = Field(default_factory=list)


class BookingListSchema(BaseModel):
    bookings: list[BookingSchema]


class ActionRequestSchema(BaseModel):
    reason: str | None = None
    new_start_time: datetime | None = None


class ActionResponseSchema(BaseModel):
    action: str
    booking_id: str
    succeeded: bool
    booking: BookingSchema | None = None
    bookings: list[BookingSchema] | None = None
    error: str | None = None


class QuoteRequestSchema(BaseModel):
    shop_id: str
    service_ids: list[str] = Field(min_length=1)


class QuoteSchema(BaseModel):
    services: list[ServiceSchema]
    total_price: Decimal
    total_duration_minutes: int


class CreateBookingsRequestSchema(BaseModel):
    shop_id: str
    service_ids: list[str] = Field(min_length=1)
    day: date
    at: time
    barber_id: str | None = None
    notes: str | None = None


class CreateBookingsResponseSchema(BaseModel):
    succeeded: bool
    quote: QuoteSchema
    created: list[BookingSchema]
    failed_service_id: str | None = None
    not_attempted_service_ids: list[str] = Field(default_factory=list)
    error: str | None = None


class ServiceStatSchema(BaseModel):
    name: str
    count: int
    revenue: Decimal


class StatsSchema(BaseModel):
    total: int
    completed: int
    cancelled: int
    pending: int
    revenue: Decimal
    average_price: Decimal
    success_rate: float
    top_services: list[ServiceStatSchema]


class TimeRangeSchema(BaseModel):
    key: str
    start: datetime
    end: datetime


class ShopStatsSchema(BaseModel):
    shop_id: str
    shop_name: str
    stats: StatsSchema


class BarberAnalyticsSchema(BaseModel):
    range: TimeRangeSchema
    stats: StatsSchema


class OwnerAnalyticsSchema(BaseModel):
    range: TimeRangeSchema
    stats: StatsSchema
    shops: list[ShopStatsSchema]


class AppointmentPageSchema(BaseModel):
    items: list[BookingSchema]
    total: int
    page: int
    page_size: int


class FavoriteSchema(BaseModel):
    shop_id: str
    favorite: bool


class ReviewRequestSchema(BaseModel):
    rating: int
    comment: str | None = None


class ReviewSchema(BaseModel):
    id: str
    rating: int
    comment: str | None = None
    rater_id: str | None = None
    rater_name: str = ""
    created_at: datetime | None = None


def party_schema(party: PartyRef) -> PartySchema:
    return PartySchema(id=party.id, name=party.full_name, email=party.email, phone=party.phone)


def service_schema(service: ServiceSnapshot) -> ServiceSchema:
    return ServiceSchema(
        id=service.id,
        name=service.name,
        price=service.price,
        duration_minutes=service.duration_minutes,
        category=service.category,
        description=service.description,
    )


def booking_schema(booking: Booking, actions: list | None = None) -> BookingSchema:
    return BookingSchema(
        id=booking.id,
        start_time=booking.start_time,
        end_time=booking.end_time,
        status=booking.status,
        total_price=booking.total_price,
        customer=party_schema(booking.customer),
        barber=party_schema(booking.barber),
        shop_id=booking.shop.id,
        shop_name=booking.shop.name,
        service=service_schema(booking.service),
        notes=booking.notes,
        cancel_reason=booking.cancel_reason,
        actions=[a.value for a in actions or []],
    )


def stats_schema(stats: BookingStats) -> StatsSchema:
    return StatsSchema(
        total=stats.total,
        completed=stats.completed,
        cancelled=stats.cancelled,
        pending=stats.pending,
        revenue=stats.revenue,
        average_price=stats.average_price,
        success_rate=stats.success_rate,
        top_services=[ServiceStatSchema(name=s.name, count=s.count, revenue=s.revenue) for s in stats.top_services],
    )


def range_schema(time_range: TimeRange) -> TimeRangeSchema:
    return TimeRangeSchema(key=time_range.key, start=time_range.start, end=time_range.end)


def review_schema(rating: Rating) -> ReviewSchema:
    return ReviewSchema(
        id=rating.id,
        rating=rating.rating,
        comment=rating.comment,
        rater_id=rating.rater_id,
        rater_name=rating.rater_name,
        created_at=rating.created_at,
    )
