from datetime import timedelta
from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from barberbook.core.config import settings
from barberbook.application.ports.auth_api import AuthApiPort
from barberbook.application.ports.booking_api import BookingApiPort
from barberbook.application.ports.marketplace_api import MarketplaceApiPort
from barberbook.application.ports.session_store import SessionStorePort
from barberbook.application.use_cases.analytics import AnalyticsUseCase
from barberbook.application.use_cases.appointments import OwnerAppointmentsUseCase
from barberbook.application.use_cases.create_bookings import CreateBookingsUseCase
from barberbook.application.use_cases.favorites import FavoritesUseCase
from barberbook.application.use_cases.manage_bookings import ManageBookingsUseCase
from barberbook.application.use_cases.reviews import ReviewsUseCase
from barberbook.application.use_cases.session import SessionUseCase
from barberbook.application.utils.clock import safe_timezone
from barberbook.application.utils.in_flight import InFlightGuard
from barberbook.domain.entities.session import Session
from barberbook.domain.policies.eligibility import EligibilityPolicy
from barberbook.infrastructure.graphql.auth_api import GraphQLAuthApi
from barberbook.infrastructure.graphql.booking_api import GraphQLBookingApi
from barberbook.infrastructure.graphql.client import GraphQLClient
from barberbook.infrastructure.graphql.marketplace_api import GraphQLMarketplaceApi
from barberbook.infrastructure.mock.demo_data import build_demo_api
from barberbook.infrastructure.mock.mock_barber_api import MockBarberApi
from barberbook.infrastructure.store.json_store import JsonSessionStore
from barberbook.infrastructure.store.memory_store import MemorySessionStore


logger = logging.getLogger(__name__)

_mock_api: MockBarberApi | None = None
_session_store: SessionStorePort | None = None
_guard = InFlightGuard()


def use_mock_api() -> bool:
    if settings.BOOKING_API_URL:
        return False
    if settings.ENV.lower() in {"dev", "local"}:
        return True
    raise ValueError("BOOKING_API_URL is required outside dev/local.")


def get_mock_api() -> MockBarberApi:
    global _mock_api
    if _mock_api is None:
        logger.info("Using in-memory Booking API (BOOKING_API_URL missing, ENV=dev/local)")
        _mock_api = build_demo_api()
    return _mock_api


@lru_cache
def get_graphql_client() -> GraphQLClient:
    return GraphQLClient()


def _client_for(session: Session | None) -> GraphQLClient:
    return get_graphql_client().with_token(session.token if session else None)


def get_booking_api(session: Session | None = None) -> BookingApiPort:
    if use_mock_api():
        return get_mock_api()
    return GraphQLBookingApi(_client_for(session))


def get_marketplace_api(session: Session | None = None) -> MarketplaceApiPort:
    if use_mock_api():
        return get_mock_api()
    return GraphQLMarketplaceApi(_client_for(session))


def get_auth_api() -> AuthApiPort:
    if use_mock_api():
        return get_mock_api()
    return GraphQLAuthApi(_client_for(None))


def get_session_store() -> SessionStorePort:
    global _session_store
    if _session_store is None:
        if settings.SESSION_STORE.lower() == "json":
            _session_store = JsonSessionStore(data_dir=settings.SESSION_DATA_DIR)
        else:
            _session_store = MemorySessionStore()
    return _session_store


def get_timezone() -> ZoneInfo:
    return safe_timezone(settings.BUSINESS_TIMEZONE)


def get_eligibility_policy() -> EligibilityPolicy:
    return EligibilityPolicy(
        cancel_lead=timedelta(hours=settings.CANCEL_LEAD_HOURS),
        reschedule_lead=timedelta(hours=settings.RESCHEDULE_LEAD_HOURS),
    )


def get_session_use_case() -> SessionUseCase:
    return SessionUseCase(auth_api=get_auth_api(), store=get_session_store())


def get_manage_bookings_use_case(session: Session) -> ManageBookingsUseCase:
    return ManageBookingsUseCase(
        api=get_booking_api(session),
        policy=get_eligibility_policy(),
        guard=_guard,
    )


def get_create_bookings_use_case(session: Session) -> CreateBookingsUseCase:
    return CreateBookingsUseCase(
        booking_api=get_booking_api(session),
        marketplace_api=get_marketplace_api(session),
        timezone=get_timezone(),
        guard=_guard,
    )


def get_analytics_use_case(session: Session) -> AnalyticsUseCase:
    return AnalyticsUseCase(
        booking_api=get_booking_api(session),
        marketplace_api=get_marketplace_api(session),
        timezone=get_timezone(),
    )


def get_owner_appointments_use_case(session: Session) -> OwnerAppointmentsUseCase:
    return OwnerAppointmentsUseCase(api=get_booking_api(session), page_size=settings.APPOINTMENTS_PAGE_SIZE)


def get_favorites_use_case(session: Session) -> FavoritesUseCase:
    return FavoritesUseCase(api=get_marketplace_api(session))


def get_reviews_use_case(session: Session) -> ReviewsUseCase:
    return ReviewsUseCase(api=get_marketplace_api(session))
