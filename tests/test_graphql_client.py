"""
Tests for the GraphQL transport and the Booking API adapter, using httpx.MockTransport.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from decimal import Decimal

import httpx
import pytest

from barberbook.application.exceptions import (
    BookingApiContractError,
    BookingApiError,
    BookingApiUnavailableError,
    SessionRequiredError,
)
from barberbook.application.use_cases.session import SessionUseCase
from barberbook.domain.entities.booking import BookingStatus
from barberbook.domain.entities.session import Role
from barberbook.infrastructure.graphql.auth_api import GraphQLAuthApi
from barberbook.infrastructure.graphql.booking_api import GraphQLBookingApi
from barberbook.infrastructure.graphql.client import GraphQLClient
from barberbook.infrastructure.store.memory_store import MemorySessionStore

ENDPOINT = "https://api.example.test/graphql"

BOOKING_PAYLOAD = {
    "id": "42",
    "startTime": "2026-03-20T17:00:00.000Z",
    "endTime": "2026-03-20T17:30:00.000Z",
    "status": "PENDING",
    "totalPrice": 20,
    "notes": None,
    "cancelReason": "stale",
    "user": {"id": "user_1", "firstName": "Ana", "lastName": "Silva"},
    "barber": {"id": "barber_1", "firstName": "Marco", "lastName": "Reyes"},
    "barberShop": {"id": "shop_1", "name": "Fade Factory", "city": "Austin"},
    "managementService": {"id": "service_1", "name": "Classic Cut", "price": "20.00", "durationMinutes": 30},
}


def _client(handler, token: str | None = None) -> GraphQLClient:
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return GraphQLClient(endpoint=ENDPOINT, token=token, http_client=http_client)


def test_bearer_token_and_variables_are_sent():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"data": {"ok": True}})

    data = _client(handler).with_token("abc").execute("query { ok }", {"x": 1})

    assert data == {"ok": True}
    assert seen["auth"] == "Bearer abc"
    assert seen["body"] == {"query": "query { ok }", "variables": {"x": 1}}


def test_no_token_means_no_authorization_header():
    def handler(request: httpx.Request) -> httpx.Response:
        assert "Authorization" not in request.headers
        return httpx.Response(200, json={"data": {}})

    assert _client(handler).execute("query { ok }") == {}


def test_graphql_errors_surface_the_first_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"errors": [{"message": "Barber is not available at the requested time"}], "data": None},
        )

    with pytest.raises(BookingApiError, match="Barber is not available"):
        _client(handler).execute("mutation { x }")


def test_http_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="down")

    with pytest.raises(BookingApiError, match="HTTP 503"):
        _client(handler).execute("query { ok }")


def test_malformed_responses():
    def not_json(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    def no_data(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": None})

    with pytest.raises(BookingApiContractError):
        _client(not_json).execute("query { ok }")
    with pytest.raises(BookingApiContractError):
        _client(no_data).execute("query { ok }")


def test_missing_endpoint(monkeypatch):
    from barberbook.core.config import settings

    monkeypatch.setattr(settings, "BOOKING_API_URL", None)
    with pytest.raises(ValueError):
        GraphQLClient(http_client=httpx.Client())


def test_create_booking_maps_input_and_payload():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["variables"] = json.loads(request.content)["variables"]
        return httpx.Response(200, json={"data": {"createBooking": BOOKING_PAYLOAD}})

    api = GraphQLBookingApi(_client(handler, token="abc"))
    booking = api.create_booking(
        customer_id="user_1",
        barber_id="barber_1",
        shop_id="shop_1",
        service_id="service_1",
        start_time=datetime(2026, 3, 20, 17, 0, tzinfo=timezone.utc),
    )

    assert seen["variables"]["input"] == {
        "userId": "user_1",
        "barberId": "barber_1",
        "barberShopId": "shop_1",
        "managementServiceId": "service_1",
        "startTime": "2026-03-20T17:00:00Z",
        "notes": "",
    }
    assert booking.id == "42"
    assert booking.status is BookingStatus.PENDING
    assert booking.start_time == datetime(2026, 3, 20, 17, 0, tzinfo=timezone.utc)
    assert booking.total_price == Decimal("20")
    assert booking.service.price == Decimal("20.00")
    assert booking.customer.full_name == "Ana Silva"
    # a cancel reason only means something on a cancelled booking
    assert booking.cancel_reason is None


def test_unknown_status_is_a_contract_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": {"bookingsByUser": [dict(BOOKING_PAYLOAD, status="LOST")]}})

    with pytest.raises(BookingApiContractError):
        GraphQLBookingApi(_client(handler)).bookings_by_user("user_1")


def test_login_reads_barber_profile():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "data": {
                    "login": {
                        "token": "jwt",
                        "refreshToken": "refresh",
                        "expiresIn": 900,
                        "user": None,
                        "barber": {"id": "barber_1", "email": "marco@example.com", "role": "BARBER"},
                    }
                }
            },
        )

    session = GraphQLAuthApi(_client(handler)).login("marco@example.com", "pw")

    assert session.token == "jwt"
    assert session.role is Role.BARBER
    assert session.user_id == "barber_1"
    assert session.expires_in == 900


def test_non_object_body_is_a_contract_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[1, 2])

    with pytest.raises(BookingApiContractError):
        _client(handler).execute("query { ok }")


def test_transport_and_http_failures_are_unavailable_errors():
    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    def server_error(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    with pytest.raises(BookingApiUnavailableError):
        _client(unreachable).execute("query { ok }")
    with pytest.raises(BookingApiUnavailableError):
        _client(server_error).execute("query { ok }")


def test_outage_during_login_is_not_reported_as_bad_credentials():
    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    uc = SessionUseCase(auth_api=GraphQLAuthApi(_client(unreachable)), store=MemorySessionStore())

    with pytest.raises(BookingApiUnavailableError):
        uc.login("marco@example.com", "pw")


def test_rejected_login_requires_a_session():
    def rejected(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"errors": [{"message": "Invalid credentials"}], "data": None})

    uc = SessionUseCase(auth_api=GraphQLAuthApi(_client(rejected)), store=MemorySessionStore())

    with pytest.raises(SessionRequiredError, match="Invalid credentials"):
        uc.login("marco@example.com", "wrong")


def test_malformed_integers_are_contract_errors():
    payload = dict(
        BOOKING_PAYLOAD,
        managementService=dict(BOOKING_PAYLOAD["managementService"], durationMinutes="half an hour"),
    )

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": {"bookingsByUser": [payload]}})

    with pytest.raises(BookingApiContractError):
        GraphQLBookingApi(_client(handler)).bookings_by_user("user_1")
