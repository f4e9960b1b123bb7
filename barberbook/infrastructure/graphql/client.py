from __future__ import annotations

import logging
from typing import Any

import httpx

from barberbook.application.exceptions import (
    BookingApiContractError,
    BookingApiError,
    BookingApiUnavailableError,
)
from barberbook.core.config import settings


class GraphQLClient:
    def __init__(
        self,
        endpoint: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._endpoint = endpoint or settings.BOOKING_API_URL
        self._token = token
        self._client = http_client or httpx.Client(timeout=timeout or settings.BOOKING_API_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._endpoint:
            raise ValueError("BOOKING_API_URL is required for the GraphQL Booking API")

    def with_token(self, token: str | None) -> "GraphQLClient":
        """Same endpoint and connection pool, different bearer token."""
        return GraphQLClient(endpoint=self._endpoint, token=token, http_client=self._client)

    def execute(self, document: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        payload = {"query": document, "variables": variables or {}}

        try:
            response = self._client.post(self._endpoint, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self._logger.error(
                "Booking API HTTP error",
                extra={"status": e.response.status_code, "error": e.response.text[:500]},
            )
            raise BookingApiUnavailableError(f"Booking API returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            self._logger.error("Booking API unreachable", extra={"error": str(e)})
            raise BookingApiUnavailableError(f"Booking API request failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise BookingApiContractError("Booking API returned a non-JSON body") from e

        if not isinstance(body, dict):
            raise BookingApiContractError("Booking API returned a non-object body")

        errors = body.get("errors") or []
        if not isinstance(errors, list):
            raise BookingApiContractError("Booking API returned a malformed errors field")
        if errors:
            message = errors[0].get("message") if isinstance(errors[0], dict) else str(errors[0])
            self._logger.error("Booking API rejected request", extra={"error": message})
            raise BookingApiError(message or "Booking API error")

        data = body.get("data")
        if not isinstance(data, dict):
            raise BookingApiContractError("Booking API response has no data")
        return data
