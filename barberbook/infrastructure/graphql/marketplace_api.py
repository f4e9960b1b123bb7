from __future__ import annotations

import logging
from typing import Any

from barberbook.application.exceptions import BookingApiContractError
from barberbook.application.ports.marketplace_api import MarketplaceApiPort
from barberbook.domain.entities.rating import RatedType, Rating
from barberbook.domain.entities.shop import BarberShop
from barberbook.infrastructure.graphql import documents
from barberbook.infrastructure.graphql.client import GraphQLClient
from barberbook.infrastructure.graphql.mappers import rating_from_payload, shop_from_payload


class GraphQLMarketplaceApi(MarketplaceApiPort):
    def __init__(self, client: GraphQLClient) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    def barber_shop(self, shop_id: str) -> BarberShop | None:
        data = self._client.execute(documents.BARBER_SHOP, {"id": shop_id})
        shop = data.get("barberShop")
        return shop_from_payload(shop) if shop else None

    def owner_barber_shops(self, owner_id: str) -> list[BarberShop]:
        data = self._client.execute(documents.OWNER_BARBER_SHOPS, {"ownerId": owner_id})
        return [shop_from_payload(s) for s in data.get("getOwnerBarberShops") or []]

    def is_favorite(self, user_id: str, shop_id: str) -> bool:
        data = self._client.execute(documents.IS_FAVORITE, {"userId": user_id, "shopId": shop_id})
        return bool(data.get("isFavorite"))

    def add_to_favorites(self, user_id: str, shop_id: str) -> None:
        self._client.execute(documents.ADD_TO_FAVORITES, {"userId": user_id, "shopId": shop_id})
        self._logger.info("Shop added to favorites", extra={"shop_id": shop_id})

    def remove_from_favorites(self, user_id: str, shop_id: str) -> None:
        self._client.execute(documents.REMOVE_FROM_FAVORITES, {"userId": user_id, "shopId": shop_id})
        self._logger.info("Shop removed from favorites", extra={"shop_id": shop_id})

    def ratings_by_entity(self, entity_id: str, entity_type: RatedType) -> list[Rating]:
        data = self._client.execute(
            documents.RATINGS_BY_ENTITY, {"entityId": entity_id, "entityType": entity_type.value}
        )
        return [rating_from_payload(r) for r in data.get("ratingsByEntity") or []]

    def create_user_rating(
        self,
        user_id: str,
        entity_id: str,
        entity_type: RatedType,
        rating: int,
        comment: str | None = None,
        booking_id: str | None = None,
    ) -> Rating:
        variables = {
            "userId": user_id,
            "entityId": entity_id,
            "entityType": entity_type.value,
            "rating": rating,
            "comment": comment,
            "bookingId": booking_id,
        }
        data = self._client.execute(documents.CREATE_USER_RATING, variables)
        return rating_from_payload(_field(data, "createUserRating"))

    def update_rating(self, rating_id: str, rating: int, comment: str | None = None) -> Rating:
        data = self._client.execute(
            documents.UPDATE_RATING, {"id": rating_id, "rating": rating, "comment": comment}
        )
        return rating_from_payload(_field(data, "updateRating"))

    def delete_rating(self, rating_id: str) -> None:
        self._client.execute(documents.DELETE_RATING, {"id": rating_id})


def _field(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name)
    if not isinstance(value, dict):
        raise BookingApiContractError(f"Booking API response has no {name}")
    return value
