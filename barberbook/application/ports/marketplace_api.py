from __future__ import annotations

from abc import ABC, abstractmethod

from barberbook.domain.entities.rating import RatedType, Rating
from barberbook.domain.entities.shop import BarberShop


class MarketplaceApiPort(ABC):
    @abstractmethod
    def barber_shop(self, shop_id: str) -> BarberShop | None:
        """Shop with its barbers and services. None if unknown."""
        raise NotImplementedError

    @abstractmethod
    def owner_barber_shops(self, owner_id: str) -> list[BarberShop]:
        raise NotImplementedError

    @abstractmethod
    def is_favorite(self, user_id: str, shop_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def add_to_favorites(self, user_id: str, shop_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove_from_favorites(self, user_id: str, shop_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def ratings_by_entity(self, entity_id: str, entity_type: RatedType) -> list[Rating]:
        raise NotImplementedError

    @abstractmethod
    def create_user_rating(
        self,
        user_id: str,
        entity_id: str,
        entity_type: RatedType,
        rating: int,
        comment: str | None = None,
        booking_id: str | None = None,
    ) -> Rating:
        raise NotImplementedError

    @abstractmethod
    def update_rating(self, rating_id: str, rating: int, comment: str | None = None) -> Rating:
        raise NotImplementedError

    @abstractmethod
    def delete_rating(self, rating_id: str) -> None:
        raise NotImplementedError
