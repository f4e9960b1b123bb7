from __future__ import annotations

from barberbook.application.ports.marketplace_api import MarketplaceApiPort
from barberbook.application.utils.access import require
from barberbook.domain.entities.session import Session
from barberbook.domain.policies.authorization import VIEW, WRITE, Resource


class FavoritesUseCase:
    def __init__(self, api: MarketplaceApiPort) -> None:
        self._api = api

    def is_favorite(self, session: Session, shop_id: str) -> bool:
        require(session, Resource.FAVORITE, VIEW)
        return self._api.is_favorite(session.user_id, shop_id)

    def set_favorite(self, session: Session, shop_id: str, favorite: bool) -> bool:
        require(session, Resource.FAVORITE, WRITE)
        if favorite:
            self._api.add_to_favorites(session.user_id, shop_id)
        else:
            self._api.remove_from_favorites(session.user_id, shop_id)
        return self._api.is_favorite(session.user_id, shop_id)

    def toggle(self, session: Session, shop_id: str) -> bool:
        """Flip the favorite flag and return the server's answer afterwards."""
        return self.set_favorite(session, shop_id, not self.is_favorite(session, shop_id))
