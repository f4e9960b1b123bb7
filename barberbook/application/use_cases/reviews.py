from __future__ import annotations

import logging

from barberbook.application.exceptions import ActionNotAllowedError, NotFoundError
from barberbook.application.ports.marketplace_api import MarketplaceApiPort
from barberbook.application.utils.access import require
from barberbook.domain.entities.rating import RatedType, Rating
from barberbook.domain.entities.session import Session
from barberbook.domain.policies.authorization import VIEW, WRITE, Resource

MIN_RATING = 1
MAX_RATING = 5


class ReviewsUseCase:
    def __init__(self, api: MarketplaceApiPort) -> None:
        self._api = api
        self._logger = logging.getLogger(__name__)

    def list_reviews(self, session: Session, shop_id: str) -> list[Rating]:
        require(session, Resource.REVIEW, VIEW)
        return self._api.ratings_by_entity(shop_id, RatedType.BARBERSHOP)

    def submit(self, session: Session, shop_id: str, rating: int, comment: str | None = None) -> Rating:
        """Create the session user's review of a shop, or update it if one exists."""
        require(session, Resource.REVIEW, WRITE)
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValueError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
        comment = (comment or "").strip() or None

        own = self._own_review(session, shop_id)
        if own:
            saved = self._api.update_rating(own.id, rating, comment)
            self._logger.info("Review updated", extra={"reason": f"rating={rating}"})
            return saved
        saved = self._api.create_user_rating(
            user_id=session.user_id,
            entity_id=shop_id,
            entity_type=RatedType.BARBERSHOP,
            rating=rating,
            comment=comment,
        )
        self._logger.info("Review created", extra={"reason": f"rating={rating}"})
        return saved

    def delete(self, session: Session, shop_id: str, rating_id: str) -> None:
        require(session, Resource.REVIEW, WRITE)
        for review in self._api.ratings_by_entity(shop_id, RatedType.BARBERSHOP):
            if review.id == rating_id:
                if review.rater_id != session.user_id:
                    raise ActionNotAllowedError("Only the author can delete a review")
                self._api.delete_rating(rating_id)
                return
        raise NotFoundError(f"Review {rating_id} not found")

    def _own_review(self, session: Session, shop_id: str) -> Rating | None:
        for review in self._api.ratings_by_entity(shop_id, RatedType.BARBERSHOP):
            if review.rater_id == session.user_id:
                return review
        return None
