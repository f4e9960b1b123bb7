from fastapi import APIRouter, Depends, Response

from barberbook.api.v1.errors import http_errors
from barberbook.api.v1.schemas import FavoriteSchema, ReviewRequestSchema, ReviewSchema, review_schema
from barberbook.api.v1.session import current_session
from barberbook.application.use_cases.favorites import FavoritesUseCase
from barberbook.application.use_cases.reviews import ReviewsUseCase
from barberbook.domain.entities.session import Session
from barberbook.wiring.dependencies import get_favorites_use_case, get_reviews_use_case

router = APIRouter()


def favorites_use_case(session: Session = Depends(current_session)) -> FavoritesUseCase:
    return get_favorites_use_case(session)


def reviews_use_case(session: Session = Depends(current_session)) -> ReviewsUseCase:
    return get_reviews_use_case(session)


@router.get("/shops/{shop_id}/favorite", response_model=FavoriteSchema)
def get_favorite(
    shop_id: str,
    session: Session = Depends(current_session),
    uc: FavoritesUseCase = Depends(favorites_use_case),
):
    with http_errors():
        favorite = uc.is_favorite(session, shop_id)
    return FavoriteSchema(shop_id=shop_id, favorite=favorite)


@router.put("/shops/{shop_id}/favorite", response_model=FavoriteSchema)
def add_favorite(
    shop_id: str,
    session: Session = Depends(current_session),
    uc: FavoritesUseCase = Depends(favorites_use_case),
):
    with http_errors():
        favorite = uc.set_favorite(session, shop_id, True)
    return FavoriteSchema(shop_id=shop_id, favorite=favorite)


@router.delete("/shops/{shop_id}/favorite", response_model=FavoriteSchema)
def remove_favorite(
    shop_id: str,
    session: Session = Depends(current_session),
    uc: FavoritesUseCase = Depends(favorites_use_case),
):
    with http_errors():
        favorite = uc.set_favorite(session, shop_id, False)
    return FavoriteSchema(shop_id=shop_id, favorite=favorite)


@router.get("/shops/{shop_id}/reviews", response_model=list[ReviewSchema])
def list_reviews(
    shop_id: str,
    session: Session = Depends(current_session),
    uc: ReviewsUseCase = Depends(reviews_use_case),
):
    with http_errors():
        reviews = uc.list_reviews(session, shop_id)
    return [review_schema(r) for r in reviews]


@router.post("/shops/{shop_id}/reviews", response_model=ReviewSchema)
def submit_review(
    shop_id: str,
    req: ReviewRequestSchema,
    session: Session = Depends(current_session),
    uc: ReviewsUseCase = Depends(reviews_use_case),
):
    with http_errors():
        review = uc.submit(session, shop_id, req.rating, req.comment)
    return review_schema(review)


@router.delete("/shops/{shop_id}/reviews/{review_id}", status_code=204)
def delete_review(
    shop_id: str,
    review_id: str,
    session: Session = Depends(current_session),
    uc: ReviewsUseCase = Depends(reviews_use_case),
) -> Response:
    with http_errors():
        uc.delete(session, shop_id, review_id)
    return Response(status_code=204)
