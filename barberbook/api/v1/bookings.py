from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from barberbook.api.v1.errors import http_errors
from barberbook.api.v1.schemas import (
    ActionRequestSchema,
    ActionResponseSchema,
    BookingListSchema,
    CreateBookingsRequestSchema,
    CreateBookingsResponseSchema,
    QuoteRequestSchema,
    QuoteSchema,
    booking_schema,
    service_schema,
)
from barberbook.api.v1.session import current_session
from barberbook.application.use_cases.create_bookings import BookingQuote, BookingRequest, CreateBookingsUseCase
from barberbook.application.use_cases.manage_bookings import BookingView, ManageBookingsUseCase
from barberbook.domain.entities.session import Session
from barberbook.domain.policies.authorization import BookingAction
from barberbook.wiring.dependencies import get_create_bookings_use_case, get_manage_bookings_use_case

router = APIRouter()


def manage_bookings_use_case(session: Session = Depends(current_session)) -> ManageBookingsUseCase:
    return get_manage_bookings_use_case(session)


def create_bookings_use_case(session: Session = Depends(current_session)) -> CreateBookingsUseCase:
    return get_create_bookings_use_case(session)


def _views(views: list[BookingView]) -> list:
    return [booking_schema(v.booking, v.actions) for v in views]


def _quote(quote: BookingQuote) -> QuoteSchema:
    return QuoteSchema(
        services=[service_schema(s) for s in quote.services],
        total_price=quote.total_price,
        total_duration_minutes=quote.total_duration_minutes,
    )


@router.get("/bookings", response_model=BookingListSchema)
def list_bookings(
    scope: str = Query("all"),
    session: Session = Depends(current_session),
    uc: ManageBookingsUseCase = Depends(manage_bookings_use_case),
):
    with http_errors():
        views = uc.list_bookings(session, scope=scope)
    return BookingListSchema(bookings=_views(views))


@router.post("/bookings/quote", response_model=QuoteSchema)
def quote(
    req: QuoteRequestSchema,
    uc: CreateBookingsUseCase = Depends(create_bookings_use_case),
):
    with http_errors():
        result = uc.quote(req.shop_id, req.service_ids)
    return _quote(result)


@router.post("/bookings", response_model=CreateBookingsResponseSchema, status_code=201)
def create_bookings(
    req: CreateBookingsRequestSchema,
    session: Session = Depends(current_session),
    uc: CreateBookingsUseCase = Depends(create_bookings_use_case),
):
    with http_errors():
        outcome = uc.submit(
            session,
            BookingRequest(
                shop_id=req.shop_id,
                service_ids=req.service_ids,
                day=req.day,
                at=req.at,
                barber_id=req.barber_id,
                notes=req.notes,
            ),
        )

    body = CreateBookingsResponseSchema(
        succeeded=outcome.succeeded,
        quote=_quote(outcome.quote),
        created=[booking_schema(b) for b in outcome.created],
        failed_service_id=outcome.failed_service.id if outcome.failed_service else None,
        not_attempted_service_ids=[s.id for s in outcome.not_attempted],
        error=outcome.error,
    )
    if not outcome.succeeded:
        return JSONResponse(status_code=502, content=body.model_dump(mode="json"))
    return body


@router.post("/bookings/{booking_id}/actions/{action}", response_model=ActionResponseSchema)
def perform_action(
    booking_id: str,
    action: BookingAction,
    req: ActionRequestSchema | None = None,
    session: Session = Depends(current_session),
    uc: ManageBookingsUseCase = Depends(manage_bookings_use_case),
):
    req = req or ActionRequestSchema()
    with http_errors():
        outcome = uc.perform(
            session,
            booking_id,
            action,
            reason=req.reason,
            new_start_time=req.new_start_time,
        )

    body = ActionResponseSchema(
        action=outcome.action.value,
        booking_id=outcome.booking_id,
        succeeded=outcome.succeeded,
        booking=booking_schema(outcome.booking) if outcome.booking else None,
        bookings=_views(outcome.bookings) if outcome.bookings is not None else None,
        error=outcome.error,
    )
    if not outcome.succeeded:
        return JSONResponse(status_code=502, content=body.model_dump(mode="json"))
    return body
