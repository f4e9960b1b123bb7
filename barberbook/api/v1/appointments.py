from datetime import date

from fastapi import APIRouter, Depends

from barberbook.api.v1.errors import http_errors
from barberbook.api.v1.schemas import AppointmentPageSchema, booking_schema
from barberbook.api.v1.session import current_session
from barberbook.application.ports.booking_api import AppointmentFilters
from barberbook.application.use_cases.appointments import OwnerAppointmentsUseCase
from barberbook.domain.entities.booking import BookingStatus
from barberbook.domain.entities.session import Session
from barberbook.wiring.dependencies import get_owner_appointments_use_case

router = APIRouter()


def appointments_use_case(session: Session = Depends(current_session)) -> OwnerAppointmentsUseCase:
    return get_owner_appointments_use_case(session)


@router.get("/appointments", response_model=AppointmentPageSchema)
def list_appointments(
    shop_id: str | None = None,
    barber_id: str | None = None,
    status: BookingStatus | None = None,
    start: date | None = None,
    end: date | None = None,
    search: str = "",
    page: int = 0,
    page_size: int | None = None,
    session: Session = Depends(current_session),
    uc: OwnerAppointmentsUseCase = Depends(appointments_use_case),
):
    filters = AppointmentFilters(
        barber_shop_id=shop_id,
        barber_id=barber_id,
        status=status,
        start_date=start.isoformat() if start else None,
        end_date=end.isoformat() if end else None,
    )
    with http_errors():
        result = uc.list_appointments(session, filters, search=search, page=page, page_size=page_size)
    return AppointmentPageSchema(
        items=[booking_schema(b) for b in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
    )
