from datetime import date

from fastapi import APIRouter, Depends, Query

from barberbook.api.v1.errors import http_errors
from barberbook.api.v1.schemas import (
    BarberAnalyticsSchema,
    OwnerAnalyticsSchema,
    ShopStatsSchema,
    range_schema,
    stats_schema,
)
from barberbook.api.v1.session import current_session
from barberbook.application.use_cases.analytics import AnalyticsUseCase
from barberbook.domain.entities.session import Session
from barberbook.wiring.dependencies import get_analytics_use_case

router = APIRouter()


def analytics_use_case(session: Session = Depends(current_session)) -> AnalyticsUseCase:
    return get_analytics_use_case(session)


@router.get("/analytics/barber", response_model=BarberAnalyticsSchema)
def barber_analytics(
    range_key: str = Query("this_month", alias="range"),
    session: Session = Depends(current_session),
    uc: AnalyticsUseCase = Depends(analytics_use_case),
):
    with http_errors():
        report = uc.barber_report(session, range_key)
    return BarberAnalyticsSchema(range=range_schema(report.time_range), stats=stats_schema(report.stats))


@router.get("/analytics/owner", response_model=OwnerAnalyticsSchema)
def owner_analytics(
    range_key: str = Query("this_month", alias="range"),
    shop_id: str | None = None,
    start: date | None = None,
    end: date | None = None,
    session: Session = Depends(current_session),
    uc: AnalyticsUseCase = Depends(analytics_use_case),
):
    with http_errors():
        report = uc.owner_report(session, range_key, shop_id=shop_id, start_date=start, end_date=end)
    return OwnerAnalyticsSchema(
        range=range_schema(report.time_range),
        stats=stats_schema(report.stats),
        shops=[
            ShopStatsSchema(shop_id=s.shop_id, shop_name=s.shop_name, stats=stats_schema(s.stats))
            for s in report.shops
        ],
    )
