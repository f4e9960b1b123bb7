from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Callable

from barberbook.domain.entities.booking import PartyRef, ServiceSnapshot
from barberbook.domain.entities.session import Role
from barberbook.domain.entities.shop import BarberShop, ShopBarber
from barberbook.infrastructure.mock.mock_barber_api import MockBarberApi

DEMO_PASSWORD = "password123"

CUSTOMER = PartyRef(id="user_1", first_name="Ana", last_name="Silva", email="ana@example.com")
BARBER = PartyRef(id="barber_1", first_name="Marco", last_name="Reyes", email="marco@example.com")
IDLE_BARBER = PartyRef(id="barber_2", first_name="Leo", last_name="Park", email="leo@example.com")
OWNER = PartyRef(id="owner_1", first_name="Olivia", last_name="Grant", email="olivia@example.com")

CLASSIC_CUT = ServiceSnapshot(
    id="service_1", name="Classic Cut", price=Decimal("20.00"), duration_minutes=30, category="Haircut"
)
BEARD_TRIM = ServiceSnapshot(
    id="service_2", name="Beard Trim", price=Decimal("35.00"), duration_minutes=20, category="Beard"
)
HOT_TOWEL_SHAVE = ServiceSnapshot(
    id="service_3", name="Hot Towel Shave", price=Decimal("25.00"), duration_minutes=45, category="Shave"
)

DEMO_SHOP = BarberShop(
    id="shop_1",
    name="Fade Factory",
    city="Austin",
    address="100 Congress Ave",
    barbers=[ShopBarber(barber=BARBER), ShopBarber(barber=IDLE_BARBER, is_active=False)],
    services=[CLASSIC_CUT, BEARD_TRIM, HOT_TOWEL_SHAVE],
)


def build_demo_api(clock: Callable[[], datetime] | None = None) -> MockBarberApi:
    api = MockBarberApi(clock=clock)
    api.add_user(CUSTOMER.email, DEMO_PASSWORD, CUSTOMER, Role.CUSTOMER)
    api.add_user(BARBER.email, DEMO_PASSWORD, BARBER, Role.BARBER)
    api.add_user(OWNER.email, DEMO_PASSWORD, OWNER, Role.OWNER)
    api.add_shop(DEMO_SHOP, owner_id=OWNER.id)
    return api
