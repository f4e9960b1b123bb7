from __future__ import annotations

from dataclasses import dataclass, field

from barberbook.domain.entities.booking import PartyRef, ServiceSnapshot


@dataclass(frozen=True)
class ShopBarber:
    barber: PartyRef
    is_active: bool = True


@dataclass(frozen=True)
class BarberShop:
    id: str
    name: str
    city: str | None = None
    address: str | None = None
    is_active: bool = True
    barbers: list[ShopBarber] = field(default_factory=list)
    services: list[ServiceSnapshot] = field(default_factory=list)

    def first_active_barber(self) -> PartyRef | None:
        for entry in self.barbers:
            if entry.is_active:
                return entry.barber
        return None

    def find_service(self, service_id: str) -> ServiceSnapshot | None:
        for service in self.services:
            if service.id == service_id:
                return service
        return None
