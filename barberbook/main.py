import logging

from fastapi import FastAPI

from barberbook.api.v1.analytics import router as analytics_router
from barberbook.api.v1.appointments import router as appointments_router
from barberbook.api.v1.bookings import router as bookings_router
from barberbook.api.v1.session import router as session_router
from barberbook.api.v1.shops import router as shops_router
from barberbook.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("booking_id", "action", "status", "role", "service_id", "error", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="Barberbook Booking Service", version="1.0.0")

app.include_router(session_router, tags=["session"])
app.include_router(bookings_router, tags=["bookings"])
app.include_router(analytics_router, tags=["analytics"])
app.include_router(appointments_router, tags=["appointments"])
app.include_router(shops_router, tags=["shops"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
