import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from salon_booking.api.errors import register_exception_handlers
from salon_booking.api.v1.bookings import router as bookings_router
from salon_booking.api.v1.reviews import router as reviews_router
from salon_booking.api.v1.services import router as services_router
from salon_booking.api.v1.timeslots import router as timeslots_router
from salon_booking.core.config import settings

LOG_CONTEXT_KEYS = (
    "booking_id",
    "date",
    "time",
    "status",
    "kind",
    "step",
    "service",
    "sent",
    "total",
    "changed",
    "slots",
    "timeout",
    "error",
    "error_code",
    "error_message",
    "reply_text",
    "rating",
    "database",
    "text_length",
)


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in LOG_CONTEXT_KEYS:
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

logger = logging.getLogger(__name__)

app = FastAPI(title="Beauty Salon API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.ENV.lower() in {"dev", "development", "local"}:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

register_exception_handlers(app)

app.include_router(services_router, prefix="/api/services", tags=["services"])
app.include_router(bookings_router, prefix="/api/bookings", tags=["bookings"])
app.include_router(reviews_router, prefix="/api/reviews", tags=["reviews"])
app.include_router(timeslots_router, prefix="/api/timeslots", tags=["timeslots"])


@app.get("/health")
def health() -> dict[str, object]:
    return {"success": True, "message": "Server is running", "environment": settings.ENV}


@app.get("/")
def index() -> dict[str, object]:
    return {
        "success": True,
        "message": "Beauty Salon API",
        "version": app.version,
        "endpoints": {
            "health": "/health",
            "services": "/api/services",
            "bookings": "/api/bookings",
            "reviews": "/api/reviews",
            "timeslots": "/api/timeslots",
        },
    }


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 5000)))
