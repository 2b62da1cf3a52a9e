import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from .database import Base, engine
from .config import settings
from .booking.errors import BookingError, ConflictError, InfrastructureError, NotFoundError, ValidationError
from .routers import auth as auth_router
from .routers import stylists as stylists_router
from .routers import bookings as bookings_router


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("booking_id", "stylist_id", "user_id", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(asctime)s %(levelname)s:%(name)s:%(message)s"))

logger = logging.getLogger("salonbook")
logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger.handlers.clear()
logger.addHandler(handler)

app = FastAPI(title="Salon Booking API")

Base.metadata.create_all(bind=engine)

STATUS_CODES = {
    ValidationError: 400,
    NotFoundError: 404,
    ConflictError: 409,
}


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    return JSONResponse(
        status_code=STATUS_CODES.get(type(exc), 400),
        content={"detail": exc.message, "error": exc.kind, "reason": exc.reason},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Body errors use the same 400 shape as rejections raised by the engine
    errors = exc.errors()
    if errors and all(e["type"] == "missing" for e in errors):
        reason, message = "missing_fields", "All fields are required"
    else:
        reason, message = "malformed_fields", "Malformed request"
    fields = sorted({str(e["loc"][-1]) for e in errors if e.get("loc")})
    logger.info("Request rejected on %s: %s", request.url.path, ", ".join(fields), extra={"reason": reason})
    return JSONResponse(
        status_code=400,
        content={"detail": message, "error": "validation", "reason": reason, "fields": fields},
    )


@app.exception_handler(InfrastructureError)
async def infrastructure_error_handler(request: Request, exc: InfrastructureError):
    logger.error("Infrastructure failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"detail": "Service temporarily unavailable", "error": "infrastructure"},
    )


app.include_router(auth_router.router)
app.include_router(stylists_router.router)
app.include_router(bookings_router.router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
