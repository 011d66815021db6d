import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .config import settings
from .db import SessionLocal, init_db
from .errors import HotelProError, hotelpro_error_handler, request_validation_handler, unhandled_error_handler
from .limiter import limiter
from .routers import auth_api, dashboard_api, bookings_api, rooms_api
from .routers import guests_api, hotels_api, staff_api, tasks_api
from .services.seed import seed_database
from .storage import DatabaseStorage, get_memory_storage

# --- Logging configuration ---
_level = logging.DEBUG if getattr(settings, "DEBUG", False) else logging.INFO
logging.basicConfig(
    level=_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
# Align uvicorn loggers with our level (useful under Docker Compose)
for _name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
    logging.getLogger(_name).setLevel(_level)
logger = logging.getLogger("hotelpro.startup")
logger.info("Starting %s (DEBUG=%s, storage=%s)", settings.APP_NAME, settings.DEBUG, settings.STORAGE_BACKEND)
request_logger = logging.getLogger("hotelpro.requests")

app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    description=(
        f"{settings.APP_NAME}: hotel operations API.\n\n"
        "Rooms, bookings, guests, staff and tasks for the dashboard, "
        "plus the room-status rules driven by booking changes."
    ),
)

@app.on_event("startup")
def startup_event():
    """Creates missing tables and loads demo data when enabled."""
    logger.info("Running startup tasks...")

    if settings.STORAGE_BACKEND == "memory":
        if settings.SEED_DATA:
            seed_database(get_memory_storage())
    else:
        init_db()
        if settings.SEED_DATA:
            db = SessionLocal()
            try:
                seed_database(DatabaseStorage(db))
            finally:
                db.close()

    logger.info("Startup tasks complete.")


@app.middleware("http")
async def log_api_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    if request.url.path.startswith("/api"):
        duration_ms = (time.perf_counter() - start) * 1000
        request_logger.info("%s %s %s in %.0fms", request.method, request.url.path, response.status_code, duration_ms)
    return response


# Add the limiter to the app state
app.state.limiter = limiter
# Add the exception handler for rate limit exceeded errors
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(HotelProError, hotelpro_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

app.include_router(auth_api.router)
app.include_router(dashboard_api.router)
app.include_router(bookings_api.router)
app.include_router(rooms_api.router)
app.include_router(guests_api.router)
app.include_router(hotels_api.router)
app.include_router(staff_api.router)
app.include_router(tasks_api.router)

@app.get("/healthz")
@limiter.exempt
def healthz():
    return {"status": "ok"}
