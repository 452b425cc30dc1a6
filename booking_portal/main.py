# booking_portal/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from booking_portal import errors
from booking_portal.config import get_settings
from booking_portal.db.session import engine
from booking_portal.logging_config import setup_logging
from booking_portal.models import Base
from booking_portal.routers import availability as availability_router
from booking_portal.routers import calendar as calendar_router
from booking_portal.routers import confirmed_meetings as cm_router
from booking_portal.routers import meeting_requests as mr_router

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# Routers
app.include_router(availability_router.router, prefix="/availability", tags=["availability"])
app.include_router(mr_router.router, prefix="/meeting-requests", tags=["meeting-requests"])
app.include_router(cm_router.router, prefix="/confirmed-meetings", tags=["confirmed-meetings"])
app.include_router(calendar_router.router, prefix="/calendar", tags=["calendar"])


@app.exception_handler(errors.ValidationError)
async def validation_error_handler(request: Request, exc: errors.ValidationError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(errors.NotFoundError)
async def not_found_handler(request: Request, exc: errors.NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(errors.ConflictError)
async def conflict_handler(request: Request, exc: errors.ConflictError):
    return JSONResponse(status_code=409, content={"detail": exc.message})


@app.exception_handler(errors.InvalidStateError)
async def invalid_state_handler(request: Request, exc: errors.InvalidStateError):
    logger.warning("Invalid state on %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=409,
        content={"detail": "This meeting request has already been resolved"},
    )


@app.exception_handler(errors.PersistenceError)
async def persistence_error_handler(request: Request, exc: errors.PersistenceError):
    return JSONResponse(status_code=503, content={"detail": exc.message})


@app.get("/health")
def health_check():
    db_status = "ok"
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Health check could not reach the database")
        db_status = "error"

    return {
        "status": "ok" if db_status == "ok" else "degraded",
        "app": settings.APP_NAME,
        "env": settings.ENV,
        "database": db_status,
    }
