"""
Point d'entree FastAPI / FastAPI entry point.
FleetLedger - depenses de trajets de camions / truck trip expenses.
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware

from fleetledger.api import api_router
from fleetledger.config import settings
from fleetledger.database import async_session, init_db
from fleetledger.rate_limit import limiter
from fleetledger.utils.dates import utc_now
from fleetledger.utils.seed import seed_demo_data

logger = logging.getLogger("fleetledger")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


class JSONFormatter(logging.Formatter):
    """Une ligne JSON par enregistrement / One JSON line per record."""

    def format(self, record):
        entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = getattr(record, "request_id", None)
        if request_id:
            entry["request_id"] = request_id
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def configure_logging() -> None:
    """JSON en production, texte lisible en dev / JSON in production, readable text in dev."""
    handler = logging.StreamHandler()
    if settings.DEBUG:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(JSONFormatter())
    logging.root.handlers = [handler]
    logging.root.setLevel(logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.DEBUG and settings.SECRET_KEY == "change-me-in-production":
        raise RuntimeError("CRITICAL: SECRET_KEY must be changed in production!")

    await init_db()
    if settings.SEED_DEMO_DATA:
        async with async_session() as session:
            await seed_demo_data(session, utc_now())
    logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
    yield
    logger.info("%s stopped", settings.APP_NAME)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """X-Request-ID, headers de securite et duree / X-Request-ID, security headers and timing."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()

        response: Response = await call_next(request)

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            "%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms,
            extra={"request_id": request_id},
        )
        response.headers["X-Request-ID"] = request_id
        response.headers.update(SECURITY_HEADERS)
        return response


configure_logging()

# Swagger uniquement en dev / Swagger in dev only
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Suivi des depenses de trajets de camions / Truck trip expense tracking",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url=None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID", "Content-Disposition"],
)

app.include_router(api_router)


@app.get("/")
async def root():
    """Health check."""
    return {"app": settings.APP_NAME, "version": settings.APP_VERSION, "status": "running"}
