"""
main.py
FastAPI application entry point.
Registers all routers, middleware, startup/shutdown events.

Features:
- JSON structured logging
- Request IDs and processing time headers
- Optional Redis rate limiting for unauthenticated callers (fails open)
- Prometheus metrics
"""

import json
import logging
import os
import time
import uuid
from contextlib import asynccontextmanager
from logging import LogRecord
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from config import redis_client as redis_config
from config.database import close_db, init_db
from config.redis_client import RateLimiter, close_redis, init_redis
from config.settings import Settings, settings as default_settings
from shared.utils.security import TokenService

# Service routers
from services.admin.router import router as admin_router
from services.auth.router import router as auth_router
from services.booking.router import router as booking_router
from services.facility.router import router as facility_router
from services.notification.router import router as notification_router
from services.user.router import router as user_router


# ── Logging ──────────────────────────────────────────────────

class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "instance": os.getenv("INSTANCE_NAME", "unknown"),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def configure_logging(debug: bool) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(logging.DEBUG if debug else logging.INFO)


configure_logging(default_settings.DEBUG)
logger = logging.getLogger(__name__)


# ── Lifespan (startup/shutdown) ───────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle handler."""
    logger.info("Starting %s v%s", default_settings.APP_NAME, default_settings.APP_VERSION)

    await init_db()
    logger.info("Database ready")

    try:
        await init_redis()
    except Exception:
        logger.warning("Redis unavailable, rate limiting disabled", exc_info=True)
        redis_config.redis_client = None
    else:
        if redis_config.redis_client:
            logger.info("Redis connected")

    yield

    await close_redis()
    await close_db()
    logger.info("Shutdown complete")


# ── App Factory ───────────────────────────────────────────────

RATE_LIMIT_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json", "/metrics"}


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""
## Campus Facility Booking API

- **Auth**: email/password registration and login, bearer JWT (7 days)
- **Facilities**: public catalogue, admin-managed
- **Bookings**: request → admin approval or rejection
- **Notifications**: in-app messages on every booking decision
- **Admin**: review queue, user roles, facility management, reports

### Authentication
Protected endpoints require an `Authorization: Bearer <token>` header.
Get a token from `/api/auth/register` or `/api/auth/login`.

### Roles
- `student`, `faculty`: request and manage their own bookings
- `admin`: everything above plus the `/api/admin` endpoints
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.token_service = TokenService.from_settings(settings)

    # ── Middleware (outermost first) ───────────────────────────────
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=["*"])
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Process-Time"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)

    # ── Custom Middleware ──────────────────────────────────────────

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        """Add unique X-Request-ID to every request."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.middleware("http")
    async def process_time_middleware(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        process_time = round((time.perf_counter() - start) * 1000, 2)
        response.headers["X-Process-Time"] = f"{process_time}ms"
        return response

    @app.middleware("http")
    async def rate_limit_middleware(request: Request, call_next):
        """
        Per-IP limit for unauthenticated requests.
        Bearer requests and operational paths are never limited.
        Redis errors let the request through.
        """
        client = redis_config.redis_client
        if (
            client is None
            or request.url.path in RATE_LIMIT_SKIP_PATHS
            or request.headers.get("Authorization", "").startswith("Bearer ")
        ):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        try:
            allowed = await RateLimiter(client).hit(
                f"rate:unauth:{client_ip}", settings.RATE_LIMIT_UNAUTH_PER_MINUTE
            )
        except Exception as e:
            logger.error("Rate limit check failed: %s", e)
            allowed = True

        if not allowed:
            logger.warning("Rate limit exceeded for IP %s", client_ip)
            return JSONResponse(
                status_code=429,
                content={"detail": "Rate limit exceeded. Please slow down."},
                headers={"Retry-After": "60"},
            )
        return await call_next(request)

    # ── Exception Handlers ─────────────────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed bodies and parameters are reported as 400 with per-field messages."""
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                "message": err.get("msg", "Invalid value"),
            }
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"detail": "Validation failed", "errors": errors},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch-all exception handler. Never expose stack traces in production."""
        request_id = getattr(request.state, "request_id", None)
        logger.error("[%s] Unhandled exception: %s", request_id, exc, exc_info=True)
        detail = str(exc) if settings.DEBUG else "An internal server error occurred"
        return JSONResponse(
            status_code=500,
            content={"detail": detail, "request_id": request_id},
        )

    # ── Routes ────────────────────────────────────────────────────

    @app.get("/health", tags=["Health"], include_in_schema=False)
    async def health_check():
        from sqlalchemy import text
        from config.database import AsyncSessionLocal

        checks = {"status": "ok", "version": settings.APP_VERSION}

        try:
            async with AsyncSessionLocal() as session:
                await session.execute(text("SELECT 1"))
            checks["database"] = "ok"
        except Exception:
            logger.exception("Health check: database unreachable")
            checks["database"] = "error"
            checks["status"] = "degraded"

        client = redis_config.redis_client
        if client is None:
            checks["redis"] = "disabled"
        else:
            try:
                await client.ping()
                checks["redis"] = "ok"
            except Exception:
                logger.exception("Health check: redis unreachable")
                checks["redis"] = "error"
                checks["status"] = "degraded"

        status_code = 200 if checks["status"] == "ok" else 503
        return JSONResponse(content=checks, status_code=status_code)

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs": "/docs",
            "health": "/health",
        }

    app.include_router(auth_router)
    app.include_router(user_router)
    app.include_router(facility_router)
    app.include_router(booking_router)
    app.include_router(notification_router)
    app.include_router(admin_router)

    # ── Prometheus Metrics ─────────────────────────────────────────
    Instrumentator().instrument(app).expose(app, endpoint="/metrics", tags=["Monitoring"])

    return app


# ── Entry Point ───────────────────────────────────────────────

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.DEBUG,
        workers=1 if default_settings.DEBUG else default_settings.WORKERS,
        log_level="debug" if default_settings.DEBUG else "info",
        access_log=True,
    )
