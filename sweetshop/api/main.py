"""
Name: FastAPI Application Entry Point
Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (CORS, request context)
  - Mount auth + catalog routers under API_PREFIX (default /api)
  - Expose liveness (/healthz) and readiness (/readyz) endpoints
Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and logging context
  - auth_routes.router / interfaces.api.http.router: business endpoints
Constraints:
  - CORS configurable via ALLOWED_ORIGINS env var (comma-separated)
  - Storage backend selected by STORAGE_BACKEND (memory | postgres)
Notes:
  - The DB pool is only opened when the postgres backend is active
  - /healthz follows Kubernetes health check convention
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..application.dev_seed_admin import ensure_dev_admin
from ..container import get_password_hasher, get_sweet_repository, get_user_repository
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import REQUEST_ID_HEADER, RequestContextMiddleware
from ..infrastructure.db.pool import check_connection, close_pool, init_pool
from ..interfaces.api.http.router import router as sweets_router
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers

APP_TITLE = "Sweet Shop API"
APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Opens the pool (postgres) and seeds admin."""
    settings = get_settings()

    if settings.uses_postgres():
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )

    try:
        if settings.uses_postgres():
            # R: fail-fast si la DB no responde al arrancar.
            check_connection()
        ensure_dev_admin(
            settings,
            user_repo=get_user_repository(),
            password_hasher=get_password_hasher(),
        )
        logger.info(
            "Sweet Shop API starting up",
            extra={
                "app_env": settings.app_env,
                "storage_backend": "postgres" if settings.uses_postgres() else "memory",
                "api_prefix": settings.api_prefix,
            },
        )
        yield
    finally:
        close_pool()
        logger.info("Sweet Shop API shutting down")


def _get_allowed_origins() -> list[str]:
    """Get CORS origins from settings, with fallback for import-time errors."""
    try:
        return get_settings().get_allowed_origins_list()
    except ValueError:
        return ["http://localhost:3000"]


def _get_cors_allow_credentials() -> bool:
    try:
        return get_settings().cors_allow_credentials
    except ValueError:
        return False


def _get_api_prefix() -> str:
    try:
        return get_settings().api_prefix
    except ValueError:
        return "/api"


app = FastAPI(
    title=APP_TITLE,
    version=APP_VERSION,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "auth", "description": "Registration and login (JWT)"},
        {"name": "sweets", "description": "Catalog, purchase and restock"},
    ],
)

# R: Middleware order (bottom = first to execute):
# 1. CORSMiddleware - handles preflight
# 2. RequestContextMiddleware - sets request_id
app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_allowed_origins(),
    allow_credentials=_get_cors_allow_credentials(),
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", REQUEST_ID_HEADER],
)

_api_prefix = _get_api_prefix()
app.include_router(auth_router, prefix=_api_prefix)
app.include_router(sweets_router, prefix=_api_prefix)

register_exception_handlers(app)


@app.get("/healthz", tags=["health"])
def healthz(request: Request):
    """Liveness: the process is up and serving."""
    return {"ok": True, "request_id": getattr(request.state, "request_id", None)}


@app.get("/readyz", tags=["health"])
def readyz(request: Request):
    """Readiness: the catalog store answers a ping."""
    store_status = "disconnected"
    try:
        if get_sweet_repository().ping():
            store_status = "connected"
    except Exception as exc:
        logger.warning("Readiness check: store unavailable", extra={"error": str(exc)})

    ready = store_status == "connected"
    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "ok": ready,
            "store": store_status,
            "request_id": getattr(request.state, "request_id", None),
        },
    )
