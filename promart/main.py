"""ProMart API — FastAPI application factory."""


import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from promart.core.config import settings
from promart.core.exceptions import register_exception_handlers
from promart.core.uploads import UPLOAD_ROUTE, upload_root
from promart.db.base import async_session_factory, engine
from promart.db.seed import create_schema, seed_demo_data
from promart.middleware.audit import AuditMiddleware
from promart.routers.accounts import auth_router, companies_router, otp_router
from promart.routers.admin import router as admin_router
from promart.routers.content import blogs_router, contact_router
from promart.routers.listings import router as listings_router
from promart.routers.notifications import router as notifications_router
from promart.schemas.common import HealthResponse

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Set up structured logging for the application."""
    level = logging.DEBUG if settings.app_env == "development" else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The in-memory store has no migrations to run; build it and optionally seed it
    if settings.is_memory_db or settings.seed_demo_data:
        await create_schema(engine)
    if settings.seed_demo_data:
        await seed_demo_data(async_session_factory)
    logger.info("%s started (env=%s)", settings.app_name, settings.app_env)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    _configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url="/docs" if settings.app_env == "development" else None,
        redoc_url="/redoc" if settings.app_env == "development" else None,
        lifespan=lifespan,
    )

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Request log ---
    app.add_middleware(AuditMiddleware)

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- API routes (/api/*) ---
    for router in (
        auth_router,
        otp_router,
        companies_router,
        listings_router,
        admin_router,
        notifications_router,
        contact_router,
        blogs_router,
    ):
        app.include_router(router, prefix="/api")

    # --- Uploaded files ---
    app.mount(UPLOAD_ROUTE, StaticFiles(directory=upload_root()), name="uploads")

    # --- Health check ---
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        return HealthResponse(app=settings.app_name, env=settings.app_env)

    return app


app = create_app()
