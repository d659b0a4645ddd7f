"""StudyVault API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map StudyVaultError → {"error": <message>} responses
    - CORS configured from settings (not hardcoded)
    - Database manager and ResourceService built once in the lifespan and
      stored on app.state; nothing is looked up from module globals

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - build_resource_service wires AuthGate + ResourceStore so tests and
      scripts can assemble the same graph around their own engine
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studyvault.api.error_handlers import register_error_handlers
from studyvault.api.routes import health, resources
from studyvault.config import Settings, get_settings
from studyvault.core.auth_gate import AuthGate
from studyvault.infrastructure.database import DatabaseSessionManager
from studyvault.infrastructure.observability import setup_logging
from studyvault.services.resource_service import ResourceService
from studyvault.services.resource_store import ResourceStore

logger = logging.getLogger(__name__)


def build_resource_service(
    settings: Settings, db_manager: DatabaseSessionManager,
) -> ResourceService:
    """Assemble AuthGate → ResourceStore → ResourceService."""
    return ResourceService(
        AuthGate(settings.jwt_secret, algorithms=[settings.jwt_algorithm]),
        ResourceStore(db_manager),
        default_page_limit=settings.default_page_limit,
        max_page_limit=settings.max_page_limit,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_tables:
        await db_manager.create_all()
    app.state.db_manager = db_manager
    app.state.resource_service = build_resource_service(settings, db_manager)
    logger.info("StudyVault API started")
    yield
    logger.info("StudyVault API shutting down")
    await db_manager.dispose()


app = FastAPI(
    title="StudyVault API", version="1.0.0", lifespan=lifespan,
)

# CORS: configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(resources.router)

register_error_handlers(app)
