"""StaffSphere: FastAPI Application Factory.

One application instance is one dashboard page: it owns a single
``AppStore`` (session, theme, initialized flag, toasts) written only by the
session shell, and a single ``RecordStore`` adapter shared by every view.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.ext.asyncio import AsyncEngine

from staffsphere.activities.router import router as activities_router
from staffsphere.common.exceptions import register_exception_handlers
from staffsphere.common.rate_limit import limiter
from staffsphere.config import Settings, settings
from staffsphere.dashboard.router import router as dashboard_router
from staffsphere.dashboard.router import stats_router as department_stats_router
from staffsphere.database import create_tables, engine as default_engine, make_session_factory
from staffsphere.employees.router import router as employees_router
from staffsphere.leave.router import router as leave_router
from staffsphere.notifications.router import router as notifications_router
from staffsphere.quick_actions.router import router as quick_actions_router
from staffsphere.shell.preferences import ThemePreferenceStore
from staffsphere.shell.provider import AuthProvider, TokenAuthProvider
from staffsphere.shell.router import router as session_router
from staffsphere.shell.service import SessionShell
from staffsphere.shell.state import AppStore
from staffsphere.store import RecordStore, build_record_store
from staffsphere.tasks.router import router as tasks_router

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown events."""
    # Startup
    await create_tables(app.state.engine)
    await app.state.shell.restore_theme()
    logger.info("StaffSphere started (record store: %s)", type(app.state.record_store).__name__)
    yield
    # Shutdown
    await app.state.record_store.close()


def create_app(
    *,
    config: Optional[Settings] = None,
    engine: Optional[AsyncEngine] = None,
    record_store: Optional[RecordStore] = None,
    provider: Optional[AuthProvider] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or settings
    engine = engine or default_engine
    configure_logging(config.LOG_LEVEL)

    app = FastAPI(
        title="StaffSphere",
        description="HR dashboard: employees, tasks, leave requests and the activity feed",
        version=VERSION,
        docs_url="/api/docs" if config.ENVIRONMENT != "production" else None,
        redoc_url="/api/redoc" if config.ENVIRONMENT != "production" else None,
        lifespan=lifespan,
    )

    # Application state: one store, one shell, one record store
    session_factory = make_session_factory(engine)
    app_store = AppStore(dark_mode=config.DEFAULT_DARK_MODE)
    shell = SessionShell(
        app_store,
        provider or TokenAuthProvider(config.JWT_SECRET, config.JWT_ALGORITHM),
        ThemePreferenceStore(session_factory),
        default_dark_mode=config.DEFAULT_DARK_MODE,
    )
    shell.bootstrap()

    app.state.settings = config
    app.state.engine = engine
    app.state.app_store = app_store
    app.state.shell = shell
    app.state.record_store = record_store or build_record_store(config, session_factory)

    # Exception handlers (RFC 7807)
    register_exception_handlers(app)

    # Rate limiting (slowapi)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check (no auth)
    @app.get("/api/v1/health", tags=["system"])
    async def health_check():
        return {
            "status": "healthy",
            "version": VERSION,
            "environment": config.ENVIRONMENT,
            "initialized": app_store.initialized,
        }

    # Register routers
    app.include_router(session_router, prefix="/api/v1/session", tags=["session"])
    app.include_router(dashboard_router, prefix="/api/v1/dashboard", tags=["dashboard"])
    app.include_router(employees_router, prefix="/api/v1/employees", tags=["employees"])
    app.include_router(tasks_router, prefix="/api/v1/tasks", tags=["tasks"])
    app.include_router(leave_router, prefix="/api/v1/leave-requests", tags=["leave"])
    app.include_router(activities_router, prefix="/api/v1/activities", tags=["activities"])
    app.include_router(
        department_stats_router, prefix="/api/v1/department-stats", tags=["department-stats"],
    )
    app.include_router(quick_actions_router, prefix="/api/v1/quick-actions", tags=["quick-actions"])
    app.include_router(notifications_router, prefix="/api/v1/notifications", tags=["notifications"])

    return app


app = create_app()
