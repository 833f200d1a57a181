"""
Car Maintenance API - FastAPI Application Entry Point

This module builds the FastAPI application with its middleware chain,
routes, static front page and lifecycle event handlers.

Run with:
    uvicorn carmaint.main:app --app-dir backend
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from carmaint import __version__
from carmaint.api.error_handlers import register_error_handlers
from carmaint.api.routes import auth, cars, health, maintenance
from carmaint.core.config import settings
from carmaint.core.database import async_session_maker, close_db, init_db
from carmaint.core.logging_config import setup_logging
from carmaint.core.security import Authenticator
from carmaint.middleware.access_control import AccessControlMiddleware
from carmaint.middleware.logging import LoggingMiddleware
from carmaint.middleware.request_id import RequestIDMiddleware
from carmaint.middleware.security_headers import SecurityHeadersMiddleware
from carmaint.repositories.user import UserRepository
from carmaint.services.accounts import ensure_user


STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
        - Set up logging
        - Initialize database (create tables when CREATE_SCHEMA is set)
        - Provision the configured login account

    Shutdown:
        - Close database connections
    """
    setup_logging(level=settings.log_level, json_format=settings.log_json)

    await init_db()

    async with async_session_maker() as session:
        await ensure_user(
            UserRepository(session),
            settings.admin_username,
            settings.admin_password,
        )

    yield

    await close_db()


def create_app() -> FastAPI:
    """Build the application with its middleware chain and routes."""
    app = FastAPI(
        title=settings.project_name,
        version=__version__,
        description="Track cars and the maintenance performed on them",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    authenticator = Authenticator(async_session_maker)
    app.state.authenticator = authenticator

    # Configure middleware
    # Note: Middleware is executed in reverse order of registration
    # (last registered = first executed), so requests flow
    # CORS -> RequestID -> Logging -> SecurityHeaders -> AccessControl -> routes

    # Access control (innermost; sees request_id, its 401s get security headers)
    app.add_middleware(AccessControlMiddleware, authenticator=authenticator)

    app.add_middleware(SecurityHeadersMiddleware)

    # Logging middleware (runs after RequestID to access request_id)
    app.add_middleware(LoggingMiddleware)

    # Request ID middleware (sets correlation ID)
    app.add_middleware(RequestIDMiddleware)

    # CORS middleware - configured from environment
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(auth.router)
    app.include_router(health.router)
    app.include_router(cars.router)
    app.include_router(maintenance.router)

    # Mounted last so API routes match first
    app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")

    return app


app = create_app()
