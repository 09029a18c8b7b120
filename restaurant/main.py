"""
Restaurant Order System - FastAPI Application Factory

REST backend for the storefront: authentication, menu catalog, order
placement with company order aggregation, and sales/company reporting.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from restaurant.database import close_db, connect_db, init_indexes
from restaurant.errors import register_exception_handlers
from restaurant.repositories import Repositories, create_motor_repositories
from restaurant.routers import auth, companies, menu, orders, reports, users
from restaurant.seeds import seed_database
from restaurant.settings import app_settings

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect to MongoDB on startup unless repositories were supplied to the factory."""
    logger.info(f"{app_settings.app_name} starting up...")

    connected = False
    if app.state.repositories is None:
        db = await connect_db()
        await init_indexes()
        connected = True

        if app_settings.seed_database:
            await seed_database()

        app.state.repositories = create_motor_repositories(db)

    yield

    if connected:
        await close_db()
        app.state.repositories = None
    logger.info(f"{app_settings.app_name} shutting down...")


def create_app(repositories: Repositories | None = None) -> FastAPI:
    """FastAPI application factory.

    Args:
        repositories: Pre-built repositories. When omitted the lifespan
            connects to MongoDB and builds Motor-backed ones.
    """
    configure_logging(app_settings.log_level)

    app = FastAPI(
        title=f"{app_settings.app_name} API",
        description="Menu, ordering, company orders and reporting for the restaurant storefront.",
        version=app_settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.repositories = repositories

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    prefix = app_settings.api_prefix
    app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["Auth"])
    app.include_router(menu.router, prefix=f"{prefix}/menu", tags=["Menu"])
    app.include_router(orders.router, prefix=f"{prefix}/orders", tags=["Orders"])
    app.include_router(companies.router, prefix=f"{prefix}/companies", tags=["Companies"])
    app.include_router(reports.router, prefix=f"{prefix}/reports", tags=["Reports"])
    app.include_router(users.router, prefix=f"{prefix}/admin/users", tags=["Users"])

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint - service info."""
        return {
            "service": app_settings.app_name,
            "version": app_settings.app_version,
            "docs": "/docs",
        }

    @app.get("/health", tags=["Health"])
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "service": "restaurant-api"}

    logger.info(f"{app_settings.app_name} application created")
    return app


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run(
        "restaurant.main:create_app",
        factory=True,
        host=app_settings.app_host,
        port=app_settings.app_port,
        log_level=app_settings.log_level.lower(),
    )
