"""
Main FastAPI application.

This is the entry point for the API server.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from app import models  # noqa: F401  registers master tables on MasterBase.metadata
from app.core.config import Settings, settings as default_settings
from app.db.base import MasterBase
from app.db.seed import seed_master_directory
from app.db.session import create_session_maker, create_sqlite_engine, session_scope
from app.db.tenant_registry import TenantStoreRegistry
from app.errors import AppError, app_error_handler, request_validation_error_handler, storage_error_handler
from app.routers import (
    auth,
    commitments,
    companies,
    currencies,
    health,
    payments,
    reports,
    users,
)

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Tests pass their own Settings (usually with DATA_DIR pointing at a
    temporary directory); the server uses the environment-driven default.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup: prepare the data directory, create and seed the master
        directory, and build the tenant store registry.
        Shutdown: close every tenant store and the master engine.
        """
        logging.basicConfig(
            level=settings.LOG_LEVEL.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        logger.info("Starting %s with data directory %s", settings.APP_NAME, settings.data_path)

        settings.data_path.mkdir(parents=True, exist_ok=True)
        master_engine = create_sqlite_engine(settings.master_database_url, echo=settings.DEBUG)
        async with master_engine.begin() as conn:
            await conn.run_sync(MasterBase.metadata.create_all)

        master_session_maker = create_session_maker(master_engine)
        async with session_scope(master_session_maker) as session:
            await seed_master_directory(session, settings)

        registry = TenantStoreRegistry(settings.data_path, echo=settings.DEBUG)

        app.state.settings = settings
        app.state.master_engine = master_engine
        app.state.master_session_maker = master_session_maker
        app.state.registry = registry

        yield  # The server runs while we're "yielded" here

        await registry.shutdown()
        await master_engine.dispose()
        logger.info("Shut down %s", settings.APP_NAME)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Multi-tenant ledger of financial commitments and their payments",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)

    # Include routers (API endpoints)
    app.include_router(health.router, tags=["Health"])
    app.include_router(auth.router)
    app.include_router(companies.router)
    app.include_router(users.router)
    app.include_router(currencies.router)
    app.include_router(commitments.router)
    app.include_router(payments.router)
    app.include_router(reports.router)

    return app


app = create_app()
