from __future__ import annotations

from contextlib import asynccontextmanager

import logging

from fastapi import FastAPI

from battery_alerts.application.ports import LockRegistry
from battery_alerts.config import get_settings
from battery_alerts.infrastructure.database import Database
from battery_alerts.infrastructure.lock_registry import DynamoLockRegistry
from battery_alerts.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


def create_app(
    *,
    database: Database | None = None,
    lock_registry: LockRegistry | None = None,
) -> FastAPI:
    """Create the API application.

    Collaborators that are not supplied are built from settings at startup
    and released at shutdown; supplied ones are left to their owner.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned_database: Database | None = None
        if database is None:
            owned_database = Database.from_settings(get_settings())
            owned_database.create_all()
            app.state.database = owned_database
        else:
            app.state.database = database

        if lock_registry is None:
            app.state.lock_registry = DynamoLockRegistry.from_settings(get_settings())
        else:
            app.state.lock_registry = lock_registry

        logger.info("Battery alerts API ready")
        try:
            yield
        finally:
            if owned_database is not None:
                owned_database.dispose()

    app = FastAPI(title="Battery Alerts", lifespan=lifespan)
    register_routes(app)
    return app
