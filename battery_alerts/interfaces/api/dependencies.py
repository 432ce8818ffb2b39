"""FastAPI dependency utilities."""

from collections.abc import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from battery_alerts.application.ports import LockRegistry
from battery_alerts.infrastructure.database import Database


def get_database(request: Request) -> Database:
    """Return the store handle created for this process at startup."""

    return request.app.state.database


def get_db(database: Database = Depends(get_database)) -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    with database.session_scope() as session:
        yield session


def get_lock_registry(request: Request) -> LockRegistry:
    return request.app.state.lock_registry


__all__ = ["get_database", "get_db", "get_lock_registry"]
