"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import ArgumentError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from battery_alerts.config import Settings
from battery_alerts.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


def _normalize_database_url(raw_url: str) -> str:
    """Route plain ``postgres://`` URLs through the psycopg driver."""

    url = raw_url.strip()
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+psycopg://" + url[len(prefix) :]
    return url


class Database:
    """Engine and session factory owned by a single process.

    Created once at startup and disposed at shutdown; every component that
    touches the relational store receives sessions from this handle.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        if not url:
            raise ConfigurationError("DATABASE_URL is not configured")
        normalized = _normalize_database_url(url)
        connect_args: dict[str, object] = {}
        if normalized.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        try:
            self.engine: Engine = create_engine(
                normalized,
                pool_pre_ping=True,
                echo=echo,
                connect_args=connect_args,
            )
        except (ArgumentError, ImportError) as exc:
            raise ConfigurationError(f"Invalid DATABASE_URL: {exc}") from exc
        self._session_factory = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_url)

    def create_all(self) -> None:
        """Ensure all ORM models have corresponding database tables."""

        from battery_alerts.infrastructure import models  # noqa: F401  # ensure models are imported

        Base.metadata.create_all(bind=self.engine, checkfirst=True)

    def session(self) -> Session:
        return self._session_factory()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """Yield a session and close it afterwards."""

        session = self.session()
        try:
            yield session
        finally:
            session.close()

    def dispose(self) -> None:
        logger.debug("Disposing database engine")
        self.engine.dispose()


__all__ = ["Base", "Database"]
