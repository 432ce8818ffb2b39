"""Shared fixtures for the battery alerts test suite."""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_TIMEZONE", "UTC")

from battery_alerts.config import reset_settings_cache
from battery_alerts.domain.entities import PushMessage, StaleLock
from battery_alerts.domain.errors import PushDeliveryError, UpstreamUnavailable
from battery_alerts.infrastructure.database import Database
from battery_alerts.infrastructure.models import LockUserMappingModel
from battery_alerts.utils import get_app_timezone

T0 = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


class StepClock:
    """Clock returning ``start``, ``start + step``, ... on successive calls."""

    def __init__(self, start: datetime = T0, step: timedelta = timedelta(minutes=1)) -> None:
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


class FakeLockRegistry:
    """In-memory stand-in for the DynamoDB lock registry."""

    def __init__(self, locks: list[StaleLock] | None = None, *, fail: bool = False) -> None:
        self.locks = list(locks or [])
        self.fail = fail
        self.cutoffs: list[datetime] = []
        self.updates: list[str] = []

    def find_checked_before(self, cutoff: datetime) -> list[StaleLock]:
        self.cutoffs.append(cutoff)
        if self.fail:
            raise UpstreamUnavailable("registry down")
        return [lock for lock in self.locks if lock.last_checked_at < cutoff]

    def record_battery_check(self, lock_id: str, *, checked_at: datetime | None = None) -> str:
        if self.fail:
            raise UpstreamUnavailable("registry down")
        self.updates.append(lock_id)
        return "2024-05-02T10:00:00.000Z"


class FakePushGateway:
    """Gateway recording messages and failing for the configured tokens."""

    def __init__(self, failing_tokens: set[str] | None = None) -> None:
        self.failing_tokens = failing_tokens or set()
        self.sent: list[PushMessage] = []

    def send(self, message: PushMessage) -> str:
        if message.token in self.failing_tokens:
            raise PushDeliveryError(f"invalid registration token {message.token}")
        self.sent.append(message)
        return f"projects/demo/messages/{len(self.sent)}"


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings_cache()
    get_app_timezone.cache_clear()
    yield
    reset_settings_cache()
    get_app_timezone.cache_clear()


@pytest.fixture()
def database(tmp_path: Path):
    db = Database(f"sqlite:///{tmp_path / 'analytics.db'}")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture()
def session(database: Database):
    with database.session_scope() as db_session:
        yield db_session


@pytest.fixture()
def subscribe(session):
    """Insert lock subscriptions: ``subscribe("u1", "l1", "token-u1")``."""

    def _subscribe(user_id: str, lock_id: str, fcm_id: str | None = None) -> None:
        session.add(
            LockUserMappingModel(
                user_id=user_id, lock_id=lock_id, fcm_id=fcm_id or f"token-{user_id}"
            )
        )
        session.commit()

    return _subscribe
