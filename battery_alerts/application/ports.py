"""Interfaces the use cases expect from external collaborators."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from battery_alerts.domain.entities import PushMessage, StaleLock


class LockRegistry(Protocol):
    """Device-state store holding each lock's last battery check."""

    def find_checked_before(self, cutoff: datetime) -> list[StaleLock]:
        ...

    def record_battery_check(
        self, lock_id: str, *, checked_at: datetime | None = None
    ) -> str:
        ...


class PushGateway(Protocol):
    """Opaque send primitive; returns the gateway message identifier."""

    def send(self, message: PushMessage) -> str:
        ...


__all__ = ["LockRegistry", "PushGateway"]
