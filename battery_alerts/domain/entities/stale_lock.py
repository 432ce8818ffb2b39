"""Domain entity for a lock whose battery check is overdue."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class StaleLock:
    """Lock read from the device registry with its last battery check time."""

    lock_id: str
    last_checked_at: datetime


__all__ = ["StaleLock"]
