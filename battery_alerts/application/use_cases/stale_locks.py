"""Use cases for locating stale locks and the users subscribed to them."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

import logging

from sqlalchemy.orm import Session

from battery_alerts.application.ports import LockRegistry
from battery_alerts.domain.entities import DispatchTarget, StaleLock
from battery_alerts.infrastructure.repositories import LockSubscriptionRepository
from battery_alerts.utils import ensure_utc, now_utc

logger = logging.getLogger(__name__)


def find_stale_locks(
    registry: LockRegistry,
    *,
    stale_after: timedelta,
    now: datetime | None = None,
) -> list[StaleLock]:
    """Return locks whose last battery check is strictly older than ``now - stale_after``.

    Raises :class:`UpstreamUnavailable` when the registry cannot be scanned.
    """

    cutoff = (ensure_utc(now) or now_utc()) - stale_after
    logger.info("Scanning for locks with last check before %s", cutoff.isoformat())

    stale: dict[str, StaleLock] = {}
    for lock in registry.find_checked_before(cutoff):
        # The registry filters on string order; compare parsed times as well.
        if lock.last_checked_at < cutoff and lock.lock_id not in stale:
            stale[lock.lock_id] = lock

    logger.info("Found %d stale locks", len(stale))
    return list(stale.values())


def resolve_dispatch_targets(
    session: Session, lock_ids: Iterable[str]
) -> list[DispatchTarget]:
    """Join ``lock_ids`` with their subscriptions.

    Locks without subscribers produce no targets. Raises
    :class:`UpstreamUnavailable` when the subscription store fails.
    """

    ids = list(lock_ids)
    if not ids:
        return []
    targets = list(LockSubscriptionRepository(session).list_targets_for_locks(ids))
    logger.info("Found %d users to notify across %d locks", len(targets), len(set(ids)))
    return targets


__all__ = ["find_stale_locks", "resolve_dispatch_targets"]
