"""Tests for stale lock scanning and target resolution."""

from __future__ import annotations

from datetime import timedelta

import pytest

from battery_alerts.application.use_cases import find_stale_locks, resolve_dispatch_targets
from battery_alerts.domain.entities import DispatchTarget, StaleLock
from battery_alerts.domain.errors import StoreUnavailable, UpstreamUnavailable
from battery_alerts.infrastructure.database import Database

from conftest import T0, FakeLockRegistry

NOW = T0 + timedelta(days=60)
THRESHOLD = timedelta(days=30)
CUTOFF = NOW - THRESHOLD


class UnfilteredRegistry(FakeLockRegistry):
    """Registry that returns everything, as a scan with a broken filter would."""

    def find_checked_before(self, cutoff):
        self.cutoffs.append(cutoff)
        return list(self.locks)


def test_find_stale_locks_uses_strict_cutoff() -> None:
    registry = UnfilteredRegistry(
        [
            StaleLock("old", CUTOFF - timedelta(days=1)),
            StaleLock("just-old", CUTOFF - timedelta(microseconds=1)),
            StaleLock("boundary", CUTOFF),
            StaleLock("fresh", CUTOFF + timedelta(seconds=1)),
        ]
    )

    stale = find_stale_locks(registry, stale_after=THRESHOLD, now=NOW)

    assert [lock.lock_id for lock in stale] == ["old", "just-old"]
    assert registry.cutoffs == [CUTOFF]


@pytest.mark.parametrize("days", [1, 7, 30, 90])
def test_find_stale_locks_for_thresholds(days: int) -> None:
    ages = [0, 1, 6, 7, 8, 29, 30, 31, 89, 90, 91]
    registry = FakeLockRegistry(
        [StaleLock(f"lock-{age}", NOW - timedelta(days=age)) for age in ages]
    )

    stale = {lock.lock_id for lock in find_stale_locks(registry, stale_after=timedelta(days=days), now=NOW)}

    assert stale == {f"lock-{age}" for age in ages if age > days}


def test_find_stale_locks_collapses_duplicates() -> None:
    registry = UnfilteredRegistry(
        [StaleLock("l1", CUTOFF - timedelta(days=2)), StaleLock("l1", CUTOFF - timedelta(days=3))]
    )

    assert len(find_stale_locks(registry, stale_after=THRESHOLD, now=NOW)) == 1


def test_find_stale_locks_propagates_registry_failure() -> None:
    with pytest.raises(UpstreamUnavailable):
        find_stale_locks(FakeLockRegistry(fail=True), stale_after=THRESHOLD, now=NOW)


def test_resolve_targets_joins_subscriptions(session, subscribe) -> None:
    subscribe("u1", "l1", "tok-1")
    subscribe("u2", "l1", "tok-2")
    subscribe("u3", "l2", "tok-3")
    subscribe("u4", "l9", "tok-4")

    targets = resolve_dispatch_targets(session, ["l1", "l2", "l-unsubscribed"])

    assert set(targets) == {
        DispatchTarget("u1", "l1", "tok-1"),
        DispatchTarget("u2", "l1", "tok-2"),
        DispatchTarget("u3", "l2", "tok-3"),
    }


def test_resolve_targets_for_unsubscribed_lock_is_empty(session, subscribe) -> None:
    subscribe("u1", "l1")

    assert resolve_dispatch_targets(session, ["l2"]) == []
    assert resolve_dispatch_targets(session, []) == []


def test_resolve_targets_raises_when_store_fails(tmp_path) -> None:
    database = Database(f"sqlite:///{tmp_path / 'no_tables.db'}")
    try:
        with database.session_scope() as session:
            with pytest.raises(StoreUnavailable):
                resolve_dispatch_targets(session, ["l1"])
    finally:
        database.dispose()
