"""Tests for click correlation results."""

from __future__ import annotations

from threading import Barrier, Thread

from battery_alerts.application.use_cases import CorrelationOutcome, record_notification_click
from battery_alerts.domain.results import ErrorKind
from battery_alerts.infrastructure.database import Database
from battery_alerts.infrastructure.repositories import NotificationEventRepository

from conftest import StepClock

CAMPAIGN = "battery_low_alert"


def test_click_matches_then_becomes_noop(session) -> None:
    repository = NotificationEventRepository(session, clock=StepClock())
    event = repository.record_sent(user_id="u1", lock_id="l1", campaign_name=CAMPAIGN, batch_id=None)

    first = record_notification_click(session, campaign_name=CAMPAIGN, user_id="u1", lock_id="l1")
    second = record_notification_click(session, campaign_name=CAMPAIGN, user_id="u1", lock_id="l1")

    assert first.value is CorrelationOutcome.MATCHED
    assert second.ok
    assert second.value is CorrelationOutcome.NO_MATCH
    assert repository.get(event.id).clicked is True


def test_click_without_send_is_no_match(session, caplog) -> None:
    caplog.set_level("INFO")

    result = record_notification_click(session, campaign_name=CAMPAIGN, user_id="u1", lock_id="l1")

    assert result.ok
    assert result.value is CorrelationOutcome.NO_MATCH
    assert "No sent notification found" in caplog.text
    assert NotificationEventRepository(session).count() == 0


def test_click_reports_store_failure(tmp_path) -> None:
    database = Database(f"sqlite:///{tmp_path / 'no_tables.db'}")
    try:
        with database.session_scope() as session:
            result = record_notification_click(
                session, campaign_name=CAMPAIGN, user_id="u1", lock_id="l1"
            )
    finally:
        database.dispose()

    assert result.error is ErrorKind.STORE_UNAVAILABLE


def test_concurrent_clicks_flip_each_send_once(database: Database) -> None:
    with database.session_scope() as session:
        repository = NotificationEventRepository(session, clock=StepClock())
        sent_ids = [
            repository.record_sent(
                user_id="u1", lock_id="l1", campaign_name=CAMPAIGN, batch_id=f"m{i}"
            ).id
            for i in range(2)
        ]

    workers = 8
    barrier = Barrier(workers)
    outcomes: list[CorrelationOutcome | None] = []

    def click() -> None:
        with database.session_scope() as session:
            barrier.wait()
            result = record_notification_click(
                session, campaign_name=CAMPAIGN, user_id="u1", lock_id="l1"
            )
        outcomes.append(result.value)

    threads = [Thread(target=click) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count(CorrelationOutcome.MATCHED) == len(sent_ids)
    assert outcomes.count(CorrelationOutcome.NO_MATCH) == workers - len(sent_ids)
    with database.session_scope() as session:
        repository = NotificationEventRepository(session)
        assert all(repository.get(event_id).clicked for event_id in sent_ids)
