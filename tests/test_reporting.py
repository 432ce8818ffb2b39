"""Tests for campaign engagement reports."""

from __future__ import annotations

import pytest

from battery_alerts.application.use_cases import (
    CampaignSummary,
    get_campaign_stats,
    get_user_engagement,
    list_campaign_summaries,
    summarize_overall,
)
from battery_alerts.application.use_cases.reporting import percentage
from battery_alerts.domain.results import ErrorKind
from battery_alerts.infrastructure.database import Database
from battery_alerts.infrastructure.repositories import NotificationEventRepository

from conftest import T0, StepClock

CAMPAIGN = "battery_low_alert"


@pytest.fixture()
def repository(session):
    return NotificationEventRepository(session, clock=StepClock())


@pytest.mark.parametrize(
    ("numerator", "denominator", "expected"),
    [
        (0, 0, 0.0),
        (3, 0, 0.0),
        (1, 2, 50.0),
        (1, 3, 33.33),
        (2, 3, 66.67),
        (1, 8, 12.5),
        (1, 800, 0.13),
        (5, 5, 100.0),
    ],
)
def test_percentage(numerator, denominator, expected) -> None:
    assert percentage(numerator, denominator) == expected


def test_campaign_stats_scenario(session, repository) -> None:
    """Sends at T0 and T1, click correlated to T1: CTR 50%."""

    repository.record_sent(user_id="u1", lock_id="l1", campaign_name=CAMPAIGN, batch_id="m0")
    latest = repository.record_sent(
        user_id="u1", lock_id="l1", campaign_name=CAMPAIGN, batch_id="m1"
    )
    repository.mark_latest_clicked(user_id="u1", lock_id="l1", campaign_name=CAMPAIGN)

    result = get_campaign_stats(session, CAMPAIGN)

    assert result.ok
    stats = result.value
    assert stats.sent_count == 2
    assert stats.clicked_count == 1
    assert stats.click_through_rate == 50.0
    assert stats.unique_users_sent == 1
    assert stats.unique_users_clicked == 1
    assert stats.user_engagement_rate == 100.0
    assert stats.first_sent_at == T0
    assert stats.last_clicked_at == latest.sent_at


def test_campaign_stats_without_clicks(session, repository) -> None:
    repository.record_sent(user_id="u1", lock_id="l1", campaign_name=CAMPAIGN, batch_id=None)
    repository.record_sent(user_id="u2", lock_id="l2", campaign_name=CAMPAIGN, batch_id=None)

    stats = get_campaign_stats(session, CAMPAIGN).value

    assert stats.clicked_count == 0
    assert stats.click_through_rate == 0.0
    assert stats.user_engagement_rate == 0.0
    assert stats.last_clicked_at is None


def test_campaign_stats_not_found(session) -> None:
    result = get_campaign_stats(session, "unknown")

    assert not result.ok
    assert result.error is ErrorKind.NOT_FOUND


def test_campaign_summaries(session, repository) -> None:
    repository.record_sent(user_id="u1", lock_id="l1", campaign_name="first", batch_id=None)
    repository.record_sent(user_id="u1", lock_id="l1", campaign_name=CAMPAIGN, batch_id=None)
    repository.record_sent(user_id="u2", lock_id="l2", campaign_name=CAMPAIGN, batch_id=None)
    repository.mark_latest_clicked(user_id="u2", lock_id="l2", campaign_name=CAMPAIGN)

    summaries = list_campaign_summaries(session).value

    assert [summary.campaign_name for summary in summaries] == [CAMPAIGN, "first"]
    assert summaries[0].sent_count == 2
    assert summaries[0].clicked_count == 1
    assert summaries[0].unique_users == 2
    assert summaries[0].click_through_rate == 50.0
    assert summaries[1].click_through_rate == 0.0


def test_campaign_summaries_empty_store(session) -> None:
    result = list_campaign_summaries(session)

    assert result.ok
    assert result.value == []


def test_user_engagement_history(session, repository) -> None:
    repository.record_sent(user_id="u1", lock_id="l1", campaign_name=CAMPAIGN, batch_id="m1")
    repository.record_sent(user_id="u1", lock_id="l2", campaign_name=CAMPAIGN, batch_id="m2")
    repository.mark_latest_clicked(user_id="u1", lock_id="l1", campaign_name=CAMPAIGN)

    entries = get_user_engagement(session, "u1").value

    assert [(entry.lock_id, entry.batch_id, entry.clicked) for entry in entries] == [
        ("l2", "m2", False),
        ("l1", "m1", True),
    ]
    assert all(entry.event_type == "sent" for entry in entries)
    assert get_user_engagement(session, "nobody").value == []


def test_reports_surface_store_failures(tmp_path) -> None:
    database = Database(f"sqlite:///{tmp_path / 'no_tables.db'}")
    try:
        with database.session_scope() as session:
            for result in (
                get_campaign_stats(session, CAMPAIGN),
                list_campaign_summaries(session),
                get_user_engagement(session, "u1"),
            ):
                assert result.error is ErrorKind.STORE_UNAVAILABLE
                assert result.detail
    finally:
        database.dispose()


def test_summarize_overall() -> None:
    summaries = [
        CampaignSummary("a", 3, 1, 3, None, None, 33.33),
        CampaignSummary("b", 1, 1, 1, None, None, 100.0),
    ]

    overall = summarize_overall(summaries)

    assert overall.total_sent == 4
    assert overall.total_clicked == 2
    assert overall.average_click_through_rate == 50.0
    assert overall.campaign_count == 2
    assert summarize_overall([]).average_click_through_rate == 0.0
