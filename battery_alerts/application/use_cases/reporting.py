"""Use cases for computing campaign engagement reports."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.orm import Session

from battery_alerts.domain.entities import CampaignAggregate
from battery_alerts.domain.errors import StoreUnavailable
from battery_alerts.domain.results import ErrorKind, Result
from battery_alerts.infrastructure.repositories import NotificationEventRepository


@dataclass
class CampaignStats:
    """Detailed engagement figures for one campaign."""

    campaign_name: str
    sent_count: int
    clicked_count: int
    unique_users_sent: int
    unique_users_clicked: int
    first_sent_at: datetime | None
    last_clicked_at: datetime | None
    click_through_rate: float
    user_engagement_rate: float


@dataclass
class CampaignSummary:
    """One row of the all-campaigns overview."""

    campaign_name: str
    sent_count: int
    clicked_count: int
    unique_users: int
    first_activity: datetime | None
    last_activity: datetime | None
    click_through_rate: float


@dataclass
class UserEngagementEntry:
    campaign_name: str
    lock_id: str
    event_type: str
    clicked: bool
    sent_at: datetime | None
    batch_id: str | None


@dataclass
class OverallPerformance:
    """Totals across every campaign in an overview."""

    total_sent: int
    total_clicked: int
    average_click_through_rate: float
    campaign_count: int


def percentage(numerator: int, denominator: int) -> float:
    """Return ``numerator / denominator * 100`` rounded half-up to 2 decimals, 0 when empty."""

    if denominator <= 0:
        return 0.0
    value = Decimal(numerator) / Decimal(denominator) * 100
    return float(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _stats_from_aggregate(aggregate: CampaignAggregate) -> CampaignStats:
    return CampaignStats(
        campaign_name=aggregate.campaign_name,
        sent_count=aggregate.sent_count,
        clicked_count=aggregate.clicked_count,
        unique_users_sent=aggregate.unique_users_sent,
        unique_users_clicked=aggregate.unique_users_clicked,
        first_sent_at=aggregate.first_sent_at,
        last_clicked_at=aggregate.last_clicked_at,
        click_through_rate=percentage(aggregate.clicked_count, aggregate.sent_count),
        user_engagement_rate=percentage(
            aggregate.unique_users_clicked, aggregate.unique_users_sent
        ),
    )


def _summary_from_aggregate(aggregate: CampaignAggregate) -> CampaignSummary:
    return CampaignSummary(
        campaign_name=aggregate.campaign_name,
        sent_count=aggregate.sent_count,
        clicked_count=aggregate.clicked_count,
        unique_users=aggregate.unique_users_sent,
        first_activity=aggregate.first_sent_at,
        last_activity=aggregate.last_sent_at,
        click_through_rate=percentage(aggregate.clicked_count, aggregate.sent_count),
    )


def get_campaign_stats(session: Session, campaign_name: str) -> Result[CampaignStats]:
    """Return engagement statistics for ``campaign_name`` or ``NOT_FOUND``."""

    try:
        aggregate = NotificationEventRepository(session).aggregate_campaign(campaign_name)
    except StoreUnavailable as exc:
        return Result.failure(ErrorKind.STORE_UNAVAILABLE, str(exc))
    if aggregate is None:
        return Result.failure(
            ErrorKind.NOT_FOUND, f"Campaign '{campaign_name}' has no sent notifications"
        )
    return Result.success(_stats_from_aggregate(aggregate))


def list_campaign_summaries(session: Session) -> Result[list[CampaignSummary]]:
    """Return every campaign, most recently active first."""

    try:
        aggregates = NotificationEventRepository(session).aggregate_all_campaigns()
    except StoreUnavailable as exc:
        return Result.failure(ErrorKind.STORE_UNAVAILABLE, str(exc))
    return Result.success([_summary_from_aggregate(aggregate) for aggregate in aggregates])


def get_user_engagement(session: Session, user_id: str) -> Result[list[UserEngagementEntry]]:
    """Return the notification history of ``user_id``, newest first."""

    try:
        events = NotificationEventRepository(session).list_for_user(user_id)
    except StoreUnavailable as exc:
        return Result.failure(ErrorKind.STORE_UNAVAILABLE, str(exc))
    return Result.success(
        [
            UserEngagementEntry(
                campaign_name=event.campaign_name,
                lock_id=event.lock_id,
                event_type=event.event_type,
                clicked=event.clicked,
                sent_at=event.sent_at,
                batch_id=event.batch_id,
            )
            for event in events
        ]
    )


def summarize_overall(summaries: Sequence[CampaignSummary]) -> OverallPerformance:
    total_sent = sum(summary.sent_count for summary in summaries)
    total_clicked = sum(summary.clicked_count for summary in summaries)
    return OverallPerformance(
        total_sent=total_sent,
        total_clicked=total_clicked,
        average_click_through_rate=percentage(total_clicked, total_sent),
        campaign_count=len(summaries),
    )


__all__ = [
    "CampaignStats",
    "CampaignSummary",
    "OverallPerformance",
    "UserEngagementEntry",
    "get_campaign_stats",
    "get_user_engagement",
    "list_campaign_summaries",
    "percentage",
    "summarize_overall",
]
