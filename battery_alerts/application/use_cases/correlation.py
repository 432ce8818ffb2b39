"""Attribute a battery check to the notification that prompted it."""

from __future__ import annotations

from enum import Enum

import logging

from sqlalchemy.orm import Session

from battery_alerts.domain.errors import StoreUnavailable
from battery_alerts.domain.results import ErrorKind, Result
from battery_alerts.infrastructure.repositories import NotificationEventRepository

logger = logging.getLogger(__name__)


class CorrelationOutcome(str, Enum):
    MATCHED = "matched"
    NO_MATCH = "no_match"


def record_notification_click(
    session: Session,
    *,
    campaign_name: str,
    user_id: str,
    lock_id: str,
) -> Result[CorrelationOutcome]:
    """Mark the newest outstanding notification for the key as clicked.

    ``NO_MATCH`` is a normal outcome: the notification was never sent by us or
    was already attributed to an earlier battery check.
    """

    repository = NotificationEventRepository(session)
    try:
        updated = repository.mark_latest_clicked(
            user_id=user_id, lock_id=lock_id, campaign_name=campaign_name
        )
    except StoreUnavailable as exc:
        return Result.failure(ErrorKind.STORE_UNAVAILABLE, str(exc))

    if updated:
        logger.info("Clicked: %s (lock %s, campaign %s)", user_id, lock_id, campaign_name)
        return Result.success(CorrelationOutcome.MATCHED)

    logger.info(
        "No sent notification found to mark as clicked for %s (lock %s, campaign %s)",
        user_id,
        lock_id,
        campaign_name,
    )
    return Result.success(CorrelationOutcome.NO_MATCH)


__all__ = ["CorrelationOutcome", "record_notification_click"]
