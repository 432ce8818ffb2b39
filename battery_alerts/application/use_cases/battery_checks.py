"""Use case handling a battery check reported by the mobile client."""

from __future__ import annotations

from dataclasses import dataclass

import logging

from sqlalchemy.orm import Session

from battery_alerts.application.ports import LockRegistry
from battery_alerts.domain.results import Result

from .correlation import CorrelationOutcome, record_notification_click

logger = logging.getLogger(__name__)


@dataclass
class BatteryCheckConfirmation:
    lock_id: str
    updated_at: str
    correlation: Result[CorrelationOutcome] | None = None


def confirm_battery_check(
    registry: LockRegistry,
    session: Session,
    *,
    lock_id: str,
    user_id: str | None = None,
    campaign_name: str | None = None,
) -> BatteryCheckConfirmation:
    """Record the battery check, then attribute it to a notification if possible.

    The registry update always happens first and is not undone by anything
    that follows. Raises :class:`UpstreamUnavailable` only when that update
    fails; correlation problems are reported in the returned result.
    """

    logger.info(
        "Battery check: lock=%s, user=%s, campaign=%s", lock_id, user_id, campaign_name
    )
    updated_at = registry.record_battery_check(lock_id)
    confirmation = BatteryCheckConfirmation(lock_id=lock_id, updated_at=updated_at)

    if not (user_id and campaign_name):
        return confirmation

    correlation = record_notification_click(
        session, campaign_name=campaign_name, user_id=user_id, lock_id=lock_id
    )
    if not correlation.ok:
        logger.warning(
            "Could not correlate battery check for lock %s: %s", lock_id, correlation.detail
        )
    confirmation.correlation = correlation
    return confirmation


__all__ = ["BatteryCheckConfirmation", "confirm_battery_check"]
