"""Fan-out delivery of battery alerts with per-target failure isolation."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from threading import Event

import logging

from sqlalchemy.orm import Session

from battery_alerts.application.ports import PushGateway
from battery_alerts.domain.entities import DispatchTarget, PushMessage
from battery_alerts.domain.errors import PushDeliveryError, StoreUnavailable
from battery_alerts.infrastructure.repositories import NotificationEventRepository
from battery_alerts.utils import format_client_timestamp, now_utc

logger = logging.getLogger(__name__)

ALERT_TITLE = "🔋 Battery Alert"


@dataclass
class DispatchSummary:
    """Outcome of a dispatch run."""

    success_count: int = 0
    failure_count: int = 0
    cancelled: bool = False

    @property
    def total(self) -> int:
        return self.success_count + self.failure_count


def build_push_message(
    target: DispatchTarget, campaign_name: str, *, sent_at: datetime
) -> PushMessage:
    """Compose the alert for ``target`` including the data envelope read on click."""

    return PushMessage(
        token=target.push_token,
        title=ALERT_TITLE,
        body=f"Lock {target.lock_id} battery needs attention!",
        data={
            "campaign_id": campaign_name,
            "lock_id": target.lock_id,
            "user_id": target.user_id,
            "timestamp": format_client_timestamp(sent_at),
        },
    )


def dispatch_notifications(
    session: Session,
    gateway: PushGateway,
    targets: Iterable[DispatchTarget],
    *,
    campaign_name: str,
    cancel_event: Event | None = None,
    clock: Callable[[], datetime] = now_utc,
) -> DispatchSummary:
    """Send one alert per target and record each successful delivery.

    A failing target is logged and counted, never raised. When
    ``cancel_event`` is set the run stops before the next target; records
    already written stay committed and no partial record is left behind.

    A send already in flight is not interrupted. The gateway's own timeout
    (``PUSH_TIMEOUT_SECONDS``) bounds how long cancellation can wait, and a
    send that completes is still recorded before the run stops.
    """

    repository = NotificationEventRepository(session)
    summary = DispatchSummary()

    for target in targets:
        if cancel_event is not None and cancel_event.is_set():
            logger.warning(
                "Dispatch cancelled after %d sent, %d failed",
                summary.success_count,
                summary.failure_count,
            )
            summary.cancelled = True
            break

        message = build_push_message(target, campaign_name, sent_at=clock())
        try:
            message_id = gateway.send(message)
        except PushDeliveryError as exc:
            logger.error("Failed to send to %s (lock %s): %s", target.user_id, target.lock_id, exc)
            summary.failure_count += 1
            continue
        except Exception:
            logger.exception("Unexpected error sending to %s (lock %s)", target.user_id, target.lock_id)
            summary.failure_count += 1
            continue

        logger.info("Sent to %s (lock %s): %s", target.user_id, target.lock_id, message_id)
        try:
            repository.record_sent(
                user_id=target.user_id,
                lock_id=target.lock_id,
                campaign_name=campaign_name,
                batch_id=message_id,
            )
        except StoreUnavailable as exc:
            # Delivered but unrecorded: a later click for it cannot be correlated.
            logger.error(
                "Notification %s delivered to %s but not recorded: %s",
                message_id,
                target.user_id,
                exc,
            )
            summary.failure_count += 1
            continue

        summary.success_count += 1

    logger.info(
        "Summary: %d sent, %d failed", summary.success_count, summary.failure_count
    )
    return summary


__all__ = ["ALERT_TITLE", "DispatchSummary", "build_push_message", "dispatch_notifications"]
