"""Domain entity representing a recorded battery alert notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

EVENT_TYPE_SENT = "sent"
EVENT_TYPE_CLICKED = "clicked"


@dataclass
class NotificationEvent:
    """A push notification delivered to a user about one of their locks.

    The record is created as ``sent``; a later battery check from the same
    user on the same lock flips ``clicked`` on this record instead of adding
    a second one.
    """

    id: int | None
    user_id: str
    lock_id: str
    campaign_name: str
    event_type: str = EVENT_TYPE_SENT
    sent_at: datetime | None = None
    batch_id: str | None = None
    clicked: bool = False


__all__ = ["EVENT_TYPE_CLICKED", "EVENT_TYPE_SENT", "NotificationEvent"]
