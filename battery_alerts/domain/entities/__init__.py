"""Domain entities exposed by the application."""

from .campaign_aggregate import CampaignAggregate
from .dispatch_target import DispatchTarget
from .notification_event import (
    EVENT_TYPE_CLICKED,
    EVENT_TYPE_SENT,
    NotificationEvent,
)
from .push_message import PushMessage
from .stale_lock import StaleLock

__all__ = [
    "CampaignAggregate",
    "DispatchTarget",
    "EVENT_TYPE_CLICKED",
    "EVENT_TYPE_SENT",
    "NotificationEvent",
    "PushMessage",
    "StaleLock",
]
