"""Repository implementations for infrastructure layer."""

from .lock_subscription_repository import LockSubscriptionRepository
from .notification_event_repository import NotificationEventRepository

__all__ = [
    "LockSubscriptionRepository",
    "NotificationEventRepository",
]
