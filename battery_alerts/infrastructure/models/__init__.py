"""ORM models used by the application infrastructure."""

from .lock_user_mapping import LockUserMappingModel
from .notification_event import NotificationEventModel

__all__ = [
    "LockUserMappingModel",
    "NotificationEventModel",
]
