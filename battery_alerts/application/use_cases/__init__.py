"""Use cases for the battery alert pipeline and its engagement analytics."""

from .battery_checks import BatteryCheckConfirmation, confirm_battery_check
from .correlation import CorrelationOutcome, record_notification_click
from .dispatch import DispatchSummary, build_push_message, dispatch_notifications
from .reporting import (
    CampaignStats,
    CampaignSummary,
    OverallPerformance,
    UserEngagementEntry,
    get_campaign_stats,
    get_user_engagement,
    list_campaign_summaries,
    summarize_overall,
)
from .stale_locks import find_stale_locks, resolve_dispatch_targets

__all__ = [
    "BatteryCheckConfirmation",
    "confirm_battery_check",
    "CorrelationOutcome",
    "record_notification_click",
    "DispatchSummary",
    "build_push_message",
    "dispatch_notifications",
    "CampaignStats",
    "CampaignSummary",
    "OverallPerformance",
    "UserEngagementEntry",
    "get_campaign_stats",
    "get_user_engagement",
    "list_campaign_summaries",
    "summarize_overall",
    "find_stale_locks",
    "resolve_dispatch_targets",
]
