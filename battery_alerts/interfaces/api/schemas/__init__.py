from .battery_check import BatteryCheckRequest, BatteryCheckResponse
from .campaign import CampaignStatsRead, CampaignSummaryRead, UserEngagementRead

__all__ = [
    "BatteryCheckRequest",
    "BatteryCheckResponse",
    "CampaignStatsRead",
    "CampaignSummaryRead",
    "UserEngagementRead",
]
