"""Schemas for campaign reporting endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CampaignStatsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    campaign_name: str
    sent_count: int = Field(..., description="Number of notifications sent")
    clicked_count: int = Field(..., description="Sent notifications later clicked")
    unique_users_sent: int
    unique_users_clicked: int
    first_sent_at: datetime | None = None
    last_clicked_at: datetime | None = Field(
        default=None, description="Send time of the most recently clicked notification"
    )
    click_through_rate: float
    user_engagement_rate: float


class CampaignSummaryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    campaign_name: str
    sent_count: int
    clicked_count: int
    unique_users: int
    first_activity: datetime | None = None
    last_activity: datetime | None = None
    click_through_rate: float


class UserEngagementRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    campaign_name: str
    lock_id: str
    event_type: str
    clicked: bool
    sent_at: datetime | None = None
    batch_id: str | None = None


__all__ = ["CampaignStatsRead", "CampaignSummaryRead", "UserEngagementRead"]
