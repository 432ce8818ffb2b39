"""Read-only endpoints exposing campaign engagement reports."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from battery_alerts.application.use_cases import (
    get_campaign_stats,
    get_user_engagement,
    list_campaign_summaries,
)
from battery_alerts.domain.results import ErrorKind, Result
from battery_alerts.interfaces.api.dependencies import get_db
from battery_alerts.interfaces.api.schemas import (
    CampaignStatsRead,
    CampaignSummaryRead,
    UserEngagementRead,
)

router = APIRouter(tags=["campaigns"])


def _unwrap(result: Result):
    if result.ok:
        return result.value
    if result.error is ErrorKind.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.detail)
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=result.detail or "Analytics store unavailable",
    )


@router.get("/campaigns", response_model=list[CampaignSummaryRead])
def list_campaigns(db: Session = Depends(get_db)) -> list[CampaignSummaryRead]:
    """Return every campaign, most recently active first."""

    summaries = _unwrap(list_campaign_summaries(db))
    return [CampaignSummaryRead.model_validate(summary) for summary in summaries]


@router.get("/campaigns/{campaign_name}", response_model=CampaignStatsRead)
def read_campaign(campaign_name: str, db: Session = Depends(get_db)) -> CampaignStatsRead:
    stats = _unwrap(get_campaign_stats(db, campaign_name))
    return CampaignStatsRead.model_validate(stats)


@router.get("/users/{user_id}/engagement", response_model=list[UserEngagementRead])
def read_user_engagement(
    user_id: str, db: Session = Depends(get_db)
) -> list[UserEngagementRead]:
    """Return the notifications sent to ``user_id``, newest first."""

    entries = _unwrap(get_user_engagement(db, user_id))
    return [UserEngagementRead.model_validate(entry) for entry in entries]


__all__ = ["router"]
