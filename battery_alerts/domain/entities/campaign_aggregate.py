"""Raw per-campaign counters read from the analytics event log."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CampaignAggregate:
    """Counts and timestamps over the ``sent`` records of one campaign.

    ``last_clicked_at`` is the send time of the newest clicked record; no
    separate click timestamp is stored.
    """

    campaign_name: str
    sent_count: int
    clicked_count: int
    unique_users_sent: int
    unique_users_clicked: int
    first_sent_at: datetime | None
    last_sent_at: datetime | None
    last_clicked_at: datetime | None


__all__ = ["CampaignAggregate"]
