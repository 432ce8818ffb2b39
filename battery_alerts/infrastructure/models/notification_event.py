"""SQLAlchemy model for the campaign analytics event log."""

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, false

from battery_alerts.infrastructure.database import Base


class NotificationEventModel(Base):
    """Database representation of sent (and possibly clicked) notifications."""

    __tablename__ = "campaign_analytics"
    __table_args__ = (
        Index(
            "ix_campaign_analytics_correlation",
            "user_id",
            "lock_id",
            "campaign_name",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(128), nullable=False)
    lock_id = Column(String(128), nullable=False)
    campaign_name = Column(String(120), nullable=False, index=True)
    event_type = Column(String(20), nullable=False)
    sent_at = Column(DateTime(timezone=True), nullable=False)
    batch_id = Column(String(255), nullable=True)
    clicked = Column(Boolean, nullable=False, default=False, server_default=false())


__all__ = ["NotificationEventModel"]
