"""SQLAlchemy model joining locks to the users subscribed to them."""

from sqlalchemy import Column, Integer, String

from battery_alerts.infrastructure.database import Base


class LockUserMappingModel(Base):
    """Subscription of a user device (push token) to a lock."""

    __tablename__ = "lock_user_mapping"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(128), nullable=False, index=True)
    lock_id = Column(String(128), nullable=False, index=True)
    fcm_id = Column(String(512), nullable=False)


__all__ = ["LockUserMappingModel"]
