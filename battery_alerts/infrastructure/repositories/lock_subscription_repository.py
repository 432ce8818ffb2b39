"""Read access to the lock to user subscription table."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from battery_alerts.domain.entities import DispatchTarget
from battery_alerts.domain.errors import StoreUnavailable
from battery_alerts.infrastructure.models import LockUserMappingModel

logger = logging.getLogger(__name__)


class LockSubscriptionRepository:
    """Resolve locks to the users (and push tokens) subscribed to them."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_targets_for_locks(self, lock_ids: Iterable[str]) -> Sequence[DispatchTarget]:
        ids = sorted({lock_id for lock_id in lock_ids if lock_id})
        if not ids:
            return []
        query = (
            select(LockUserMappingModel)
            .where(LockUserMappingModel.lock_id.in_(ids))
            .order_by(LockUserMappingModel.lock_id, LockUserMappingModel.user_id)
        )
        try:
            models = self.session.scalars(query).all()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Failed to resolve lock subscriptions: %s", exc)
            raise StoreUnavailable(f"Failed to resolve lock subscriptions: {exc}") from exc
        return [
            DispatchTarget(
                user_id=model.user_id,
                lock_id=model.lock_id,
                push_token=model.fcm_id,
            )
            for model in models
        ]


__all__ = ["LockSubscriptionRepository"]
