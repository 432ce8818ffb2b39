"""Persistence helpers for the notification analytics event log."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime

import logging

from sqlalchemy import case, distinct, false, func, select, true, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased

from battery_alerts.domain.entities import (
    EVENT_TYPE_SENT,
    CampaignAggregate,
    NotificationEvent,
)
from battery_alerts.domain.errors import StoreUnavailable
from battery_alerts.infrastructure.models import NotificationEventModel
from battery_alerts.utils import ensure_utc, now_utc

logger = logging.getLogger(__name__)

_Model = NotificationEventModel


class NotificationEventRepository:
    """Append, correlate and aggregate :class:`NotificationEvent` records.

    ``clock`` stamps ``sent_at`` on insert. Callers never provide the send
    time so that ordering between records follows the store's clock.
    """

    def __init__(
        self, session: Session, *, clock: Callable[[], datetime] = now_utc
    ) -> None:
        self.session = session
        self._clock = clock

    def record_sent(
        self,
        *,
        user_id: str,
        lock_id: str,
        campaign_name: str,
        batch_id: str | None,
    ) -> NotificationEvent:
        model = _Model(
            user_id=user_id,
            lock_id=lock_id,
            campaign_name=campaign_name,
            event_type=EVENT_TYPE_SENT,
            sent_at=ensure_utc(self._clock()),
            batch_id=batch_id,
            clicked=False,
        )
        with self._store_errors("record sent notification"):
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def mark_latest_clicked(
        self, *, user_id: str, lock_id: str, campaign_name: str
    ) -> int:
        """Flip ``clicked`` on the newest unclicked sent record for the key.

        Runs as a single conditional ``UPDATE``. The outer ``clicked = false``
        guard makes a concurrent update of the same row a no-op, so at most one
        caller wins. Returns the number of rows changed (0 or 1).
        """

        candidate = aliased(_Model)
        newest_unclicked = (
            select(candidate.id)
            .where(
                candidate.user_id == user_id,
                candidate.lock_id == lock_id,
                candidate.campaign_name == campaign_name,
                candidate.event_type == EVENT_TYPE_SENT,
                candidate.clicked == false(),
            )
            .order_by(candidate.sent_at.desc(), candidate.id.desc())
            .limit(1)
            .scalar_subquery()
        )
        statement = (
            update(_Model)
            .where(_Model.id == newest_unclicked, _Model.clicked == false())
            .values(clicked=True)
            .execution_options(synchronize_session=False)
        )
        with self._store_errors("mark notification clicked"):
            result = self.session.execute(statement)
            self.session.commit()
        return int(result.rowcount or 0)

    def get(self, event_id: int) -> NotificationEvent | None:
        with self._store_errors("load notification"):
            model = self.session.get(_Model, event_id)
        return self._to_entity(model) if model is not None else None

    def list_for_user(self, user_id: str) -> Sequence[NotificationEvent]:
        query = (
            select(_Model)
            .where(_Model.user_id == user_id, _Model.event_type == EVENT_TYPE_SENT)
            .order_by(_Model.sent_at.desc(), _Model.id.desc())
        )
        with self._store_errors("list notifications for user"):
            models = self.session.scalars(query).all()
        return [self._to_entity(model) for model in models]

    def count(self) -> int:
        with self._store_errors("count notifications"):
            return int(self.session.scalar(select(func.count(_Model.id))) or 0)

    def aggregate_campaign(self, campaign_name: str) -> CampaignAggregate | None:
        query = (
            self._aggregate_query()
            .where(_Model.campaign_name == campaign_name)
            .group_by(_Model.campaign_name)
        )
        with self._store_errors("aggregate campaign"):
            row = self.session.execute(query).first()
        return self._to_aggregate(row) if row is not None else None

    def aggregate_all_campaigns(self) -> Sequence[CampaignAggregate]:
        query = (
            self._aggregate_query()
            .group_by(_Model.campaign_name)
            .order_by(func.max(_Model.sent_at).desc(), _Model.campaign_name)
        )
        with self._store_errors("aggregate campaigns"):
            rows = self.session.execute(query).all()
        return [self._to_aggregate(row) for row in rows]

    @staticmethod
    def _aggregate_query():
        is_clicked = _Model.clicked == true()
        return select(
            _Model.campaign_name.label("campaign_name"),
            func.count(_Model.id).label("sent_count"),
            func.coalesce(func.sum(case((is_clicked, 1), else_=0)), 0).label(
                "clicked_count"
            ),
            func.count(distinct(_Model.user_id)).label("unique_users_sent"),
            func.count(distinct(case((is_clicked, _Model.user_id)))).label(
                "unique_users_clicked"
            ),
            func.min(_Model.sent_at).label("first_sent_at"),
            func.max(_Model.sent_at).label("last_sent_at"),
            func.max(case((is_clicked, _Model.sent_at))).label("last_clicked_at"),
        ).where(_Model.event_type == EVENT_TYPE_SENT)

    @contextmanager
    def _store_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Analytics store failed to %s: %s", action, exc)
            raise StoreUnavailable(f"Failed to {action}: {exc}") from exc

    @staticmethod
    def _to_aggregate(row) -> CampaignAggregate:
        return CampaignAggregate(
            campaign_name=row.campaign_name,
            sent_count=int(row.sent_count or 0),
            clicked_count=int(row.clicked_count or 0),
            unique_users_sent=int(row.unique_users_sent or 0),
            unique_users_clicked=int(row.unique_users_clicked or 0),
            first_sent_at=ensure_utc(row.first_sent_at),
            last_sent_at=ensure_utc(row.last_sent_at),
            last_clicked_at=ensure_utc(row.last_clicked_at),
        )

    @staticmethod
    def _to_entity(model: NotificationEventModel) -> NotificationEvent:
        return NotificationEvent(
            id=model.id,
            user_id=model.user_id,
            lock_id=model.lock_id,
            campaign_name=model.campaign_name,
            event_type=model.event_type,
            sent_at=ensure_utc(model.sent_at),
            batch_id=model.batch_id,
            clicked=bool(model.clicked),
        )


__all__ = ["NotificationEventRepository"]
