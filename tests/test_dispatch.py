"""Tests for the notification dispatcher."""

from __future__ import annotations

from threading import Event

import pytest

from battery_alerts.application.use_cases import build_push_message, dispatch_notifications
from battery_alerts.application.use_cases.dispatch import ALERT_TITLE
from battery_alerts.domain.entities import DispatchTarget, PushMessage
from battery_alerts.domain.errors import StoreUnavailable
from battery_alerts.infrastructure.repositories import NotificationEventRepository

from conftest import T0, FakePushGateway

CAMPAIGN = "battery_low_alert"


def _targets(count: int) -> list[DispatchTarget]:
    return [DispatchTarget(f"u{i}", f"l{i}", f"tok-{i}") for i in range(count)]


def test_build_push_message_payload() -> None:
    message = build_push_message(DispatchTarget("u1", "l1", "tok"), CAMPAIGN, sent_at=T0)

    assert message.token == "tok"
    assert message.title == ALERT_TITLE
    assert message.body == "Lock l1 battery needs attention!"
    assert message.data == {
        "campaign_id": CAMPAIGN,
        "lock_id": "l1",
        "user_id": "u1",
        "timestamp": "2024-05-01T09:00:00.000Z",
    }


@pytest.mark.parametrize(("total", "failing"), [(0, 0), (3, 0), (5, 2), (4, 4)])
def test_dispatch_isolates_failures(session, total: int, failing: int) -> None:
    targets = _targets(total)
    gateway = FakePushGateway({target.push_token for target in targets[:failing]})

    summary = dispatch_notifications(session, gateway, targets, campaign_name=CAMPAIGN)

    assert summary.success_count == total - failing
    assert summary.failure_count == failing
    assert summary.cancelled is False
    repository = NotificationEventRepository(session)
    assert repository.count() == total - failing


def test_dispatch_records_gateway_message_id(session) -> None:
    gateway = FakePushGateway()

    dispatch_notifications(session, gateway, _targets(1), campaign_name=CAMPAIGN)

    events = NotificationEventRepository(session).list_for_user("u0")
    assert len(events) == 1
    assert events[0].batch_id == "projects/demo/messages/1"
    assert events[0].campaign_name == CAMPAIGN
    assert events[0].clicked is False


def test_dispatch_continues_after_unexpected_gateway_error(session) -> None:
    class FlakyGateway(FakePushGateway):
        def send(self, message: PushMessage) -> str:
            if message.token == "tok-0":
                raise RuntimeError("socket closed")
            return super().send(message)

    summary = dispatch_notifications(session, FlakyGateway(), _targets(3), campaign_name=CAMPAIGN)

    assert (summary.success_count, summary.failure_count) == (2, 1)


def test_dispatch_counts_unrecorded_delivery_as_failure(session, monkeypatch, caplog) -> None:
    def broken_record(self, **kwargs):
        raise StoreUnavailable("insert failed")

    monkeypatch.setattr(NotificationEventRepository, "record_sent", broken_record)
    gateway = FakePushGateway()

    summary = dispatch_notifications(session, gateway, _targets(2), campaign_name=CAMPAIGN)

    assert len(gateway.sent) == 2
    assert (summary.success_count, summary.failure_count) == (0, 2)
    assert "delivered to u0 but not recorded" in caplog.text


def test_dispatch_stops_when_cancelled(session) -> None:
    cancel = Event()

    class CancellingGateway(FakePushGateway):
        def send(self, message: PushMessage) -> str:
            message_id = super().send(message)
            if len(self.sent) == 2:
                cancel.set()
            return message_id

    gateway = CancellingGateway()
    summary = dispatch_notifications(
        session, gateway, _targets(5), campaign_name=CAMPAIGN, cancel_event=cancel
    )

    assert summary.cancelled is True
    assert summary.success_count == 2
    assert len(gateway.sent) == 2
    assert NotificationEventRepository(session).count() == 2
