"""DynamoDB access to the lock health registry."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import logging

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from battery_alerts.config import Settings
from battery_alerts.domain.entities import StaleLock
from battery_alerts.domain.errors import UpstreamUnavailable
from battery_alerts.utils import format_client_timestamp, now_utc

logger = logging.getLogger(__name__)

LOCK_KEY = "locks_id"
LAST_CHECK_ATTRIBUTE = "last_battery_check"


def parse_registry_timestamp(raw: Any) -> datetime | None:
    if not isinstance(raw, str) or not raw.strip():
        return None
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class DynamoLockRegistry:
    """Scan and update lock items held in a DynamoDB table."""

    def __init__(self, table: Any) -> None:
        self._table = table

    @classmethod
    def from_settings(cls, settings: Settings) -> "DynamoLockRegistry":
        config = Config(
            connect_timeout=settings.registry_timeout_seconds,
            read_timeout=settings.registry_timeout_seconds,
            retries={"max_attempts": 1},
        )
        resource = boto3.resource(
            "dynamodb",
            region_name=settings.aws_region,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            config=config,
        )
        return cls(resource.Table(settings.locks_table_name))

    def find_checked_before(self, cutoff: datetime) -> list[StaleLock]:
        """Return locks whose last battery check is strictly before ``cutoff``.

        Follows ``LastEvaluatedKey`` until the whole table has been scanned.
        """

        scan_kwargs: dict[str, Any] = {
            "FilterExpression": Attr(LAST_CHECK_ATTRIBUTE).lt(
                format_client_timestamp(cutoff)
            )
        }
        locks: list[StaleLock] = []
        while True:
            try:
                response = self._table.scan(**scan_kwargs)
            except (BotoCoreError, ClientError) as exc:
                logger.error("Lock registry scan failed: %s", exc)
                raise UpstreamUnavailable(f"Lock registry scan failed: {exc}") from exc

            for item in response.get("Items", []):
                stale = self._to_stale_lock(item)
                if stale is not None:
                    locks.append(stale)

            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            scan_kwargs["ExclusiveStartKey"] = last_key
        return locks

    def record_battery_check(
        self, lock_id: str, *, checked_at: datetime | None = None
    ) -> str:
        """Store ``checked_at`` (default: now) as the lock's last battery check.

        Returns the timestamp string persisted by the registry.
        """

        timestamp = format_client_timestamp(checked_at or now_utc())
        try:
            response = self._table.update_item(
                Key={LOCK_KEY: lock_id},
                UpdateExpression="SET #last_check = :timestamp",
                ExpressionAttributeNames={"#last_check": LAST_CHECK_ATTRIBUTE},
                ExpressionAttributeValues={":timestamp": timestamp},
                ReturnValues="ALL_NEW",
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("Lock registry update failed for %s: %s", lock_id, exc)
            raise UpstreamUnavailable(f"Lock registry update failed: {exc}") from exc
        attributes = response.get("Attributes") or {}
        return str(attributes.get(LAST_CHECK_ATTRIBUTE, timestamp))

    @staticmethod
    def _to_stale_lock(item: dict[str, Any]) -> StaleLock | None:
        lock_id = item.get(LOCK_KEY)
        last_checked_at = parse_registry_timestamp(item.get(LAST_CHECK_ATTRIBUTE))
        if not lock_id or last_checked_at is None:
            logger.warning("Skipping malformed lock registry item: %s", item)
            return None
        return StaleLock(lock_id=str(lock_id), last_checked_at=last_checked_at)


__all__ = [
    "DynamoLockRegistry",
    "parse_registry_timestamp",
    "LOCK_KEY",
    "LAST_CHECK_ATTRIBUTE",
]
