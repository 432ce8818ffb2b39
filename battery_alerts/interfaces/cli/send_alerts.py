"""Scan for stale locks and push a battery alert to every subscribed user.

Usage:
    battery-alerts-send
    battery-alerts-send --stale-days 45 --campaign battery_low_alert
    battery-alerts-send --dry-run
"""

from __future__ import annotations

import argparse
import logging
import signal
from datetime import timedelta
from threading import Event

from sqlalchemy.exc import SQLAlchemyError

from battery_alerts.application.ports import LockRegistry, PushGateway
from battery_alerts.application.use_cases import (
    DispatchSummary,
    dispatch_notifications,
    find_stale_locks,
    resolve_dispatch_targets,
)
from battery_alerts.domain.errors import ConfigurationError, UpstreamUnavailable
from battery_alerts.infrastructure.database import Database
from battery_alerts.infrastructure.lock_registry import DynamoLockRegistry
from battery_alerts.infrastructure.push_gateway import FirebasePushGateway
from battery_alerts.interfaces.cli.common import configure_logging, load_settings

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Send battery alerts to users of locks without a recent battery check."
    )
    parser.add_argument(
        "--stale-days",
        type=int,
        default=None,
        help="Days without a battery check before a lock is stale (default: STALE_AFTER_DAYS)",
    )
    parser.add_argument(
        "--campaign",
        default=None,
        help="Campaign tag recorded with each notification (default: CAMPAIGN_NAME)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve targets without sending notifications or recording events",
    )
    args = parser.parse_args(argv)
    if args.stale_days is not None and args.stale_days <= 0:
        parser.error("--stale-days must be a positive integer")
    return args


def run_dispatch(
    database: Database,
    registry: LockRegistry,
    gateway: PushGateway | None,
    *,
    stale_after: timedelta,
    campaign_name: str,
    dry_run: bool = False,
    cancel_event: Event | None = None,
) -> DispatchSummary:
    """Run scanner and dispatcher once.

    Raises :class:`UpstreamUnavailable` when the registry or the subscription
    store cannot be read; send failures are only counted.
    """

    stale_locks = find_stale_locks(registry, stale_after=stale_after)
    if not stale_locks:
        logger.info("No stale locks found")
        return DispatchSummary()

    with database.session_scope() as session:
        targets = resolve_dispatch_targets(session, [lock.lock_id for lock in stale_locks])
        if not targets:
            logger.info("No users assigned to stale locks")
            return DispatchSummary()

        if dry_run or gateway is None:
            for target in targets:
                logger.info("[DRY RUN] Would notify %s (lock %s)", target.user_id, target.lock_id)
            return DispatchSummary()

        return dispatch_notifications(
            session,
            gateway,
            targets,
            campaign_name=campaign_name,
            cancel_event=cancel_event,
        )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit status."""

    args = parse_args(argv)
    configure_logging()

    try:
        settings = load_settings()
        logging.getLogger().setLevel(settings.log_level.upper())
        database = Database.from_settings(settings)
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return 1

    gateway = None
    try:
        registry = DynamoLockRegistry.from_settings(settings)
        if not args.dry_run:
            gateway = FirebasePushGateway.from_settings(settings)
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        database.dispose()
        return 1

    try:
        database.create_all()
    except SQLAlchemyError as exc:
        logger.error("Cannot connect to analytics store: %s", exc)
        if gateway is not None:
            gateway.close()
        database.dispose()
        return 1

    cancel_event = Event()
    signal.signal(signal.SIGTERM, lambda *_: cancel_event.set())

    try:
        summary = run_dispatch(
            database,
            registry,
            gateway,
            stale_after=timedelta(days=args.stale_days or settings.stale_after_days),
            campaign_name=args.campaign or settings.campaign_name,
            dry_run=args.dry_run,
            cancel_event=cancel_event,
        )
    except UpstreamUnavailable as exc:
        logger.error("Cannot reach required store: %s", exc)
        return 1
    finally:
        if gateway is not None:
            gateway.close()
        database.dispose()

    logger.info(
        "Dispatch finished: %d sent, %d failed%s",
        summary.success_count,
        summary.failure_count,
        " (cancelled)" if summary.cancelled else "",
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
