"""Console dashboard for campaign engagement analytics.

Usage:
    battery-alerts-dashboard
    battery-alerts-dashboard user <user_id>
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from datetime import datetime

from battery_alerts.application.use_cases import (
    CampaignStats,
    CampaignSummary,
    OverallPerformance,
    UserEngagementEntry,
    get_campaign_stats,
    get_user_engagement,
    list_campaign_summaries,
    summarize_overall,
)
from battery_alerts.domain.errors import ConfigurationError
from battery_alerts.infrastructure.database import Database
from battery_alerts.interfaces.cli.common import configure_logging, load_settings
from battery_alerts.utils import to_app_timezone

logger = logging.getLogger(__name__)

RULE_WIDTH = 80


def _format_time(value: datetime | None) -> str:
    localized = to_app_timezone(value)
    return localized.strftime("%Y-%m-%d %H:%M:%S") if localized else "-"


def render_table(headers: Sequence[str], rows: Sequence[Sequence[object]]) -> str:
    """Render ``rows`` as a fixed-width text table."""

    cells = [[str(value) for value in row] for row in rows]
    widths = [len(header) for header in headers]
    for row in cells:
        for index, value in enumerate(row):
            widths[index] = max(widths[index], len(value))

    def line(values: Sequence[str]) -> str:
        return " | ".join(value.ljust(widths[i]) for i, value in enumerate(values)).rstrip()

    separator = "-+-".join("-" * width for width in widths)
    return "\n".join([line(headers), separator, *(line(row) for row in cells)])


def render_overview(summaries: Sequence[CampaignSummary]) -> str:
    rows = [
        (
            summary.campaign_name,
            summary.sent_count,
            summary.clicked_count,
            f"{summary.click_through_rate:.2f}%",
            summary.unique_users,
            _format_time(summary.first_activity),
            _format_time(summary.last_activity),
        )
        for summary in summaries
    ]
    headers = ("Campaign", "Sent", "Clicked", "CTR %", "Users", "First Activity", "Last Activity")
    return "ALL CAMPAIGNS OVERVIEW:\n" + "-" * RULE_WIDTH + "\n" + render_table(headers, rows)


def render_campaign_stats(stats: CampaignStats) -> str:
    lines = [
        f"Campaign: {stats.campaign_name}",
        "-" * 50,
        f"  Total Sent:              {stats.sent_count}",
        f"  Total Clicked:           {stats.clicked_count}",
        f"  Unique Users (Sent):     {stats.unique_users_sent}",
        f"  Unique Users (Clicked):  {stats.unique_users_clicked}",
        f"  Click-Through Rate:      {stats.click_through_rate:.2f}%",
        f"  User Engagement Rate:    {stats.user_engagement_rate:.2f}%",
    ]
    if stats.first_sent_at:
        lines.append(f"  First Sent:              {_format_time(stats.first_sent_at)}")
    if stats.last_clicked_at:
        lines.append(f"  Last Clicked:            {_format_time(stats.last_clicked_at)}")
    return "\n".join(lines)


def render_overall(overall: OverallPerformance) -> str:
    return "\n".join(
        [
            "=" * RULE_WIDTH,
            "OVERALL PERFORMANCE:",
            "-" * RULE_WIDTH,
            f"  Total Notifications Sent:     {overall.total_sent}",
            f"  Total Clicks:                 {overall.total_clicked}",
            f"  Average CTR:                  {overall.average_click_through_rate:.2f}%",
            f"  Total Campaigns:              {overall.campaign_count}",
            "=" * RULE_WIDTH,
        ]
    )


def render_user_engagement(user_id: str, entries: Sequence[UserEngagementEntry]) -> str:
    header = "\n".join(["=" * RULE_WIDTH, f"USER ENGAGEMENT: {user_id}", "=" * RULE_WIDTH])
    if not entries:
        return f"{header}\nNo engagement data found for user: {user_id}"
    rows = [
        (
            entry.campaign_name,
            entry.lock_id,
            entry.event_type,
            "yes" if entry.clicked else "no",
            _format_time(entry.sent_at),
            entry.batch_id or "-",
        )
        for entry in entries
    ]
    table = render_table(("Campaign", "Lock", "Event", "Clicked", "Time", "Batch ID"), rows)
    return f"{header}\n{table}"


def show_dashboard(database: Database) -> str:
    """Build the full dashboard text; store failures render as a diagnostic line."""

    sections = ["=" * RULE_WIDTH, "CAMPAIGN ANALYTICS DASHBOARD", "=" * RULE_WIDTH]
    with database.session_scope() as session:
        result = list_campaign_summaries(session)
        if not result.ok:
            sections.append(f"Error: {result.detail}")
            return "\n".join(sections)
        summaries = result.value or []
        if not summaries:
            sections.append("No campaigns found. Send some notifications first!")
            return "\n".join(sections)

        sections.append(render_overview(summaries))
        sections.append("\nDETAILED CAMPAIGN STATISTICS:")
        for summary in summaries:
            stats = get_campaign_stats(session, summary.campaign_name)
            if stats.ok and stats.value is not None:
                sections.append("\n" + render_campaign_stats(stats.value))
            else:
                logger.warning(
                    "Skipping stats for %s: %s", summary.campaign_name, stats.detail
                )
    sections.append("\n" + render_overall(summarize_overall(summaries)))
    return "\n".join(sections)


def show_user_engagement(database: Database, user_id: str) -> str:
    with database.session_scope() as session:
        result = get_user_engagement(session, user_id)
    if not result.ok:
        return f"Error: {result.detail}"
    return render_user_engagement(user_id, result.value or [])


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show campaign analytics.")
    subparsers = parser.add_subparsers(dest="command")
    user_parser = subparsers.add_parser("user", help="Show one user's notification history")
    user_parser.add_argument("user_id", help="Identifier of the user")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()
    try:
        settings = load_settings()
        database = Database.from_settings(settings)
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return 1

    try:
        if args.command == "user":
            output = show_user_engagement(database, args.user_id)
        else:
            output = show_dashboard(database)
    finally:
        database.dispose()

    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
