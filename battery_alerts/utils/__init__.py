"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_utc,
    format_client_timestamp,
    get_app_timezone,
    now_utc,
    to_app_timezone,
)

__all__ = [
    "ensure_utc",
    "format_client_timestamp",
    "get_app_timezone",
    "now_utc",
    "to_app_timezone",
]
