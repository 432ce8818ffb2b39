"""Exception hierarchy shared by the alerting and analytics layers."""

from __future__ import annotations


class BatteryAlertsError(Exception):
    """Base class for errors raised by the battery alerts package."""


class ConfigurationError(BatteryAlertsError):
    """Required credentials or settings are missing or invalid."""


class UpstreamUnavailable(BatteryAlertsError):
    """An external registry, gateway or store could not be reached."""


class StoreUnavailable(UpstreamUnavailable):
    """The relational store holding analytics or subscriptions failed."""


class PushDeliveryError(UpstreamUnavailable):
    """The push gateway rejected or failed a single message."""


__all__ = [
    "BatteryAlertsError",
    "ConfigurationError",
    "UpstreamUnavailable",
    "StoreUnavailable",
    "PushDeliveryError",
]
