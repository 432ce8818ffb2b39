"""Helpers shared by the command line entry points."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from battery_alerts.config import Settings, get_settings
from battery_alerts.domain.errors import ConfigurationError

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def load_settings() -> Settings:
    """Return settings, turning validation failures into :class:`ConfigurationError`."""

    try:
        return get_settings()
    except ValidationError as exc:
        missing = ", ".join(
            str(error["loc"][0]).upper() for error in exc.errors() if error.get("loc")
        )
        raise ConfigurationError(f"Missing or invalid settings: {missing or exc}") from exc


__all__ = ["LOG_FORMAT", "configure_logging", "load_settings"]
