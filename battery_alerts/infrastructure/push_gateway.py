"""Firebase Cloud Messaging adapter used to deliver battery alerts."""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any

import firebase_admin
from firebase_admin import credentials, messaging
from firebase_admin.exceptions import FirebaseError

from battery_alerts.config import Settings
from battery_alerts.domain.entities import PushMessage
from battery_alerts.domain.errors import ConfigurationError, PushDeliveryError

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = "battery-alerts"


def decode_service_account(encoded: str) -> dict[str, Any]:
    """Decode the base64 service account JSON stored in ``FIREBASE_BASE64``."""

    try:
        raw = base64.b64decode(encoded, validate=True).decode("utf-8")
        info = json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"FIREBASE_BASE64 is not a valid service account: {exc}") from exc
    if not isinstance(info, dict):
        raise ConfigurationError("FIREBASE_BASE64 must encode a JSON object")
    return info


class FirebasePushGateway:
    """Send :class:`PushMessage` objects through an initialized Firebase app."""

    def __init__(self, app: Any) -> None:
        self._app = app

    @classmethod
    def from_settings(
        cls, settings: Settings, *, app_name: str = DEFAULT_APP_NAME
    ) -> "FirebasePushGateway":
        if not settings.firebase_base64:
            raise ConfigurationError("FIREBASE_BASE64 is not configured")
        service_account = decode_service_account(settings.firebase_base64)
        try:
            return cls(firebase_admin.get_app(app_name))
        except ValueError:
            pass
        try:
            credential = credentials.Certificate(service_account)
            app = firebase_admin.initialize_app(
                credential,
                options={"httpTimeout": settings.push_timeout_seconds},
                name=app_name,
            )
        except (ValueError, OSError) as exc:
            raise ConfigurationError(f"Could not initialize Firebase: {exc}") from exc
        return cls(app)

    def send(self, message: PushMessage) -> str:
        """Deliver ``message`` and return the gateway's message identifier."""

        fcm_message = messaging.Message(
            token=message.token,
            notification=messaging.Notification(title=message.title, body=message.body),
            data=dict(message.data),
        )
        try:
            return messaging.send(fcm_message, app=self._app)
        except (FirebaseError, ValueError) as exc:
            raise PushDeliveryError(str(exc)) from exc

    def close(self) -> None:
        try:
            firebase_admin.delete_app(self._app)
        except ValueError:
            logger.debug("Firebase app already deleted")


__all__ = ["FirebasePushGateway", "decode_service_account", "DEFAULT_APP_NAME"]
