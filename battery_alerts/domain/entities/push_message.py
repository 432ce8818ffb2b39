"""Domain entity describing a push notification ready for the gateway."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PushMessage:
    """Notification addressed to a single device token.

    ``data`` values are strings, which is what the push gateway accepts for
    data envelopes.
    """

    token: str
    title: str
    body: str
    data: dict[str, str] = field(default_factory=dict)


__all__ = ["PushMessage"]
