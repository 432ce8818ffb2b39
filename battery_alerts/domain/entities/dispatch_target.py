"""Domain entity pairing a subscribed user with a lock and push token."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DispatchTarget:
    user_id: str
    lock_id: str
    push_token: str


__all__ = ["DispatchTarget"]
