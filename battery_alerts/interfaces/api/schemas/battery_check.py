"""Pydantic models for the battery check callback."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BatteryCheckRequest(BaseModel):
    """Payload sent by the mobile client after the user checks a lock battery.

    ``lock_id`` is optional at the schema level so a missing value produces the
    documented 400 response instead of a validation error.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    lock_id: str | None = Field(default=None, description="Identifier of the checked lock")
    user_id: str | None = Field(default=None, description="User who performed the check")
    campaign_id: str | None = Field(
        default=None, description="Campaign of the notification the user opened"
    )

    @field_validator("lock_id", "user_id", mode="before")
    @classmethod
    def _numeric_ids_as_text(cls, value: object) -> object:
        # Some clients send numeric lock and user ids.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class BatteryCheckResponse(BaseModel):
    success: bool
    message: str
    lock_id: str
    updated_at: str


__all__ = ["BatteryCheckRequest", "BatteryCheckResponse"]
