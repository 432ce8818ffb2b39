"""Callback invoked by the mobile client when a user checks a lock battery."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from battery_alerts.application.ports import LockRegistry
from battery_alerts.application.use_cases import confirm_battery_check
from battery_alerts.interfaces.api.dependencies import get_db, get_lock_registry
from battery_alerts.interfaces.api.schemas import BatteryCheckRequest, BatteryCheckResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["battery_checks"])


@router.post(
    "/battery-checked",
    response_model=BatteryCheckResponse,
    responses={400: {"description": "lock_id missing"}, 500: {"description": "Update failed"}},
)
def battery_checked(
    payload: BatteryCheckRequest | None = Body(default=None),
    db: Session = Depends(get_db),
    registry: LockRegistry = Depends(get_lock_registry),
):
    """Store the battery check and credit the notification that prompted it."""

    if payload is None or not payload.lock_id:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "lock_id is required"},
        )

    try:
        confirmation = confirm_battery_check(
            registry,
            db,
            lock_id=payload.lock_id,
            user_id=payload.user_id,
            campaign_name=payload.campaign_id,
        )
    except Exception as exc:
        logger.error("Battery check update failed for lock %s: %s", payload.lock_id, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to update battery check", "details": str(exc)},
        )

    return BatteryCheckResponse(
        success=True,
        message="Battery check updated",
        lock_id=confirmation.lock_id,
        updated_at=confirmation.updated_at,
    )


__all__ = ["router"]
