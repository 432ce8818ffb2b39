from fastapi import APIRouter

from battery_alerts.utils import now_utc

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "timestamp": now_utc().isoformat()}
