from fastapi import FastAPI

from .battery_checks import router as battery_checks_router
from .campaigns import router as campaigns_router
from .health import router as health_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(health_router)
    app.include_router(battery_checks_router)
    app.include_router(campaigns_router)
