from __future__ import annotations

from fastapi import APIRouter

from rental_dashboard.api.dashboard import router as dashboard_router
from rental_dashboard.api.health import router as health_router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(dashboard_router)
