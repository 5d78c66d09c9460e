from __future__ import annotations

from functools import lru_cache

from rental_dashboard.repositories.dashboard_repository import DashboardRepository
from rental_dashboard.services.dashboard_service import DashboardService


@lru_cache
def get_dashboard_repository() -> DashboardRepository:
    return DashboardRepository()


def get_dashboard_service() -> DashboardService:
    return DashboardService(repository=get_dashboard_repository())
