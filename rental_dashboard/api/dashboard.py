from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query

from rental_dashboard.api.dependencies import get_dashboard_service
from rental_dashboard.core.config import get_settings
from rental_dashboard.schemas.dashboard import (
    BranchAgentSummaryRow,
    DashboardFilters,
    DashboardOverview,
    DashboardResponse,
    DataStatus,
    FilterOptions,
    SummaryTableFilters,
)
from rental_dashboard.services.dashboard_service import DashboardService
from rental_dashboard.shared.response import ResponseEnvelope, build_meta, paginate_list


router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_filters(
    dates: List[str] = Query(default=[]),
    branches: List[str] = Query(default=[]),
    agents: List[str] = Query(default=[]),
) -> DashboardFilters:
    return DashboardFilters(dates=dates, branches=branches, agents=agents)


def get_summary_table_filters(
    dates: List[str] = Query(default=[]),
    branches: List[str] = Query(default=[]),
    agents: List[str] = Query(default=[]),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=500),
) -> SummaryTableFilters:
    return SummaryTableFilters(
        dates=dates,
        branches=branches,
        agents=agents,
        page=page,
        page_size=page_size,
    )


@router.get("")
def dashboard(
    filters: DashboardFilters = Depends(get_dashboard_filters),
    service: DashboardService = Depends(get_dashboard_service),
) -> ResponseEnvelope[DashboardResponse]:
    data = service.get_dashboard(filters)
    meta = build_meta(
        time_window=f"{data.filters.start}..{data.filters.end}",
        currency=get_settings().currency_code,
        data_status="ok",
    )
    return ResponseEnvelope(data=data, pagination=None, meta=meta)


@router.get("/table")
def dashboard_table(
    filters: SummaryTableFilters = Depends(get_summary_table_filters),
    service: DashboardService = Depends(get_dashboard_service),
) -> ResponseEnvelope[List[BranchAgentSummaryRow]]:
    state = service.resolve_filters(filters)
    rows = service.get_summary_rows(state)
    paged_rows, pagination = paginate_list(rows, filters.page, filters.page_size)
    meta = build_meta(
        time_window=f"{state.start}..{state.end}",
        currency=get_settings().currency_code,
        data_status="ok",
    )
    return ResponseEnvelope(data=paged_rows, pagination=pagination, meta=meta)


@router.get("/overview")
def dashboard_overview(
    service: DashboardService = Depends(get_dashboard_service),
) -> ResponseEnvelope[DashboardOverview]:
    data = service.get_overview()
    return ResponseEnvelope(data=data, pagination=None, meta=build_meta(time_window="fixed", data_status="ok"))


@router.get("/filters")
def dashboard_filter_options(
    service: DashboardService = Depends(get_dashboard_service),
) -> ResponseEnvelope[FilterOptions]:
    data = service.get_filter_options()
    meta = build_meta(time_window=f"{data.date_min}..{data.date_max}", data_status="ok")
    return ResponseEnvelope(data=data, pagination=None, meta=meta)


@router.get("/status")
def dashboard_status(
    service: DashboardService = Depends(get_dashboard_service),
) -> ResponseEnvelope[DataStatus]:
    data = service.get_status()
    return ResponseEnvelope(data=data, pagination=None, meta=build_meta(time_window="na", data_status=data.status))
