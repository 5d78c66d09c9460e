from __future__ import annotations

from typing import List

from rental_dashboard.analytics.breakdowns import (
    channel_breakdown,
    fleet_by_provider,
    filter_options,
    provider_share,
    service_by_type,
    summarize_by_branch_agent,
)
from rental_dashboard.analytics.filters import (
    FilterPolicy,
    filter_bookings,
    incidents_for,
    resolve_filter_state,
)
from rental_dashboard.analytics.kpis import (
    calculate_booking_kpis,
    calculate_fleet_overview,
    calculate_occupation,
)
from rental_dashboard.analytics.series import daily_series, trend_series
from rental_dashboard.core.config import get_settings
from rental_dashboard.repositories.dashboard_repository import DashboardRepository
from rental_dashboard.schemas.dashboard import (
    BranchAgentSummaryRow,
    DashboardFilters,
    DashboardOverview,
    DashboardResponse,
    DataStatus,
    FilterOptions,
    FilterState,
)


class DashboardService:
    def __init__(self, repository: DashboardRepository) -> None:
        self.repository = repository
        self.settings = get_settings()

    def resolve_filters(self, filters: DashboardFilters) -> FilterState:
        return resolve_filter_state(
            dates=filters.dates,
            branches=filters.branches,
            agents=filters.agents,
            date_min=self.settings.date_min,
            date_max=self.settings.date_max,
        )

    def get_dashboard(self, filters: DashboardFilters) -> DashboardResponse:
        state = self.resolve_filters(filters)
        dataset = self.repository.get_dataset()

        bookings = filter_bookings(dataset.bookings, state, FilterPolicy.RANGE)
        month_bookings = filter_bookings(
            dataset.bookings,
            state,
            FilterPolicy.FIXED_MONTH,
            month_window=(self.settings.month_min, self.settings.month_max),
        )
        incidents = incidents_for(bookings, dataset.incidents)

        return DashboardResponse(
            filters=state,
            kpis=calculate_booking_kpis(bookings, incidents),
            channels=channel_breakdown(bookings),
            providers=provider_share(bookings),
            # The trend always spans the full reactive window; the filter only changes values.
            trend=trend_series(
                bookings,
                dataset.fleet,
                state.branches,
                self.settings.date_min,
                self.settings.date_max,
            ),
            month_daily=daily_series(month_bookings, self.settings.month_min, self.settings.month_max),
            summary_rows=summarize_by_branch_agent(bookings),
        )

    def get_summary_rows(self, state: FilterState) -> List[BranchAgentSummaryRow]:
        dataset = self.repository.get_dataset()
        return summarize_by_branch_agent(filter_bookings(dataset.bookings, state, FilterPolicy.RANGE))

    def get_overview(self) -> DashboardOverview:
        dataset = self.repository.get_dataset()
        return DashboardOverview(
            occupation=calculate_occupation(dataset.occupation),
            fleet=calculate_fleet_overview(dataset.fleet, dataset.service),
            fleet_by_provider=fleet_by_provider(dataset.fleet),
            service_by_type=service_by_type(dataset.service),
        )

    def get_filter_options(self) -> FilterOptions:
        dataset = self.repository.get_dataset()
        return filter_options(dataset.bookings, self.settings.date_min, self.settings.date_max)

    def get_status(self) -> DataStatus:
        dataset = self.repository.get_dataset()
        return DataStatus(
            status="ok",
            booking_count=dataset.manifest.records.get("bookings", len(dataset.bookings)),
            generated_at=dataset.manifest.generated_at,
        )
