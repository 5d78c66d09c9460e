from __future__ import annotations

from typing import FrozenSet, List, Optional, Union

from pydantic import ConfigDict, Field, field_serializer

from rental_dashboard.shared.base import BaseSchema, FrozenSchema

Number = Union[int, float]


class FilterState(FrozenSchema):
    start: str
    end: str
    branches: FrozenSet[str] = frozenset()
    agents: FrozenSet[str] = frozenset()

    @field_serializer("branches", "agents")
    def _serialize_selection(self, value: FrozenSet[str]) -> List[str]:
        return sorted(value)


class DashboardFilters(BaseSchema):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    dates: List[str] = Field(default_factory=list)
    branches: List[str] = Field(default_factory=list)
    agents: List[str] = Field(default_factory=list)


class SummaryTableFilters(DashboardFilters):
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1, le=500)


class BookingKpis(BaseSchema):
    total_revenue: float
    total_ancillaries: float
    total_duration_days: float
    revenue_per_day: float
    ancillaries_per_day: float
    incident_cost: float
    booking_count: int
    average_duration: Optional[float] = None


class DailySeries(BaseSchema):
    labels: List[str]
    counts: List[int]
    revenues: List[float]


class TrendSeries(DailySeries):
    fleet: List[int]


class CategoryBreakdown(BaseSchema):
    labels: List[str]
    values: List[Number]
    highlight_index: Optional[int] = None


class BranchAgentSummaryRow(BaseSchema):
    branch_office: Optional[str] = None
    agent: Optional[str] = None
    revenue: float
    ancillaries: float
    booking_count: int


class OccupationCard(BaseSchema):
    branch_office: str
    occupation: float


class OccupationSummary(BaseSchema):
    cards: List[OccupationCard]
    average_occupation: float


class FleetOverview(BaseSchema):
    fleet_total: int
    in_service: int


class FilterOptions(BaseSchema):
    branches: List[str]
    agents: List[str]
    date_min: str
    date_max: str


class DataStatus(BaseSchema):
    status: str
    booking_count: int
    generated_at: Optional[str] = None


class DashboardOverview(BaseSchema):
    occupation: OccupationSummary
    fleet: FleetOverview
    fleet_by_provider: CategoryBreakdown
    service_by_type: CategoryBreakdown


class DashboardResponse(BaseSchema):
    filters: FilterState
    kpis: BookingKpis
    channels: CategoryBreakdown
    providers: CategoryBreakdown
    trend: TrendSeries
    month_daily: DailySeries
    summary_rows: List[BranchAgentSummaryRow]
