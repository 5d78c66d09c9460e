from __future__ import annotations

from typing import AbstractSet, Iterable, List, Sequence

from rental_dashboard.analytics.aggregation import count_by, sum_by
from rental_dashboard.models.rental import BookingRecord, FleetUnitRecord
from rental_dashboard.schemas.dashboard import DailySeries, TrendSeries
from rental_dashboard.shared.time import enumerate_days


def daily_series(bookings: Iterable[BookingRecord], start: str, end: str) -> DailySeries:
    rows = list(bookings)
    counts_by_day = count_by(rows, lambda booking: booking.pickup_date)
    revenue_by_day = sum_by(rows, lambda booking: booking.pickup_date, lambda booking: booking.revenue)

    labels = enumerate_days(start, end)
    return DailySeries(
        labels=labels,
        counts=[counts_by_day.get(day, 0) for day in labels],
        revenues=[revenue_by_day.get(day, 0.0) for day in labels],
    )


def fleet_series(
    fleet: Sequence[FleetUnitRecord], selected_branches: AbstractSet[str], length: int
) -> List[int]:
    fleet_shown = len(fleet)
    if len(selected_branches) == 1:
        (branch,) = tuple(selected_branches)
        branch_units = sum(1 for unit in fleet if unit.branch_office == branch)
        # A branch without fleet records falls back to the whole fleet.
        fleet_shown = branch_units or fleet_shown
    return [fleet_shown] * max(length, 0)


def trend_series(
    bookings: Iterable[BookingRecord],
    fleet: Sequence[FleetUnitRecord],
    selected_branches: AbstractSet[str],
    start: str,
    end: str,
) -> TrendSeries:
    daily = daily_series(bookings, start, end)
    return TrendSeries(
        labels=daily.labels,
        counts=daily.counts,
        revenues=daily.revenues,
        fleet=fleet_series(fleet, selected_branches, len(daily.labels)),
    )
