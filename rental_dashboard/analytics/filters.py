from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple

from rental_dashboard.models.rental import BookingRecord, IncidentRecord
from rental_dashboard.schemas.dashboard import FilterState
from rental_dashboard.shared.time import (
    DATE_MAX,
    DATE_MIN,
    MONTH_MAX,
    MONTH_MIN,
    clamp_date,
    format_date,
    parse_date,
)


class FilterPolicy(str, Enum):
    """Date predicate used when filtering bookings.

    ``RANGE`` honours the filter's ``start``/``end``. ``FIXED_MONTH`` always
    uses the fixed month window so the month view does not move when the
    range changes. Both share the same branch/agent predicate.
    """

    RANGE = "range"
    FIXED_MONTH = "fixed_month"


def resolve_filter_state(
    dates: Optional[Sequence[Optional[str]]] = None,
    branches: Optional[Iterable[str]] = None,
    agents: Optional[Iterable[str]] = None,
    date_min: str = DATE_MIN,
    date_max: str = DATE_MAX,
) -> FilterState:
    selected = list(dates or [])
    start = date_min
    end = date_max
    if len(selected) >= 1:
        start = _clamp_selected_date(selected[0], date_min, date_max, default=date_min)
    if len(selected) >= 2:
        end = _clamp_selected_date(selected[1], date_min, date_max, default=date_max)
    return FilterState(
        start=start,
        end=end,
        branches=_as_selection(branches),
        agents=_as_selection(agents),
    )


def _clamp_selected_date(value: Optional[str], lower: str, upper: str, default: str) -> str:
    if not value:
        return default
    normalized = format_date(parse_date(value.strip()))
    return clamp_date(normalized, lower, upper, default=default)


def _as_selection(values: Optional[Iterable[str]]) -> FrozenSet[str]:
    return frozenset(value for value in (values or []) if value)


def matches_selection(booking: BookingRecord, state: FilterState) -> bool:
    if state.branches and booking.branch_office not in state.branches:
        return False
    if state.agents and booking.agent not in state.agents:
        return False
    return True


def filter_bookings(
    bookings: Iterable[BookingRecord],
    state: FilterState,
    policy: FilterPolicy = FilterPolicy.RANGE,
    month_window: Tuple[str, str] = (MONTH_MIN, MONTH_MAX),
) -> List[BookingRecord]:
    if policy is FilterPolicy.FIXED_MONTH:
        window_start, window_end = month_window
    else:
        window_start, window_end = state.start, state.end
    return [
        booking
        for booking in bookings
        if _within(booking.pickup_date, window_start, window_end)
        and matches_selection(booking, state)
    ]


def _within(pickup_date: Optional[str], start: str, end: str) -> bool:
    if not pickup_date:
        return False
    return start <= pickup_date <= end


def incidents_for(
    bookings: Iterable[BookingRecord], incidents: Iterable[IncidentRecord]
) -> List[IncidentRecord]:
    booking_ids = {booking.id for booking in bookings}
    return [
        incident
        for incident in incidents
        if incident.booking_id is not None and incident.booking_id in booking_ids
    ]
