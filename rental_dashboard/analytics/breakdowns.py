from __future__ import annotations

import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from rental_dashboard.analytics.aggregation import (
    count_by,
    distinct_non_empty,
    highlight_index,
    numeric_or_zero,
)
from rental_dashboard.models.rental import BookingRecord, FleetUnitRecord, ServiceEventRecord
from rental_dashboard.schemas.dashboard import (
    BranchAgentSummaryRow,
    CategoryBreakdown,
    FilterOptions,
)

UNKNOWN_LABEL = "N/D"
WALK_IN_NEEDLE = "walk"


def _label(value: Optional[str]) -> str:
    return value or UNKNOWN_LABEL


def _sort_text(value: Optional[str]) -> str:
    return (value or "").casefold()


def summarize_by_branch_agent(bookings: Iterable[BookingRecord]) -> List[BranchAgentSummaryRow]:
    grouped: Dict[Tuple[Optional[str], Optional[str]], Dict[str, float]] = {}
    for booking in bookings:
        bucket = grouped.setdefault(
            (booking.branch_office, booking.agent),
            {"revenue": 0.0, "ancillaries": 0.0, "booking_count": 0},
        )
        bucket["revenue"] += numeric_or_zero(booking.revenue)
        bucket["ancillaries"] += numeric_or_zero(booking.ancillaries)
        bucket["booking_count"] += 1

    ordered = sorted(
        grouped.items(),
        key=lambda item: (-item[1]["revenue"], _sort_text(item[0][0]), _sort_text(item[0][1])),
    )
    return [
        BranchAgentSummaryRow(
            branch_office=branch,
            agent=agent,
            revenue=values["revenue"],
            ancillaries=values["ancillaries"],
            booking_count=int(values["booking_count"]),
        )
        for (branch, agent), values in ordered
    ]


def channel_breakdown(bookings: Iterable[BookingRecord]) -> CategoryBreakdown:
    counts = count_by(bookings, lambda booking: _label(booking.channel))
    labels = list(counts)
    return CategoryBreakdown(
        labels=labels,
        values=[counts[label] for label in labels],
        highlight_index=highlight_index(labels, WALK_IN_NEEDLE),
    )


def provider_share(bookings: Sequence[BookingRecord]) -> CategoryBreakdown:
    counts = count_by(bookings, lambda booking: _label(booking.provider))
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    denominator = len(bookings) or 1
    return CategoryBreakdown(
        labels=[label for label, _ in ranked],
        # Percentage with one decimal, rounded half up.
        values=[math.floor(count / denominator * 1000 + 0.5) / 10 for _, count in ranked],
    )


def fleet_by_provider(fleet: Iterable[FleetUnitRecord]) -> CategoryBreakdown:
    counts = count_by(fleet, lambda unit: _label(unit.provider))
    labels = sorted(counts, key=str.casefold)
    return CategoryBreakdown(labels=labels, values=[counts[label] for label in labels])


def service_by_type(events: Iterable[ServiceEventRecord]) -> CategoryBreakdown:
    counts = count_by(events, lambda event: _label(event.service_type))
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return CategoryBreakdown(
        labels=[label for label, _ in ranked],
        values=[count for _, count in ranked],
    )


def filter_options(
    bookings: Sequence[BookingRecord], date_min: str, date_max: str
) -> FilterOptions:
    return FilterOptions(
        branches=sorted(distinct_non_empty(booking.branch_office for booking in bookings), key=str.casefold),
        agents=sorted(distinct_non_empty(booking.agent for booking in bookings), key=str.casefold),
        date_min=date_min,
        date_max=date_max,
    )
