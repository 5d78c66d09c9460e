from __future__ import annotations

from typing import Iterable, List, Sequence

from rental_dashboard.analytics.aggregation import distinct_non_empty, total
from rental_dashboard.models.rental import (
    BookingRecord,
    FleetUnitRecord,
    IncidentRecord,
    OccupationRecord,
    ServiceEventRecord,
)
from rental_dashboard.schemas.dashboard import (
    BookingKpis,
    FleetOverview,
    OccupationCard,
    OccupationSummary,
)

IN_SERVICE_STATUS = "in progress"


def calculate_booking_kpis(
    bookings: Sequence[BookingRecord], incidents: Iterable[IncidentRecord]
) -> BookingKpis:
    total_revenue = total(bookings, lambda booking: booking.revenue)
    total_ancillaries = total(bookings, lambda booking: booking.ancillaries)
    total_duration = total(bookings, lambda booking: booking.duration_days)
    booking_count = len(bookings)

    # Normalised per rental day over the whole subset, not a per-booking mean.
    revenue_per_day = total_revenue / total_duration if total_duration > 0 else 0.0
    ancillaries_per_day = total_ancillaries / total_duration if total_duration > 0 else 0.0

    return BookingKpis(
        total_revenue=total_revenue,
        total_ancillaries=total_ancillaries,
        total_duration_days=total_duration,
        revenue_per_day=revenue_per_day,
        ancillaries_per_day=ancillaries_per_day,
        incident_cost=total(incidents, lambda incident: incident.total_price),
        booking_count=booking_count,
        average_duration=total_duration / booking_count if booking_count else None,
    )


def calculate_occupation(records: Iterable[OccupationRecord]) -> OccupationSummary:
    cards: List[OccupationCard] = [
        OccupationCard(branch_office=record.branch_office, occupation=record.occupation)
        for record in records
        if record.branch_office and record.occupation is not None
    ]
    cards.sort(key=lambda card: card.branch_office.casefold())
    average = sum(card.occupation for card in cards) / len(cards) if cards else 0.0
    return OccupationSummary(cards=cards, average_occupation=average)


def count_in_service(events: Iterable[ServiceEventRecord]) -> int:
    """Count vehicles with a service event still in progress.

    License plates identify vehicles when any in-progress event carries one;
    otherwise the ``car`` field is used.
    """
    active = [
        event for event in events if IN_SERVICE_STATUS in str(event.status or "").lower()
    ]
    plates = distinct_non_empty(event.license_plate for event in active)
    if plates:
        return len(plates)
    return len(distinct_non_empty(event.car for event in active))


def calculate_fleet_overview(
    fleet: Sequence[FleetUnitRecord], events: Iterable[ServiceEventRecord]
) -> FleetOverview:
    return FleetOverview(fleet_total=len(fleet), in_service=count_in_service(events))
