from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

from pydantic import Field, field_validator

from rental_dashboard.shared.base import FrozenSchema
from rental_dashboard.shared.numbers import to_finite_number, to_label

RecordId = Union[int, str]


class BookingRecord(FrozenSchema):
    id: RecordId
    pickup_date: Optional[str] = None
    branch_office: Optional[str] = None
    agent: Optional[str] = None
    channel: Optional[str] = None
    provider: Optional[str] = None
    revenue: Optional[float] = None
    ancillaries: Optional[float] = None
    duration_days: Optional[float] = None

    @field_validator("revenue", "ancillaries", "duration_days", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> Optional[float]:
        return to_finite_number(value)

    @field_validator("pickup_date", "branch_office", "agent", "channel", "provider", mode="before")
    @classmethod
    def _coerce_label(cls, value: Any) -> Optional[str]:
        return to_label(value)


class OccupationRecord(FrozenSchema):
    branch_office: Optional[str] = None
    occupation: Optional[float] = None

    @field_validator("occupation", mode="before")
    @classmethod
    def _coerce_occupation(cls, value: Any) -> Optional[float]:
        return to_finite_number(value)

    @field_validator("branch_office", mode="before")
    @classmethod
    def _coerce_branch(cls, value: Any) -> Optional[str]:
        return to_label(value)


class FleetUnitRecord(FrozenSchema):
    branch_office: Optional[str] = None
    provider: Optional[str] = None
    license_plate: Optional[str] = None

    @field_validator("branch_office", "provider", "license_plate", mode="before")
    @classmethod
    def _coerce_label(cls, value: Any) -> Optional[str]:
        return to_label(value)


class ServiceEventRecord(FrozenSchema):
    license_plate: Optional[str] = None
    car: Optional[str] = None
    status: Optional[str] = None
    service_type: Optional[str] = Field(default=None, alias="type")

    @field_validator("license_plate", "car", "status", "service_type", mode="before")
    @classmethod
    def _coerce_label(cls, value: Any) -> Optional[str]:
        return to_label(value)


class IncidentRecord(FrozenSchema):
    booking_id: Optional[RecordId] = None
    total_price: Optional[float] = None

    @field_validator("total_price", mode="before")
    @classmethod
    def _coerce_price(cls, value: Any) -> Optional[float]:
        return to_finite_number(value)


class DataManifest(FrozenSchema):
    records: Dict[str, int] = Field(default_factory=dict)
    generated_at: Optional[str] = None


class DashboardDataset(FrozenSchema):
    """Every collection the dashboard needs, loaded together or not at all."""

    bookings: Tuple[BookingRecord, ...] = ()
    occupation: Tuple[OccupationRecord, ...] = ()
    fleet: Tuple[FleetUnitRecord, ...] = ()
    service: Tuple[ServiceEventRecord, ...] = ()
    incidents: Tuple[IncidentRecord, ...] = ()
    manifest: DataManifest = Field(default_factory=DataManifest)
