from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from rental_dashboard.api.dependencies import get_dashboard_service
from rental_dashboard.core.errors import DataUnavailableError
from rental_dashboard.main import create_app
from rental_dashboard.models.rental import (
    BookingRecord,
    DashboardDataset,
    DataManifest,
    FleetUnitRecord,
    IncidentRecord,
    OccupationRecord,
    ServiceEventRecord,
)
from rental_dashboard.services.dashboard_service import DashboardService


def build_sample_dataset() -> DashboardDataset:
    bookings = (
        BookingRecord(
            id="B1", pickup_date="2025-12-05", branch_office="Milano", agent="Rossi",
            channel="Walk-in", provider="Hertz", revenue=100, ancillaries=20, duration_days=2,
        ),
        BookingRecord(
            id="B2", pickup_date="2025-12-05", branch_office="Milano", agent="Rossi",
            channel="Web", provider="Avis", revenue=None, ancillaries=10, duration_days=3,
        ),
        BookingRecord(
            id="B3", pickup_date="2025-12-06", branch_office="Milano", agent="Bianchi",
            channel="Web", provider="Hertz", revenue=50, ancillaries=None, duration_days=1,
        ),
        BookingRecord(
            id="B4", pickup_date="2025-12-20", branch_office="Roma", agent="Verdi",
            channel="Broker", provider="Avis", revenue=300, ancillaries=30, duration_days=4,
        ),
        BookingRecord(
            id="B5", pickup_date="2026-01-02", branch_office="Roma", agent="Rossi",
            channel="Walk-in", provider="Hertz", revenue=80, ancillaries=0, duration_days=2,
        ),
        BookingRecord(
            id=6, pickup_date="2025-11-30", branch_office="Roma", agent="Verdi",
            channel="Web", provider="Sixt", revenue=999, ancillaries=5, duration_days=5,
        ),
    )
    incidents = (
        IncidentRecord(booking_id="B1", total_price=40),
        IncidentRecord(booking_id=None, total_price=500),
        IncidentRecord(booking_id="B4", total_price=60),
        IncidentRecord(booking_id="6", total_price=70),
        IncidentRecord(booking_id=6, total_price=15),
    )
    fleet = (
        FleetUnitRecord(branch_office="Milano", provider="Hertz"),
        FleetUnitRecord(branch_office="Milano", provider="Hertz"),
        FleetUnitRecord(branch_office="Milano", provider="Avis"),
        FleetUnitRecord(branch_office="Roma", provider="Avis"),
        FleetUnitRecord(branch_office="Roma", provider="Sixt"),
    )
    service = (
        ServiceEventRecord(license_plate="AB123", car="Fiat Panda", status="In Progress", service_type="Tagliando"),
        ServiceEventRecord(license_plate="AB123", car="Fiat Panda", status="in progress", service_type="Gomme"),
        ServiceEventRecord(license_plate="CD456", car="Fiat Tipo", status="Completed", service_type="Tagliando"),
        ServiceEventRecord(license_plate=None, car="Fiat 500", status="IN PROGRESS", service_type=None),
    )
    occupation = (
        OccupationRecord(branch_office="Roma", occupation=0.8),
        OccupationRecord(branch_office="Milano", occupation=0.6),
        OccupationRecord(branch_office=None, occupation=0.5),
        OccupationRecord(branch_office="Napoli", occupation="n/a"),
    )
    return DashboardDataset(
        bookings=bookings,
        occupation=occupation,
        fleet=fleet,
        service=service,
        incidents=incidents,
        manifest=DataManifest(records={"bookings": 6}, generated_at="2026-01-05T08:00:00"),
    )


class StubDashboardRepository:
    def __init__(self, dataset: DashboardDataset | None = None, fail: bool = False) -> None:
        self.dataset = dataset
        self.fail = fail
        self.calls = 0

    def get_dataset(self) -> DashboardDataset:
        self.calls += 1
        if self.fail or self.dataset is None:
            raise DataUnavailableError()
        return self.dataset


@pytest.fixture()
def sample_dataset() -> DashboardDataset:
    return build_sample_dataset()


@pytest.fixture()
def dashboard_service(sample_dataset: DashboardDataset) -> DashboardService:
    return DashboardService(repository=StubDashboardRepository(sample_dataset))


@pytest.fixture()
def client(dashboard_service: DashboardService) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_dashboard_service] = lambda: dashboard_service
    return TestClient(app)


@pytest.fixture()
def failing_client() -> TestClient:
    app = create_app()
    app.dependency_overrides[get_dashboard_service] = lambda: DashboardService(
        repository=StubDashboardRepository(fail=True)
    )
    return TestClient(app)


@pytest.fixture()
def make_service():
    def _make(dataset: DashboardDataset | None = None, fail: bool = False) -> DashboardService:
        return DashboardService(repository=StubDashboardRepository(dataset, fail=fail))

    return _make
