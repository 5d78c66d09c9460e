from __future__ import annotations

import json
from typing import Any, Dict, List

import httpx
import pytest

from rental_dashboard.analytics.kpis import count_in_service
from rental_dashboard.core.data_source import DashboardDataClient
from rental_dashboard.core.errors import DataUnavailableError
from rental_dashboard.repositories.dashboard_repository import DATASET_DOCUMENTS, DashboardRepository

DOCUMENTS: Dict[str, Any] = {
    "bookings": [
        {
            "id": "B1",
            "pickupDate": "2025-12-05",
            "branchOffice": "Milano",
            "agent": "Rossi",
            "channel": "Walk-in",
            "provider": "Hertz",
            "revenue": 100,
            "ancillaries": "n/a",
            "durationDays": 2,
            "customer": "ignored",
        },
        {"id": 2, "pickupDate": "2025-12-06", "branchOffice": "Roma"},
    ],
    "occupation": [{"branchOffice": "Milano", "occupation": 0.75}],
    "fleet": [{"branchOffice": "Milano", "provider": "Hertz", "licensePlate": "AB123"}],
    "service": [{"licensePlate": "AB123", "car": "Panda", "status": "In progress", "type": "Tagliando"}],
    "incidents": [{"bookingId": "B1", "totalPrice": 40}, {"bookingId": None, "totalPrice": 10}],
    "manifest": {"records": {"bookings": 2}, "generatedAt": "2026-01-05"},
}


class RecordingHandler:
    def __init__(self, documents: Dict[str, Any], failing: str | None = None) -> None:
        self.documents = documents
        self.failing = failing
        self.requested: List[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        name = request.url.path.rsplit("/", 1)[-1].removesuffix(".json")
        self.requested.append(name)
        if name == self.failing or name not in self.documents:
            return httpx.Response(404, json={"error": "missing"})
        return httpx.Response(200, json=self.documents[name])


def make_repository(handler: RecordingHandler) -> DashboardRepository:
    client = DashboardDataClient(
        source="https://data.example.com/dashboard",
        transport=httpx.MockTransport(handler),
    )
    return DashboardRepository(client=client)


def test_loads_every_document_from_remote_source() -> None:
    handler = RecordingHandler(DOCUMENTS)
    dataset = make_repository(handler).get_dataset()

    assert sorted(handler.requested) == sorted(DATASET_DOCUMENTS)
    assert [booking.id for booking in dataset.bookings] == ["B1", 2]
    first = dataset.bookings[0]
    assert first.pickup_date == "2025-12-05"
    assert first.branch_office == "Milano"
    assert first.ancillaries is None
    assert dataset.service[0].service_type == "Tagliando"
    assert dataset.incidents[1].booking_id is None
    assert dataset.manifest.records["bookings"] == 2


def test_dataset_is_loaded_once() -> None:
    handler = RecordingHandler(DOCUMENTS)
    repository = make_repository(handler)
    first = repository.get_dataset()
    second = repository.get_dataset()
    assert first is second
    assert len(handler.requested) == len(DATASET_DOCUMENTS)


def test_single_failed_fetch_aborts_the_whole_load() -> None:
    handler = RecordingHandler(DOCUMENTS, failing="incidents")
    repository = make_repository(handler)
    with pytest.raises(DataUnavailableError):
        repository.get_dataset()

    handler.failing = None
    dataset = repository.get_dataset()
    assert len(dataset.incidents) == 2


def test_invalid_records_abort_the_load() -> None:
    documents = dict(DOCUMENTS, bookings=[{"pickupDate": "2025-12-05"}])
    with pytest.raises(DataUnavailableError):
        make_repository(RecordingHandler(documents)).get_dataset()


def test_loads_documents_from_local_directory(tmp_path) -> None:
    for name, document in DOCUMENTS.items():
        (tmp_path / f"{name}.json").write_text(json.dumps(document), encoding="utf-8")
    repository = DashboardRepository(client=DashboardDataClient(source=str(tmp_path)))
    dataset = repository.get_dataset()
    assert len(dataset.bookings) == 2
    assert dataset.occupation[0].occupation == 0.75


def test_missing_local_document_aborts_the_load(tmp_path) -> None:
    (tmp_path / "bookings.json").write_text("[]", encoding="utf-8")
    repository = DashboardRepository(client=DashboardDataClient(source=str(tmp_path)))
    with pytest.raises(DataUnavailableError):
        repository.get_dataset()


def test_numeric_labels_are_loaded_as_text() -> None:
    documents = dict(
        DOCUMENTS,
        bookings=[{"id": 1, "pickupDate": "2025-12-05", "branchOffice": "Milano", "agent": 42, "revenue": 10}],
        fleet=[{"branchOffice": "Milano", "provider": 7, "licensePlate": None}],
        service=[
            {"car": 1234, "status": "In progress", "type": 3},
            {"car": 1234.0, "status": "In progress"},
            {"car": 5678, "status": "Completed"},
        ],
    )
    dataset = make_repository(RecordingHandler(documents)).get_dataset()

    assert dataset.bookings[0].agent == "42"
    assert dataset.fleet[0].provider == "7"
    assert [event.car for event in dataset.service] == ["1234", "1234", "5678"]
    assert dataset.service[0].service_type == "3"
    assert count_in_service(dataset.service) == 1
