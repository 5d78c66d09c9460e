from __future__ import annotations

import logging
from threading import Lock
from typing import Optional

from pydantic import ValidationError

from rental_dashboard.core.data_source import DashboardDataClient
from rental_dashboard.core.errors import DataUnavailableError
from rental_dashboard.models.rental import DashboardDataset

logger = logging.getLogger(__name__)

DATASET_DOCUMENTS = ("bookings", "occupation", "fleet", "service", "incidents", "manifest")


class DashboardRepository:
    def __init__(self, client: Optional[DashboardDataClient] = None) -> None:
        self.client = client or DashboardDataClient()
        self._dataset: Optional[DashboardDataset] = None
        self._lock = Lock()

    def get_dataset(self) -> DashboardDataset:
        # A failed load is not remembered; the next caller retries it.
        if self._dataset is not None:
            return self._dataset
        with self._lock:
            if self._dataset is None:
                self._dataset = self._load()
        return self._dataset

    def _load(self) -> DashboardDataset:
        payloads = self.client.load(DATASET_DOCUMENTS)
        try:
            dataset = DashboardDataset.model_validate(payloads)
        except ValidationError as exc:
            logger.error("Dashboard data failed validation: %s", exc)
            raise DataUnavailableError() from exc
        logger.info(
            "Loaded dashboard data: %d bookings, %d fleet units, %d incidents",
            len(dataset.bookings),
            len(dataset.fleet),
            len(dataset.incidents),
        )
        return dataset
