from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import httpx

from rental_dashboard.core.config import get_settings
from rental_dashboard.core.errors import DataUnavailableError

logger = logging.getLogger(__name__)


class DashboardDataClient:
    """Fetches the dashboard JSON documents from a base URL or a directory.

    All documents are requested concurrently and the load succeeds only when
    every one of them arrives; there is no partial result.
    """

    def __init__(
        self,
        source: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        settings = get_settings()
        self.source = source or settings.data_source
        self.timeout_seconds = timeout_seconds or settings.fetch_timeout_seconds
        self._transport = transport

    @property
    def is_remote(self) -> bool:
        return self.source.startswith(("http://", "https://"))

    def load(self, names: Sequence[str]) -> Dict[str, Any]:
        return asyncio.run(self.fetch_all(names))

    async def fetch_all(self, names: Sequence[str]) -> Dict[str, Any]:
        logger.info("Loading %d dashboard documents from %s", len(names), self.source)
        if self.is_remote:
            async with httpx.AsyncClient(
                base_url=self.source,
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                results = await asyncio.gather(
                    *(self._fetch_remote(client, name) for name in names),
                    return_exceptions=True,
                )
        else:
            results = await asyncio.gather(
                *(self._read_local(name) for name in names),
                return_exceptions=True,
            )

        for name, result in zip(names, results):
            if isinstance(result, Exception):
                logger.error("Failed to load dashboard document %s: %s", name, result)
                raise DataUnavailableError() from result
        return dict(zip(names, results))

    async def _fetch_remote(self, client: httpx.AsyncClient, name: str) -> Any:
        response = await client.get(f"{name}.json")
        response.raise_for_status()
        return response.json()

    async def _read_local(self, name: str) -> Any:
        path = Path(self.source) / f"{name}.json"
        text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        return json.loads(text)
