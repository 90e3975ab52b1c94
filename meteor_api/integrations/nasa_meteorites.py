"""NASA Open Data Portal — Meteorite Landings dataset.

Docs: https://data.nasa.gov/Space-Science/Meteorite-Landings/gh4g-9sfh
"""

import logging
import time
from typing import Any

import httpx

from meteor_api.errors import DatasetFetchError
from meteor_api.models.meteor import MeteorRecord

logger = logging.getLogger(__name__)


class MeteoriteDatasetClient:
    """Async client that downloads the whole dataset in one GET."""

    def __init__(self, url: str, timeout: float | None = None):
        self.url = url
        self.timeout = timeout

    async def fetch_all(self) -> list[MeteorRecord]:
        """Fetch every record. Raises DatasetFetchError on any failure."""
        start = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(self.url)
        except httpx.TimeoutException as e:
            elapsed_ms = int((time.monotonic() - start) * 1000)
            logger.warning("Meteorite dataset timeout | %dms | url=%s", elapsed_ms, self.url)
            raise DatasetFetchError(f"Timeout fetching dataset: {e}", self.url) from e
        except httpx.HTTPError as e:
            elapsed_ms = int((time.monotonic() - start) * 1000)
            logger.error("Meteorite dataset error | %dms | %s", elapsed_ms, str(e)[:200])
            raise DatasetFetchError(f"Transport error fetching dataset: {e}", self.url) from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        if resp.status_code != 200:
            logger.warning(
                "Meteorite dataset | status=%d | %dms | url=%s",
                resp.status_code, elapsed_ms, self.url,
            )
            raise DatasetFetchError(f"Unexpected status {resp.status_code}", self.url)

        try:
            payload = resp.json()
        except ValueError as e:
            raise DatasetFetchError("Dataset response is not valid JSON", self.url) from e

        records = self._parse_records(payload)
        logger.info("Meteorite dataset OK | records=%d | %dms", len(records), elapsed_ms)
        return records

    def _parse_records(self, payload: Any) -> list[MeteorRecord]:
        """Wrap each row; odd field values are kept and left to the filters."""
        if not isinstance(payload, list):
            raise DatasetFetchError(
                f"Expected a JSON array, got {type(payload).__name__}", self.url,
            )
        records = []
        for item in payload:
            if isinstance(item, dict):
                records.append(MeteorRecord.model_validate(item))
            else:
                records.append(MeteorRecord())
        return records
