"""Data Store — the in-memory meteor dataset.

Populated once at startup from the external source. Readers see either
the empty initial list or a fully replaced one, never a partial write.
"""

import logging
from datetime import datetime, timezone

from meteor_api.errors import DatasetFetchError
from meteor_api.integrations.nasa_meteorites import MeteoriteDatasetClient
from meteor_api.models.meteor import MeteorRecord

logger = logging.getLogger(__name__)


class MeteorStore:
    """Holds the dataset. Not thread-safe — owned by a single event loop."""

    def __init__(self, client: MeteoriteDatasetClient):
        self._client = client
        self._records: list[MeteorRecord] = []
        self.loaded_at: datetime | None = None

    @property
    def records(self) -> list[MeteorRecord]:
        return self._records

    @property
    def loaded(self) -> bool:
        return self.loaded_at is not None

    def __len__(self) -> int:
        return len(self._records)

    def replace(self, records: list[MeteorRecord]) -> None:
        """Swap in a new dataset in a single assignment."""
        self._records = list(records)
        self.loaded_at = datetime.now(timezone.utc)

    async def load(self) -> bool:
        """Fetch the dataset and replace the contents. Returns True on success.

        Failures are logged and swallowed; the previous contents stay in place.
        """
        try:
            records = await self._client.fetch_all()
        except DatasetFetchError as e:
            logger.error("Dataset load failed — keeping %d records: %s", len(self._records), e)
            return False

        self.replace(records)
        logger.info("Meteor data fetched successfully | records=%d", len(records))
        return True
