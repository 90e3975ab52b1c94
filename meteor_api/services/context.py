"""MeteorService — the state owned by one running application.

Created empty at process start, filled once by the dataset load, then
read by every request handler. Handlers receive it through a FastAPI
dependency instead of reaching for module globals.
"""

import logging
from typing import Iterable

from meteor_api.config import Settings
from meteor_api.integrations.nasa_meteorites import MeteoriteDatasetClient
from meteor_api.schemas import MeteorPage
from meteor_api.services.cache import ResponseCache
from meteor_api.services.query import MeteorQuery, distinct_years, run_query
from meteor_api.services.store import MeteorStore

logger = logging.getLogger(__name__)


class MeteorService:
    """Bundles the data store and the response cache."""

    def __init__(self, store: MeteorStore, cache: ResponseCache, settings: Settings):
        self.store = store
        self.cache = cache
        self.settings = settings
        self.computations = 0

    @classmethod
    def from_settings(cls, settings: Settings) -> "MeteorService":
        client = MeteoriteDatasetClient(settings.dataset_url, timeout=settings.fetch_timeout_seconds)
        return cls(
            store=MeteorStore(client),
            cache=ResponseCache(ttl_seconds=settings.cache_ttl_seconds),
            settings=settings,
        )

    def list_meteors(self, params: Iterable[tuple[str, str]], query: MeteorQuery) -> MeteorPage:
        """Cached listing: serve a fresh entry or run the pipeline and store it."""
        key = self.cache.make_key(params)
        cached = self.cache.lookup(key)
        if cached is not None:
            return cached

        page = run_query(
            self.store.records,
            query,
            default_page=self.settings.default_page,
            default_limit=self.settings.default_limit,
        )
        self.computations += 1
        self.cache.store(key, page)
        return page

    def years(self) -> list[str]:
        return distinct_years(self.store.records)
