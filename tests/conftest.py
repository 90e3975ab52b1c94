"""Shared test fixtures and configuration."""

import pytest

from meteor_api.config import Settings
from meteor_api.integrations.nasa_meteorites import MeteoriteDatasetClient
from meteor_api.models.meteor import MeteorRecord
from meteor_api.services.cache import ResponseCache
from meteor_api.services.context import MeteorService
from meteor_api.services.store import MeteorStore


class FakeTimer:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def timer():
    return FakeTimer()


@pytest.fixture
def test_settings():
    return Settings(cache_ttl_seconds=300, default_page=1, default_limit=10)


@pytest.fixture
def scenario_rows():
    """Three records: two from 2001, one heavy one from 1999."""
    return [
        {"name": "Aachen", "id": "1", "year": "2001-01-01", "mass": "100"},
        {"name": "Aarhus", "id": "2", "year": "2001-06-01", "mass": "5"},
        {"name": "Abee", "id": "6", "year": "1999-01-01", "mass": "500"},
    ]


@pytest.fixture
def scenario_records(scenario_rows):
    return [MeteorRecord.model_validate(row) for row in scenario_rows]


@pytest.fixture
def sample_nasa_rows():
    """Rows shaped like the live NASA Socrata export."""
    return [
        {
            "name": "Aachen",
            "id": "1",
            "nametype": "Valid",
            "recclass": "L5",
            "mass": "21",
            "fall": "Fell",
            "year": "1880-01-01T00:00:00.000",
            "reclat": "50.775000",
            "reclong": "6.083330",
            "geolocation": {"latitude": "50.775", "longitude": "6.08333"},
        },
        {
            "name": "Aarhus",
            "id": "2",
            "nametype": "Valid",
            "recclass": "H6",
            "mass": "720",
            "fall": "Fell",
            "year": "1951-01-01T00:00:00.000",
        },
        {
            "name": "Northwest Africa 7701",
            "id": "57150",
            "nametype": "Valid",
            "recclass": "CK6",
            "fall": "Found",
        },
    ]


@pytest.fixture
def make_service(test_settings, timer):
    """Build a MeteorService preloaded with the given records."""

    def _make(records=None) -> MeteorService:
        store = MeteorStore(MeteoriteDatasetClient(test_settings.dataset_url))
        if records is not None:
            store.replace(records)
        cache = ResponseCache(ttl_seconds=test_settings.cache_ttl_seconds, timer=timer)
        return MeteorService(store=store, cache=cache, settings=test_settings)

    return _make
