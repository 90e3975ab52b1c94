"""End-to-end API tests — drives the FastAPI app with an in-memory dataset."""

import pytest
from httpx import ASGITransport, AsyncClient

from meteor_api.main import create_app, lifespan


@pytest.fixture
def service(make_service, scenario_records):
    return make_service(scenario_records)


@pytest.fixture
async def client(service, test_settings):
    app = create_app(settings=test_settings, service=service)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def empty_client(make_service, test_settings):
    app = create_app(settings=test_settings, service=make_service())
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class TestHealthEndpoint:
    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["records"] == 3
        assert data["loaded"] is True

    @pytest.mark.asyncio
    async def test_health_before_load(self, empty_client):
        data = (await empty_client.get("/health")).json()
        assert data["records"] == 0
        assert data["loaded"] is False


class TestMeteorsEndpoint:
    @pytest.mark.asyncio
    async def test_filter_by_year(self, client, scenario_rows):
        resp = await client.get("/meteors", params={"year": "2001"})
        assert resp.status_code == 200
        assert resp.json() == {"data": scenario_rows[:2], "total": 2}

    @pytest.mark.asyncio
    async def test_filter_by_mass(self, client, scenario_rows):
        resp = await client.get("/meteors", params={"mass": "50"})
        assert resp.json() == {"data": [scenario_rows[0], scenario_rows[2]], "total": 2}

    @pytest.mark.asyncio
    async def test_year_with_limit(self, client, scenario_rows):
        resp = await client.get("/meteors", params={"year": "2001", "limit": "1"})
        assert resp.json() == {"data": [scenario_rows[0]], "total": 2}

    @pytest.mark.asyncio
    async def test_no_params_returns_first_page(self, client, scenario_rows):
        resp = await client.get("/meteors")
        assert resp.json() == {"data": scenario_rows, "total": 3}

    @pytest.mark.asyncio
    async def test_second_page(self, client, scenario_rows):
        resp = await client.get("/meteors", params={"page": "2", "limit": "2"})
        assert resp.json() == {"data": [scenario_rows[2]], "total": 3}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params,total", [
        ({"year": "abc"}, 0),
        ({"mass": "heavy"}, 0),
        ({"page": "abc"}, 3),
        ({"limit": "-5"}, 3),
    ])
    async def test_malformed_input_never_errors(self, client, params, total):
        resp = await client.get("/meteors", params=params)
        assert resp.status_code == 200
        data = resp.json()
        assert data["data"] == []
        assert data["total"] == total

    @pytest.mark.asyncio
    async def test_empty_store(self, empty_client):
        resp = await empty_client.get("/meteors", params={"year": "2001", "mass": "1"})
        assert resp.status_code == 200
        assert resp.json() == {"data": [], "total": 0}


class TestMeteorsCaching:
    @pytest.mark.asyncio
    async def test_repeat_within_ttl_is_cached(self, client, service):
        first = await client.get("/meteors", params={"year": "2001"})
        second = await client.get("/meteors", params={"year": "2001"})
        assert first.content == second.content
        assert service.computations == 1
        assert service.cache.hits == 1

    @pytest.mark.asyncio
    async def test_recomputes_after_ttl(self, client, service, timer):
        await client.get("/meteors", params={"year": "2001"})
        timer.advance(300)
        await client.get("/meteors", params={"year": "2001"})
        assert service.computations == 2

    @pytest.mark.asyncio
    async def test_cached_payload_survives_store_replacement(self, client, service):
        first = await client.get("/meteors", params={"year": "2001"})
        service.store.replace([])
        second = await client.get("/meteors", params={"year": "2001"})
        assert second.json() == first.json()

    @pytest.mark.asyncio
    async def test_distinct_pages_distinct_entries(self, client, service):
        await client.get("/meteors", params={"page": "1", "limit": "1"})
        await client.get("/meteors", params={"page": "2", "limit": "1"})
        assert service.computations == 2

    @pytest.mark.asyncio
    async def test_param_order_is_part_of_key(self, client, service):
        await client.get("/meteors?year=2001&mass=1")
        await client.get("/meteors?mass=1&year=2001")
        assert service.computations == 2


class TestYearsEndpoint:
    @pytest.mark.asyncio
    async def test_years(self, client):
        resp = await client.get("/years")
        assert resp.status_code == 200
        assert resp.json() == {"years": ["1999", "2001"]}

    @pytest.mark.asyncio
    async def test_years_not_cached(self, client, service):
        await client.get("/years")
        service.store.replace([])
        resp = await client.get("/years")
        assert resp.json() == {"years": []}
        assert service.cache.stats()["entries"] == 0

    @pytest.mark.asyncio
    async def test_years_empty_store(self, empty_client):
        resp = await empty_client.get("/years")
        assert resp.json() == {"years": []}


class TestLifespan:
    @pytest.mark.asyncio
    async def test_startup_loads_dataset(self, httpx_mock, sample_nasa_rows, test_settings):
        httpx_mock.add_response(url=test_settings.dataset_url, json=sample_nasa_rows)
        app = create_app(settings=test_settings)
        async with lifespan(app):
            assert await app.state.load_task is True
            assert len(app.state.meteors.store) == 3

    @pytest.mark.asyncio
    async def test_startup_fetch_failure_is_silent(self, httpx_mock, test_settings):
        httpx_mock.add_response(url=test_settings.dataset_url, status_code=503)
        app = create_app(settings=test_settings)
        async with lifespan(app):
            assert await app.state.load_task is False
            assert app.state.meteors.store.records == []
