"""Meteor API — FastAPI application entry point.

Serves the NASA meteorite landings dataset from memory:
  GET /meteors  filtered, paginated listing (cached for a few minutes)
  GET /years    distinct landing years
  GET /health   liveness plus dataset/cache counters
"""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from meteor_api.config import Settings, settings as default_settings
from meteor_api.schemas import HealthResponse, YearsResponse
from meteor_api.services.context import MeteorService
from meteor_api.services.query import MeteorQuery

logging.basicConfig(
    level=default_settings.log_level,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)
logger = logging.getLogger("meteor_api")


# ═══════════════ LIFESPAN ═══════════════

@asynccontextmanager
async def lifespan(app: FastAPI):
    service: MeteorService = app.state.meteors
    logger.info("Meteor API starting | dataset=%s", service.settings.dataset_url)

    if app.state.load_on_startup:
        start_dataset_load(app)

    yield

    task: asyncio.Task | None = getattr(app.state, "load_task", None)
    if task is not None and not task.done():
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
    logger.info("Meteor API shutting down")


def start_dataset_load(app: FastAPI) -> asyncio.Task:
    """Load in the background: requests arriving before it finishes see an empty store."""
    service: MeteorService = app.state.meteors
    app.state.load_task = asyncio.create_task(service.store.load())
    return app.state.load_task


def get_service(request: Request) -> MeteorService:
    """FastAPI dependency — the service owned by this app instance."""
    return request.app.state.meteors


# ═══════════════ APP ═══════════════

def create_app(
    settings: Settings | None = None,
    service: MeteorService | None = None,
    load_on_startup: bool = True,
) -> FastAPI:
    """Build the app. With ``load_on_startup=False`` the caller starts the dataset load itself."""
    settings = settings or default_settings
    service = service or MeteorService.from_settings(settings)

    app = FastAPI(
        title="Meteor API",
        description="Filtered, paginated access to NASA meteorite landings",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.meteors = service
    app.state.load_on_startup = load_on_startup

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    async def health(svc: MeteorService = Depends(get_service)):
        return HealthResponse(
            records=len(svc.store),
            loaded=svc.store.loaded,
            cache_entries=len(svc.cache),
        )

    @app.get("/meteors")
    async def list_meteors(
        request: Request,
        year: str | None = Query(None),
        mass: str | None = Query(None),
        page: str | None = Query(None),
        limit: str | None = Query(None),
        svc: MeteorService = Depends(get_service),
    ):
        """Listing endpoint — malformed parameters degrade into empty pages, never errors."""
        query = MeteorQuery(year=year, mass=mass, page=page, limit=limit)
        result = svc.list_meteors(request.query_params.multi_items(), query)
        return JSONResponse(content=result.to_json())

    @app.get("/years", response_model=YearsResponse)
    async def years(svc: MeteorService = Depends(get_service)):
        return YearsResponse(years=svc.years())

    return app


app = create_app()
