"""
Race Formation Service - FastAPI Backend

Provides REST API endpoints for:
- Registering drivers and looking them up
- Forming races from compatible drivers and simulating the winner
- Listing and looking up formed races
"""

import logging
import re
import time
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.schemas import (
    DriverSchema,
    RaceRequest,
    RaceSchema,
    HealthResponse,
    ErrorResponse,
)

from src.lib.settings import Settings, get_settings
from src.racing import (
    Conflict,
    EntityStore,
    InvalidInput,
    NotFound,
    OutcomeSimulator,
    RaceFormationOrchestrator,
    RacingError,
)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

_ID_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)


def parse_id(token: str) -> int:
    """Parse an id path segment, rejecting anything that is not an integer."""
    if not isinstance(token, str) or not _ID_PATTERN.fullmatch(token):
        raise InvalidInput("Invalid ID")
    return int(token)


def to_http_error(exc: RacingError) -> HTTPException:
    """Translate an engine failure into the matching HTTP status."""
    if isinstance(exc, NotFound):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, Conflict):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, InvalidInput):
        return HTTPException(status_code=400, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


def get_store(request: Request) -> EntityStore:
    return request.app.state.store


def get_orchestrator(request: Request) -> RaceFormationOrchestrator:
    return request.app.state.orchestrator


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application with a fresh, empty entity store.

    Args:
        settings: Service settings. Loaded from the environment if not provided.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Race Formation API",
        description="""
        In-memory driver registry that forms races between compatible drivers.

        Features:
        - Register drivers with a car type and horsepower
        - Form a race for a car type and simulate its winner
        - Look up drivers and formed races
        """,
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    store = EntityStore()
    app.state.settings = settings
    app.state.store = store
    app.state.orchestrator = RaceFormationOrchestrator(
        store, simulator=OutcomeSimulator(seed=settings.random_seed)
    )

    @app.middleware("http")
    async def _log_requests(request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("%s %s failed", request.method, request.url.path)
            return JSONResponse(status_code=500, content={"detail": "Internal server error"})
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %d %.1fms",
            request.method, request.url.path, response.status_code, elapsed_ms
        )
        return response

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    app.include_router(_build_router())
    return app


def _build_router() -> APIRouter:
    router = APIRouter()

    @router.get("/", response_model=HealthResponse)
    async def root(store: EntityStore = Depends(get_store)):
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            drivers=store.driver_count(),
            races=store.race_count(),
            version=VERSION
        )

    @router.get("/health", response_model=HealthResponse)
    async def health_check(store: EntityStore = Depends(get_store)):
        """Detailed health check."""
        return await root(store)

    @router.get("/drivers", response_model=List[DriverSchema])
    async def list_drivers(store: EntityStore = Depends(get_store)):
        """List every registered driver in creation order."""
        return [DriverSchema.from_model(d) for d in store.list_drivers()]

    @router.post(
        "/drivers",
        response_model=DriverSchema,
        responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}}
    )
    async def create_driver(payload: DriverSchema, store: EntityStore = Depends(get_store)):
        """
        Register a new driver.

        - **id**: non-zero, unique driver id
        - **carType** / **horsePower**: used to match drivers into races
        """
        try:
            driver = store.insert_driver(payload.to_model())
        except RacingError as e:
            logger.info("Driver %s rejected: %s", payload.id, e)
            raise to_http_error(e)

        logger.info("Driver %d registered (%s, %d hp)", driver.id, driver.car_type, driver.horse_power)
        return DriverSchema.from_model(driver)

    @router.get(
        "/drivers/{driver_id}",
        response_model=DriverSchema,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
    )
    async def get_driver(driver_id: str, store: EntityStore = Depends(get_store)):
        """Look up a single driver by id."""
        try:
            return DriverSchema.from_model(store.get_driver(parse_id(driver_id)))
        except RacingError as e:
            raise to_http_error(e)

    @router.get("/races", response_model=List[RaceSchema])
    async def list_races(store: EntityStore = Depends(get_store)):
        """List every formed race in id order."""
        return [RaceSchema.from_model(r) for r in store.list_races()]

    @router.post(
        "/races",
        response_model=RaceSchema,
        responses={400: {"model": ErrorResponse}}
    )
    async def create_race(
        payload: RaceRequest,
        orchestrator: RaceFormationOrchestrator = Depends(get_orchestrator)
    ):
        """
        Form a race for a car type and simulate its winner.

        - **label**: car type to match drivers on; other fields are ignored
        """
        try:
            race = orchestrator.form_race(payload.label)
        except RacingError as e:
            logger.info("Race for %r not formed: %s", payload.label, e)
            raise to_http_error(e)

        logger.info(
            "Race %d formed for %r with %d drivers, winner %s",
            race.id, race.label, len(race.driver_ids), race.winner
        )
        return RaceSchema.from_model(race)

    @router.get(
        "/races/{race_id}",
        response_model=RaceSchema,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
    )
    async def get_race(race_id: str, store: EntityStore = Depends(get_store)):
        """Look up a single race by id."""
        try:
            return RaceSchema.from_model(store.get_race(parse_id(race_id)))
        except RacingError as e:
            raise to_http_error(e)

    return router


app = create_app()


def run():
    """Start the service with uvicorn using the configured host and port."""
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
