"""FastAPI route definitions."""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from ..analytics import distribution, occupancy_rate_percent, summarize
from ..catalog.models import Location
from ..errors import InvalidSelectionError, LocationNotFoundError, UnknownSpotError
from ..metrics import get_metrics
from ..navigation import directions_url
from .schemas import (
    AnalyticsResponse,
    HealthResponse,
    LocationResponse,
    LocationsResponse,
    NavigationResponse,
    SimulationResponse,
    SpotResponse,
    StatusResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_app_state(request: Request):
    """Resolve the application state attached to the running app."""
    state = getattr(request.app.state, "parkvision", None)
    if state is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return state


def _location_response(location: Location) -> LocationResponse:
    return LocationResponse(
        id=location.id,
        name=location.name,
        localized_name=location.localized_name,
        address=location.address,
        coordinates=location.coordinates,
        spot_ids=list(location.spot_ids),
        price_label=location.price_label,
        directions_url=directions_url(location.coordinates),
    )


def _analytics_response(engine) -> AnalyticsResponse:
    snapshot = summarize(engine.current_state())
    return AnalyticsResponse(
        total=snapshot.total,
        occupied=snapshot.occupied,
        free=snapshot.free,
        occupancy_rate_percent=occupancy_rate_percent(snapshot),
        distribution=distribution(snapshot),
    )


def _simulation_response(driver) -> SimulationResponse:
    return SimulationResponse(
        running=driver.is_running(),
        interval_seconds=driver.interval_seconds,
        tick_count=driver.tick_count,
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(app_state=Depends(get_app_state)) -> HealthResponse:
    """
    Health check endpoint.

    Returns basic health information about the service.
    """
    uptime = (datetime.now() - app_state.started_at).total_seconds()

    return HealthResponse(
        status="healthy",
        location_id=app_state.engine.location_id,
        simulation_running=app_state.driver.is_running(),
        uptime_seconds=uptime,
    )


@router.get("/locations", response_model=LocationsResponse)
async def list_locations(app_state=Depends(get_app_state)) -> LocationsResponse:
    """List all locations in the catalog."""
    return LocationsResponse(
        locations=[_location_response(loc) for loc in app_state.catalog.list()],
        selected_location_id=app_state.engine.location_id,
    )


@router.get("/locations/{location_id}", response_model=LocationResponse)
async def get_location(location_id: str, app_state=Depends(get_app_state)) -> LocationResponse:
    try:
        location = app_state.catalog.get(location_id)
    except LocationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return _location_response(location)


@router.post("/locations/{location_id}/select", response_model=StatusResponse)
async def select_location(location_id: str, app_state=Depends(get_app_state)) -> StatusResponse:
    """
    Switch to a location, drawing a fresh random occupancy mapping.

    Selecting the current location again re-rolls its state.
    """
    try:
        app_state.engine.select_location(location_id)
    except LocationNotFoundError as e:
        logger.warning(f"Rejected location selection: {e}")
        raise HTTPException(status_code=404, detail=str(e))

    return await get_status(app_state)


@router.get("/status", response_model=StatusResponse)
async def get_status(app_state=Depends(get_app_state)) -> StatusResponse:
    """
    Get overall parking status.

    Returns the selected location, every spot with its status, the current
    selection and the derived availability counts.
    """
    engine = app_state.engine
    location = engine.location

    spots = [
        SpotResponse(id=spot_id, status=status, selected=(spot_id == engine.selected_spot))
        for spot_id, status in engine.current_state().items()
    ]

    return StatusResponse(
        location=_location_response(location) if location else None,
        spots=spots,
        free_spots=engine.free_spots(),
        selected_spot=engine.selected_spot,
        analytics=_analytics_response(engine),
        simulation_running=app_state.driver.is_running(),
    )


@router.get("/spots/{spot_id}", response_model=SpotResponse)
async def get_spot(spot_id: str, app_state=Depends(get_app_state)) -> SpotResponse:
    """
    Get status for a specific parking spot.

    Args:
        spot_id: The ID of the parking spot to query
    """
    engine = app_state.engine
    status = engine.current_state().get(spot_id)
    if status is None:
        raise HTTPException(status_code=404, detail=str(UnknownSpotError(spot_id)))

    return SpotResponse(id=spot_id, status=status, selected=(spot_id == engine.selected_spot))


@router.post("/spots/{spot_id}/toggle", response_model=SpotResponse)
async def toggle_spot(spot_id: str, app_state=Depends(get_app_state)) -> SpotResponse:
    """Flip a spot between free and occupied."""
    engine = app_state.engine
    try:
        status = engine.toggle_spot(spot_id)
    except UnknownSpotError as e:
        logger.warning(f"Rejected toggle: {e}")
        raise HTTPException(status_code=404, detail=str(e))

    return SpotResponse(id=spot_id, status=status, selected=(spot_id == engine.selected_spot))


@router.put("/selection/{spot_id}", response_model=StatusResponse)
async def select_spot(spot_id: str, app_state=Depends(get_app_state)) -> StatusResponse:
    """Highlight a free spot as the navigation target."""
    try:
        app_state.engine.select_spot(spot_id)
    except UnknownSpotError as e:
        logger.warning(f"Rejected selection: {e}")
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidSelectionError as e:
        logger.warning(f"Rejected selection: {e}")
        raise HTTPException(status_code=409, detail=str(e))

    return await get_status(app_state)


@router.delete("/selection", response_model=StatusResponse)
async def clear_selection(app_state=Depends(get_app_state)) -> StatusResponse:
    app_state.engine.clear_selection()
    return await get_status(app_state)


@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(app_state=Depends(get_app_state)) -> AnalyticsResponse:
    """Get availability counts, occupancy rate and chart distribution."""
    return _analytics_response(app_state.engine)


@router.get("/navigation", response_model=NavigationResponse)
async def get_navigation(app_state=Depends(get_app_state)) -> NavigationResponse:
    """
    Get a driving-directions link to the selected location.

    The link is only built here; opening it is left to the client.
    """
    engine = app_state.engine
    location = engine.location
    if location is None:
        raise HTTPException(status_code=404, detail="No location selected")

    return NavigationResponse(
        location_id=location.id,
        spot_id=engine.selected_spot,
        url=directions_url(location.coordinates, engine.selected_spot),
    )


@router.get("/simulation", response_model=SimulationResponse)
async def get_simulation(app_state=Depends(get_app_state)) -> SimulationResponse:
    return _simulation_response(app_state.driver)


@router.post("/simulation/start", response_model=SimulationResponse)
async def start_simulation(app_state=Depends(get_app_state)) -> SimulationResponse:
    """Start the simulated live feed. Does nothing if already running."""
    app_state.driver.start()
    return _simulation_response(app_state.driver)


@router.post("/simulation/stop", response_model=SimulationResponse)
async def stop_simulation(app_state=Depends(get_app_state)) -> SimulationResponse:
    """Stop the simulated live feed. Does nothing if not running."""
    app_state.driver.stop()
    return _simulation_response(app_state.driver)


@router.get("/metrics")
async def prometheus_metrics() -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format including:
    - parkvision_spot_occupied: Gauge of current spot status (1=occupied, 0=free)
    - parkvision_spots_total / _free / _occupied: Counts for the selected location
    - parkvision_occupancy_rate_percent: Occupied share of the selected location
    - parkvision_spot_state_changes_total: Counter of toggles by location and direction
    - parkvision_location_selections_total: Counter of (re)initializations
    - parkvision_simulation_ticks_total: Simulated changes injected
    - parkvision_simulation_running: Whether the live feed is running
    """
    return Response(
        content=get_metrics(),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
