"""API request and response schemas."""

from typing import Optional

from pydantic import BaseModel

from ..catalog.models import Coordinates
from ..state.models import SpotStatus


class LocationResponse(BaseModel):
    """Response schema for a catalog location."""

    id: str
    name: str
    localized_name: str
    address: str
    coordinates: Coordinates
    spot_ids: list[str]
    price_label: str
    directions_url: str


class LocationsResponse(BaseModel):
    locations: list[LocationResponse]
    selected_location_id: Optional[str] = None


class SpotResponse(BaseModel):
    """Response schema for a single parking spot."""

    id: str
    status: SpotStatus
    selected: bool = False


class AnalyticsResponse(BaseModel):
    """Aggregate counts for the selected location."""

    total: int
    occupied: int
    free: int
    occupancy_rate_percent: float
    distribution: dict[SpotStatus, int]


class StatusResponse(BaseModel):
    """Response schema for overall parking status."""

    location: Optional[LocationResponse] = None
    spots: list[SpotResponse]
    free_spots: list[str]
    selected_spot: Optional[str] = None
    analytics: AnalyticsResponse
    simulation_running: bool


class SimulationResponse(BaseModel):
    """State of the simulated live feed."""

    running: bool
    interval_seconds: float
    tick_count: int


class NavigationResponse(BaseModel):
    location_id: str
    spot_id: Optional[str] = None
    url: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    location_id: Optional[str] = None
    simulation_running: bool
    uptime_seconds: float
