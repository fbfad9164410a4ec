"""Prometheus metrics for the occupancy simulation."""

from prometheus_client import CollectorRegistry, Counter, Gauge, generate_latest

from .analytics import occupancy_rate_percent, summarize
from .state.models import OccupancyChange, SpotStatus

# Create a custom registry to avoid conflicts with default metrics
REGISTRY = CollectorRegistry()

# Spot state changes counter
SPOT_STATE_CHANGES = Counter(
    "parkvision_spot_state_changes_total",
    "Total number of parking spot state changes",
    ["location_id", "change_type"],
    registry=REGISTRY,
)

# Location selections (including re-rolls of the same location)
LOCATION_SELECTIONS = Counter(
    "parkvision_location_selections_total",
    "Number of times a location's occupancy was (re)initialized",
    ["location_id"],
    registry=REGISTRY,
)

# Current spot status gauge
SPOT_STATUS = Gauge(
    "parkvision_spot_occupied",
    "Current status of parking spot (1=occupied, 0=free)",
    ["location_id", "spot_id"],
    registry=REGISTRY,
)

TOTAL_SPOTS = Gauge(
    "parkvision_spots_total",
    "Total number of parking spots at the selected location",
    registry=REGISTRY,
)

FREE_SPOTS = Gauge(
    "parkvision_spots_free",
    "Number of free parking spots at the selected location",
    registry=REGISTRY,
)

OCCUPIED_SPOTS = Gauge(
    "parkvision_spots_occupied",
    "Number of occupied parking spots at the selected location",
    registry=REGISTRY,
)

OCCUPANCY_RATE = Gauge(
    "parkvision_occupancy_rate_percent",
    "Occupied share of the selected location in percent",
    registry=REGISTRY,
)

SIMULATION_TICKS = Counter(
    "parkvision_simulation_ticks_total",
    "Total number of simulated occupancy changes",
    registry=REGISTRY,
)

SIMULATION_RUNNING = Gauge(
    "parkvision_simulation_running",
    "Whether the simulated live feed is running (1=running)",
    registry=REGISTRY,
)


def record_spot_change(location_id: str, became_occupied: bool) -> None:
    """Record a spot state change."""
    change_type = "became_occupied" if became_occupied else "became_free"
    SPOT_STATE_CHANGES.labels(location_id=location_id, change_type=change_type).inc()


def record_location_selection(location_id: str) -> None:
    LOCATION_SELECTIONS.labels(location_id=location_id).inc()


def update_spot_status(location_id: str, spot_id: str, is_occupied: bool) -> None:
    """Update current spot status gauge."""
    SPOT_STATUS.labels(location_id=location_id, spot_id=spot_id).set(1 if is_occupied else 0)


def update_spot_counts(total: int, free: int, occupied: int, rate: float) -> None:
    """Update overall spot count gauges."""
    TOTAL_SPOTS.set(total)
    FREE_SPOTS.set(free)
    OCCUPIED_SPOTS.set(occupied)
    OCCUPANCY_RATE.set(rate)


def increment_simulation_ticks() -> None:
    SIMULATION_TICKS.inc()


def set_simulation_running(running: bool) -> None:
    SIMULATION_RUNNING.set(1 if running else 0)


def observe_occupancy_change(change: OccupancyChange) -> None:
    """Engine subscriber that keeps the gauges in sync with the mapping."""
    if change.kind == "reset":
        # Spot gauges of the previous location are stale after a switch
        SPOT_STATUS.clear()
        record_location_selection(change.location_id)
    else:
        for spot_id in change.spot_ids:
            record_spot_change(
                location_id=change.location_id,
                became_occupied=(change.state[spot_id] == SpotStatus.OCCUPIED),
            )

    for spot_id in change.spot_ids:
        update_spot_status(
            location_id=change.location_id,
            spot_id=spot_id,
            is_occupied=(change.state[spot_id] == SpotStatus.OCCUPIED),
        )

    snapshot = summarize(change.state)
    update_spot_counts(
        total=snapshot.total,
        free=snapshot.free,
        occupied=snapshot.occupied,
        rate=occupancy_rate_percent(snapshot),
    )


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest(REGISTRY)
