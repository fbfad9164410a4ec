"""Aggregate availability statistics derived from an occupancy mapping."""

from typing import Mapping

from .state.models import AnalyticsSnapshot, SpotStatus


def summarize(state: Mapping[str, SpotStatus]) -> AnalyticsSnapshot:
    """Count total, occupied and free spots."""
    total = len(state)
    occupied = sum(1 for status in state.values() if status == SpotStatus.OCCUPIED)
    return AnalyticsSnapshot(total=total, occupied=occupied, free=total - occupied)


def occupancy_rate_percent(snapshot: AnalyticsSnapshot) -> float:
    """
    Get the occupied share as a percentage rounded to one decimal.

    Returns 0.0 for a location without spots.
    """
    if snapshot.total == 0:
        return 0.0
    return round(snapshot.occupied / snapshot.total * 100, 1)


def distribution(snapshot: AnalyticsSnapshot) -> dict[SpotStatus, int]:
    """Two-category breakdown used by occupancy charts."""
    return {
        SpotStatus.OCCUPIED: snapshot.occupied,
        SpotStatus.FREE: snapshot.free,
    }
