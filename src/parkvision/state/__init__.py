"""State management module."""

from .models import AnalyticsSnapshot, OccupancyChange, SpotStatus
from .occupancy_engine import OccupancyEngine

__all__ = ["AnalyticsSnapshot", "OccupancyChange", "SpotStatus", "OccupancyEngine"]
