"""Data models for parking spot occupancy."""

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Mapping

from pydantic import BaseModel, ConfigDict


class SpotStatus(str, Enum):
    """Status of a parking spot."""

    FREE = "free"
    OCCUPIED = "occupied"

    def flipped(self) -> "SpotStatus":
        return SpotStatus.OCCUPIED if self is SpotStatus.FREE else SpotStatus.FREE


class AnalyticsSnapshot(BaseModel):
    """Aggregate counts derived from an occupancy mapping."""

    model_config = ConfigDict(frozen=True)

    total: int
    occupied: int
    free: int


@dataclass(frozen=True)
class OccupancyChange:
    """
    Notification sent to engine subscribers after a mutation.

    `state` is a frozen copy of the mapping right after the mutation.
    """

    kind: Literal["reset", "toggle"]
    location_id: str
    spot_ids: tuple[str, ...]
    state: Mapping[str, SpotStatus]
