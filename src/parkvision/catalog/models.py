"""Data models for parking locations."""

from pydantic import BaseModel, ConfigDict, field_validator


class Coordinates(BaseModel):
    """Latitude/longitude pair of a location."""

    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class Location(BaseModel):
    """A named parking facility with a fixed set of spots."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    localized_name: str = ""
    address: str = ""
    coordinates: Coordinates
    spot_ids: tuple[str, ...]
    price_label: str = ""

    @field_validator("spot_ids")
    @classmethod
    def check_unique_spots(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Reject duplicate spot identifiers."""
        if len(set(v)) != len(v):
            duplicates = sorted({s for s in v if v.count(s) > 1})
            raise ValueError(f"Duplicate spot ids: {duplicates}")
        return v
