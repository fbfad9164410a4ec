"""Read-only catalog of parking locations."""

import logging
from typing import Iterable, Iterator

from ..errors import LocationNotFoundError
from .models import Coordinates, Location

logger = logging.getLogger(__name__)


class LocationCatalog:
    """
    Fixed, ordered collection of locations keyed by id.

    The catalog is built once at startup and never mutated afterwards.
    """

    def __init__(self, locations: Iterable[Location]):
        self._locations: dict[str, Location] = {}
        for location in locations:
            if location.id in self._locations:
                raise ValueError(f"Duplicate location id: {location.id}")
            self._locations[location.id] = location

        logger.info(f"Loaded catalog with {len(self._locations)} locations")

    def get(self, location_id: str) -> Location:
        """
        Look up a location by id.

        Raises:
            LocationNotFoundError: If the id is not in the catalog
        """
        try:
            return self._locations[location_id]
        except KeyError:
            raise LocationNotFoundError(location_id) from None

    def list(self) -> list[Location]:
        """Get all locations in catalog order."""
        return list(self._locations.values())

    @property
    def default_id(self) -> str | None:
        """Id of the first location, used as the startup selection."""
        return next(iter(self._locations), None)

    def __contains__(self, location_id: object) -> bool:
        return location_id in self._locations

    def __iter__(self) -> Iterator[Location]:
        return iter(self._locations.values())

    def __len__(self) -> int:
        return len(self._locations)


def default_catalog() -> LocationCatalog:
    """Build the built-in catalog of Tbilisi parking locations."""
    return LocationCatalog(
        [
            Location(
                id="freedom-square",
                name="Freedom Square Parking",
                localized_name="თავისუფლების მოედანი",
                address="Freedom Square, Old Tbilisi",
                coordinates=Coordinates(lat=41.6938, lng=44.8015),
                spot_ids=("A1", "A2", "A3", "A4", "A5", "A6", "B1", "B2", "B3", "B4", "B5", "B6"),
                price_label="2 GEL/hour",
            ),
            Location(
                id="rustaveli",
                name="Rustaveli Avenue Parking",
                localized_name="რუსთაველის გამზირი",
                address="Rustaveli Ave, near Parliament",
                coordinates=Coordinates(lat=41.6941, lng=44.8003),
                spot_ids=tuple(f"R{i}" for i in range(1, 9)),
                price_label="3 GEL/hour",
            ),
            Location(
                id="vake-park",
                name="Vake Park Parking",
                localized_name="ვაკის პარკი",
                address="Chavchavadze Ave, Vake District",
                coordinates=Coordinates(lat=41.7086, lng=44.7531),
                spot_ids=tuple(f"V{i}" for i in range(1, 11)),
                price_label="1.5 GEL/hour",
            ),
            Location(
                id="tbilisi-mall",
                name="Tbilisi Mall Parking",
                localized_name="თბილისი მოლი",
                address="Tbilisi Mall, Saburtalo",
                coordinates=Coordinates(lat=41.7235, lng=44.7518),
                spot_ids=tuple(f"T{i}" for i in range(1, 13)),
                price_label="Free (first 2h)",
            ),
        ]
    )
