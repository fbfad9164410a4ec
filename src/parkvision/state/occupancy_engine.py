"""Occupancy state engine for the currently selected location."""

import logging
import random
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from ..catalog import Location, LocationCatalog
from ..errors import InvalidSelectionError, UnknownSpotError
from .models import OccupancyChange, SpotStatus

logger = logging.getLogger(__name__)

Subscriber = Callable[[OccupancyChange], None]


class OccupancyEngine:
    """
    Owns the spot -> status mapping of the selected location.

    Every mutation goes through select_location, force_state or toggle_spot.
    Subscribers are notified synchronously once a mutation has completed.

    A selected spot that becomes occupied through a toggle is deselected
    automatically, so the selection always points at a free spot.
    """

    def __init__(
        self,
        catalog: LocationCatalog,
        rng: Optional[random.Random] = None,
        free_probability: float = 0.4,
    ):
        """
        Initialize the engine.

        Args:
            catalog: Catalog used to resolve location ids
            rng: Random source for initial statuses (unseeded if omitted)
            free_probability: Chance that a spot starts out free
        """
        if not 0.0 <= free_probability <= 1.0:
            raise ValueError(f"free_probability must be within [0, 1], got {free_probability}")

        self.catalog = catalog
        self.free_probability = free_probability
        self._rng = rng or random.Random()

        self._location: Optional[Location] = None
        self._spots: dict[str, SpotStatus] = {}
        self._view = MappingProxyType(self._spots)
        self._selected_spot: Optional[str] = None
        self._subscribers: list[Subscriber] = []

    @property
    def location(self) -> Optional[Location]:
        """Currently selected location, None before the first selection."""
        return self._location

    @property
    def location_id(self) -> Optional[str]:
        return self._location.id if self._location else None

    @property
    def selected_spot(self) -> Optional[str]:
        return self._selected_spot

    def current_state(self) -> Mapping[str, SpotStatus]:
        """Get a live read-only view of the occupancy mapping."""
        return self._view

    def free_spots(self) -> list[str]:
        """Get free spot ids in location order."""
        return [s for s, status in self._spots.items() if status == SpotStatus.FREE]

    def select_location(self, location_id: str) -> Location:
        """
        Switch to a location and draw a fresh random occupancy mapping.

        Each spot is drawn independently, so selecting the same location
        again re-rolls its state.

        Raises:
            LocationNotFoundError: If the location is not in the catalog
        """
        location = self.catalog.get(location_id)

        spots = {
            spot_id: (
                SpotStatus.FREE
                if self._rng.random() < self.free_probability
                else SpotStatus.OCCUPIED
            )
            for spot_id in location.spot_ids
        }
        self._replace(location, spots)

        logger.info(
            f"Selected location '{location.name}': "
            f"{len(self.free_spots())}/{len(spots)} spots free"
        )
        return location

    def force_state(self, statuses: Mapping[str, SpotStatus]) -> None:
        """
        Replace the statuses of the current location with explicit values.

        Raises:
            UnknownSpotError: If the keys differ from the location's spot ids
        """
        if self._location is None:
            raise UnknownSpotError(next(iter(statuses), ""))

        expected = set(self._location.spot_ids)
        for spot_id in statuses:
            if spot_id not in expected:
                raise UnknownSpotError(spot_id)
        missing = expected.difference(statuses)
        if missing:
            raise UnknownSpotError(sorted(missing)[0])

        spots = {s: SpotStatus(statuses[s]) for s in self._location.spot_ids}
        self._replace(self._location, spots)
        logger.debug(f"Forced state for '{self._location.id}': {spots}")

    def toggle_spot(self, spot_id: str) -> SpotStatus:
        """
        Flip a single spot between free and occupied.

        Returns:
            The spot's new status

        Raises:
            UnknownSpotError: If the spot is not in the current mapping
        """
        if spot_id not in self._spots:
            raise UnknownSpotError(spot_id)

        old_status = self._spots[spot_id]
        new_status = old_status.flipped()
        self._spots[spot_id] = new_status

        if self._selected_spot == spot_id and new_status == SpotStatus.OCCUPIED:
            logger.info(f"Selected spot {spot_id} became occupied, clearing selection")
            self._selected_spot = None

        logger.info(f"Spot {spot_id} changed: {old_status.value} -> {new_status.value}")
        self._notify(OccupancyChange("toggle", self._location.id, (spot_id,), self._snapshot()))
        return new_status

    def select_spot(self, spot_id: str) -> None:
        """
        Highlight a free spot as the navigation target.

        Raises:
            UnknownSpotError: If the spot is not in the current mapping
            InvalidSelectionError: If the spot is not free
        """
        status = self._spots.get(spot_id)
        if status is None:
            raise UnknownSpotError(spot_id)
        if status != SpotStatus.FREE:
            raise InvalidSelectionError(spot_id, status.value)

        self._selected_spot = spot_id
        logger.debug(f"Selected spot {spot_id}")

    def clear_selection(self) -> None:
        self._selected_spot = None

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback invoked after every mutation.

        Returns:
            Function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _replace(self, location: Location, spots: dict[str, SpotStatus]) -> None:
        # Mutate in place so the read-only view handed out stays live
        self._location = location
        self._spots.clear()
        self._spots.update(spots)
        self._selected_spot = None
        self._notify(OccupancyChange("reset", location.id, location.spot_ids, self._snapshot()))

    def _snapshot(self) -> Mapping[str, SpotStatus]:
        return MappingProxyType(dict(self._spots))

    def _notify(self, change: OccupancyChange) -> None:
        for callback in list(self._subscribers):
            try:
                callback(change)
            except Exception:
                logger.exception(f"Occupancy subscriber {callback!r} failed")
