"""Shared fixtures for ParkVision tests."""

import random

import pytest

from parkvision.catalog import Coordinates, Location, LocationCatalog
from parkvision.state import OccupancyEngine


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def catalog() -> LocationCatalog:
    return LocationCatalog(
        [
            Location(
                id="freedom-square",
                name="Freedom Square Parking",
                address="Freedom Square, Old Tbilisi",
                coordinates=Coordinates(lat=41.6938, lng=44.8015),
                spot_ids=("A1", "A2", "A3"),
                price_label="2 GEL/hour",
            ),
            Location(
                id="rustaveli",
                name="Rustaveli Avenue Parking",
                coordinates=Coordinates(lat=41.6941, lng=44.8003),
                spot_ids=("R1", "R2", "R3", "R4"),
                price_label="3 GEL/hour",
            ),
        ]
    )


@pytest.fixture
def engine(catalog, rng) -> OccupancyEngine:
    engine = OccupancyEngine(catalog, rng=rng)
    engine.select_location("freedom-square")
    return engine
