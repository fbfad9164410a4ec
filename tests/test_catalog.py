import pytest
from pydantic import ValidationError

from parkvision.catalog import Coordinates, Location, LocationCatalog, default_catalog
from parkvision.errors import LocationNotFoundError


def _location(location_id: str, spot_ids: tuple[str, ...] = ("S1",)) -> Location:
    return Location(
        id=location_id,
        name=location_id.title(),
        coordinates=Coordinates(lat=0.0, lng=0.0),
        spot_ids=spot_ids,
    )


def test_get_returns_location(catalog):
    location = catalog.get("rustaveli")
    assert location.name == "Rustaveli Avenue Parking"
    assert location.spot_ids == ("R1", "R2", "R3", "R4")


def test_get_unknown_location_raises(catalog):
    with pytest.raises(LocationNotFoundError) as exc_info:
        catalog.get("nowhere")
    assert exc_info.value.location_id == "nowhere"


def test_list_preserves_order(catalog):
    assert [loc.id for loc in catalog.list()] == ["freedom-square", "rustaveli"]
    assert catalog.default_id == "freedom-square"
    assert "rustaveli" in catalog
    assert len(catalog) == 2


def test_duplicate_location_ids_rejected():
    with pytest.raises(ValueError, match="Duplicate location id"):
        LocationCatalog([_location("a"), _location("a")])


def test_duplicate_spot_ids_rejected():
    with pytest.raises(ValidationError, match="Duplicate spot ids"):
        _location("a", ("S1", "S2", "S1"))


def test_location_is_immutable(catalog):
    with pytest.raises(ValidationError):
        catalog.get("rustaveli").name = "Renamed"


def test_empty_catalog_has_no_default():
    assert LocationCatalog([]).default_id is None


def test_default_catalog_contents():
    catalog = default_catalog()
    assert [loc.id for loc in catalog] == [
        "freedom-square",
        "rustaveli",
        "vake-park",
        "tbilisi-mall",
    ]
    assert len(catalog.get("freedom-square").spot_ids) == 12
    assert catalog.get("vake-park").spot_ids[-1] == "V10"
    assert catalog.get("tbilisi-mall").price_label == "Free (first 2h)"
