"""Location catalog module."""

from .models import Coordinates, Location
from .location_catalog import LocationCatalog, default_catalog

__all__ = ["Coordinates", "Location", "LocationCatalog", "default_catalog"]
