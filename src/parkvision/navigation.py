"""Outbound links to an external navigation service."""

from typing import Optional
from urllib.parse import urlencode

from .catalog.models import Coordinates

DIRECTIONS_BASE_URL = "https://www.google.com/maps/dir/"


def directions_url(coordinates: Coordinates, spot_id: Optional[str] = None) -> str:
    """
    Build a driving-directions URL to a location.

    Args:
        coordinates: Destination coordinates
        spot_id: Selected spot, if any. The navigation service only knows
            about the facility, so the destination is the same either way.

    Returns:
        URL of the form ...?api=1&destination=<lat>,<lng>&travelmode=driving
    """
    query = urlencode(
        {
            "api": 1,
            "destination": f"{coordinates.lat},{coordinates.lng}",
            "travelmode": "driving",
        },
        safe=",",
    )
    return f"{DIRECTIONS_BASE_URL}?{query}"
