"""Exceptions raised by the occupancy engine and location catalog."""


class ParkVisionError(Exception):
    """Base class for recoverable ParkVision errors."""


class LocationNotFoundError(ParkVisionError):
    """Raised when a location id is not in the catalog."""

    def __init__(self, location_id: str):
        self.location_id = location_id
        super().__init__(f"Location '{location_id}' not found")


class UnknownSpotError(ParkVisionError):
    """Raised when a spot id is not part of the current occupancy mapping."""

    def __init__(self, spot_id: str):
        self.spot_id = spot_id
        super().__init__(f"Spot '{spot_id}' not found")


class InvalidSelectionError(ParkVisionError):
    """Raised when selecting a spot that is not free."""

    def __init__(self, spot_id: str, status: str):
        self.spot_id = spot_id
        self.status = status
        super().__init__(f"Spot '{spot_id}' cannot be selected while {status}")
