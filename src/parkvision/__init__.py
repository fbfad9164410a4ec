"""ParkVision occupancy demo service."""

__version__ = "1.0.0"
