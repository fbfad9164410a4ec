"""Simulated live occupancy feed."""

from .driver import SimulationDriver

__all__ = ["SimulationDriver"]
