"""Configuration models and loading utilities."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .catalog import Location, LocationCatalog, default_catalog


class SimulationConfig(BaseModel):
    """Simulated live feed configuration."""

    interval_seconds: float = Field(default=3.0, gt=0)  # Delay between random toggles
    free_probability: float = Field(default=0.4, ge=0.0, le=1.0)  # Initial chance a spot is free
    seed: Optional[int] = None  # Fixed seed for reproducible demos
    autostart: bool = False


class APIConfig(BaseModel):
    """API server configuration."""

    host: str = "0.0.0.0"
    port: int = 8000


class AppConfig(BaseModel):
    """Main application configuration."""

    simulation: SimulationConfig = SimulationConfig()
    api: APIConfig = APIConfig()
    default_location: Optional[str] = None  # First catalog entry if unset
    locations: Optional[list[Location]] = None  # Overrides the built-in catalog
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def check_locations(self) -> "AppConfig":
        """Reject duplicate location ids and an unknown default location."""
        if self.locations is not None:
            location_ids = [loc.id for loc in self.locations]
            if len(set(location_ids)) != len(location_ids):
                duplicates = sorted({i for i in location_ids if location_ids.count(i) > 1})
                raise ValueError(f"Duplicate location ids: {duplicates}")
        else:
            location_ids = [loc.id for loc in default_catalog()]

        if self.default_location is not None and self.default_location not in location_ids:
            raise ValueError(f"default_location '{self.default_location}' is not in the catalog")
        return self

    def build_catalog(self) -> LocationCatalog:
        """Build the location catalog from config, or the built-in one."""
        if self.locations is not None:
            return LocationCatalog(self.locations)
        return default_catalog()


def load_config(path: str | Path) -> AppConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the configuration file

    Returns:
        Validated AppConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is invalid
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    return AppConfig(**data)


def get_config_path() -> Path:
    """Get the default configuration file path."""
    # Check for config in current directory first
    local_config = Path("config/config.yaml")
    if local_config.exists():
        return local_config

    # Check for config in parent directory (for Docker)
    parent_config = Path("/app/config/config.yaml")
    if parent_config.exists():
        return parent_config

    return local_config  # Return default even if doesn't exist
