"""Main application entry point."""

import logging
import random
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import uvicorn
from fastapi import FastAPI

from . import __version__
from .api.router import router
from .catalog import LocationCatalog
from .config import AppConfig, get_config_path, load_config
from .metrics import observe_occupancy_change
from .simulation import SimulationDriver
from .state import OccupancyEngine

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """Components shared by the API for the lifetime of the process."""

    config: AppConfig
    catalog: LocationCatalog
    engine: OccupancyEngine
    driver: SimulationDriver
    started_at: datetime = field(default_factory=datetime.now)


def build_app_state(config: AppConfig) -> AppState:
    """
    Wire the catalog, engine and simulation driver from configuration.

    The initial location is selected here, so the returned state already
    holds an occupancy mapping unless the catalog is empty.
    """
    rng = random.Random(config.simulation.seed)
    catalog = config.build_catalog()

    engine = OccupancyEngine(
        catalog,
        rng=rng,
        free_probability=config.simulation.free_probability,
    )
    engine.subscribe(observe_occupancy_change)

    driver = SimulationDriver(
        engine,
        interval_seconds=config.simulation.interval_seconds,
        rng=rng,
    )

    initial_location = config.default_location or catalog.default_id
    if initial_location is None:
        logger.warning("Location catalog is empty - nothing to display")
    else:
        engine.select_location(initial_location)

    return AppState(config=config, catalog=catalog, engine=engine, driver=driver)


def resolve_config() -> AppConfig:
    """Load the configuration file, falling back to built-in defaults."""
    config_path = get_config_path()
    if not config_path.exists():
        logger.warning(f"Configuration file not found: {config_path}, using defaults")
        return AppConfig()

    config = load_config(config_path)
    logger.info(f"Loaded configuration from {config_path}")
    return config


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: Configuration to use; resolved from disk at startup if omitted
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting ParkVision...")

        app_config = config or resolve_config()
        logging.getLogger().setLevel(app_config.log_level)

        app_state = build_app_state(app_config)
        app.state.parkvision = app_state

        if app_config.simulation.autostart:
            app_state.driver.start()

        logger.info(f"ParkVision ready on http://{app_config.api.host}:{app_config.api.port}")

        yield  # Application runs here

        # Shutdown
        logger.info("Shutting down...")
        await app_state.driver.aclose()
        app.state.parkvision = None
        logger.info("Shutdown complete")

    app = FastAPI(
        title="ParkVision",
        description="Simulated real-time parking occupancy for demo locations",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(router, prefix="/api/v1")
    return app


app = create_app()


def main():
    """Run the application."""
    # Load config just to get API settings
    config_path = get_config_path()
    if config_path.exists():
        cfg = load_config(config_path)
        host = cfg.api.host
        port = cfg.api.port
    else:
        host = "0.0.0.0"
        port = 8000

    uvicorn.run(
        "parkvision.main:app",
        host=host,
        port=port,
        reload=False,
    )


if __name__ == "__main__":
    main()
