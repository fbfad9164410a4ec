"""Timer-driven driver that injects random occupancy changes."""

import asyncio
import logging
import random
from typing import Optional

from ..metrics import increment_simulation_ticks, set_simulation_running
from ..state.occupancy_engine import OccupancyEngine

logger = logging.getLogger(__name__)


class SimulationDriver:
    """
    Periodically toggles one random spot to imitate a live camera feed.

    The spot set is read from the engine on every tick, so switching
    location while running affects the next tick onward.
    """

    def __init__(
        self,
        engine: OccupancyEngine,
        interval_seconds: float = 3.0,
        rng: Optional[random.Random] = None,
    ):
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")

        self.engine = engine
        self.interval_seconds = interval_seconds
        self.tick_count = 0
        self._rng = rng or random.Random()
        self._task: Optional[asyncio.Task] = None
        self._running = False
        self._generation = 0

    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        """
        Begin periodic toggling on the running event loop.

        Calling start while already running does nothing.

        Raises:
            RuntimeError: If no event loop is running
        """
        if self._running:
            return

        loop = asyncio.get_running_loop()
        self._generation += 1
        self._running = True
        self._task = loop.create_task(self._run(self._generation))
        set_simulation_running(True)
        logger.info(f"Simulation started (interval: {self.interval_seconds}s)")

    def stop(self) -> None:
        """
        Halt periodic toggling.

        No toggle happens after this returns. Calling stop while stopped
        does nothing.
        """
        if not self._running:
            return

        self._running = False
        self._generation += 1
        if self._task is not None:
            self._task.cancel()
        set_simulation_running(False)
        logger.info(f"Simulation stopped after {self.tick_count} tick(s)")

    async def aclose(self) -> None:
        """Stop the driver and wait for its task to finish."""
        self.stop()
        task, self._task = self._task, None
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            pass

    def tick(self) -> Optional[str]:
        """
        Toggle one spot chosen uniformly from the current mapping.

        Returns:
            The toggled spot id, or None if the mapping is empty
        """
        spot_ids = list(self.engine.current_state())
        if not spot_ids:
            logger.debug("Simulation tick skipped: no spots")
            return None

        spot_id = self._rng.choice(spot_ids)
        self.engine.toggle_spot(spot_id)
        self.tick_count += 1
        increment_simulation_ticks()
        return spot_id

    async def _run(self, generation: int) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)

            # A stale task must never mutate state once stop() has returned
            if not self._running or generation != self._generation:
                return

            try:
                spot_id = self.tick()
                logger.debug(f"Simulation tick toggled {spot_id}")
            except Exception as e:
                logger.error(f"Simulation tick error: {e}")
