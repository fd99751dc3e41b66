"""Fixed-step tick driver decoupled from the host frame rate."""

from __future__ import annotations

import logging

from .engine import GameStatus, SimulationEngine

logger = logging.getLogger(__name__)


class TickScheduler:
    """Accumulates frame time and advances the engine at its tick interval.

    The interval is read from the engine before every tick so a level-up takes
    effect from the following tick on. Leftover time carries over between
    frames; it is discarded whenever the game leaves the playing state.
    """

    def __init__(self, engine: SimulationEngine) -> None:
        self.engine = engine
        self.accumulator_ms = 0.0
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self.engine.status is GameStatus.PLAYING

    def stop(self) -> None:
        """Drop any accumulated time."""
        self.accumulator_ms = 0.0

    def update(self, elapsed_ms: float) -> int:
        """Feed elapsed frame time and return how many ticks fired."""
        if not self.running:
            self.stop()
            return 0
        if elapsed_ms < 0:
            raise ValueError(f"elapsed time must not be negative, got {elapsed_ms}")

        self.accumulator_ms += elapsed_ms
        fired = 0
        while self.accumulator_ms >= self.engine.tick_interval_ms:
            self.accumulator_ms -= self.engine.tick_interval_ms
            self.engine.advance()
            fired += 1
            self.ticks += 1
            if not self.running:
                self.stop()
                break
        if fired > 1:
            logger.debug("Caught up %d ticks in one frame", fired)
        return fired
