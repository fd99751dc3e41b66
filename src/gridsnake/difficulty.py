"""Score-driven level and tick-speed progression."""

from __future__ import annotations

from dataclasses import dataclass

from .settings import DEFAULT_CONFIG, GameConfig


@dataclass(frozen=True, slots=True)
class DifficultyLevel:
    """Level tier and the tick cadence it implies."""

    level: int
    tick_interval_ms: int


def curve(score: int, config: GameConfig = DEFAULT_CONFIG) -> DifficultyLevel:
    """Map a cumulative score to its level and tick interval.

    Every ``score_increment`` points raise the level by one, and each level above
    the first shortens the interval by ``speed_decrement_ms`` down to
    ``min_speed_ms``.
    """
    if score < 0:
        raise ValueError(f"score must not be negative, got {score}")
    level = score // config.score_increment + 1
    interval = config.initial_speed_ms - (level - 1) * config.speed_decrement_ms
    return DifficultyLevel(level=level, tick_interval_ms=max(config.min_speed_ms, interval))
