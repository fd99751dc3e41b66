from __future__ import annotations

from gridsnake.engine import GameStatus
from gridsnake.scheduler import TickScheduler


def test_no_ticks_outside_play(engine) -> None:
    scheduler = TickScheduler(engine)
    assert scheduler.update(1000) == 0
    assert scheduler.accumulator_ms == 0
    assert engine.snapshot().head == (10, 10)


def test_remainder_carries_forward(playing) -> None:
    playing.state.food = (0, 0)
    scheduler = TickScheduler(playing)
    assert scheduler.update(100) == 0
    assert scheduler.update(100) == 1
    assert scheduler.accumulator_ms == 50
    assert scheduler.update(100) == 1
    assert scheduler.accumulator_ms == 0
    assert playing.snapshot().head == (12, 10)


def test_catches_up_on_coarse_frames(playing) -> None:
    playing.state.food = (0, 0)
    scheduler = TickScheduler(playing)
    assert scheduler.update(460) == 3
    assert scheduler.accumulator_ms == 10
    assert playing.snapshot().head == (13, 10)


def test_interval_reread_after_level_up(playing) -> None:
    playing.state.score = 4
    playing.state.food = (11, 10)
    scheduler = TickScheduler(playing)
    # First tick eats and drops the interval to 140 ms for the next one.
    assert scheduler.update(290) == 2
    assert scheduler.accumulator_ms == 0
    assert playing.tick_interval_ms == 140


def test_stops_on_pause_and_game_over(playing) -> None:
    scheduler = TickScheduler(playing)
    playing.toggle_pause()
    assert scheduler.update(500) == 0
    playing.toggle_pause()

    playing.state.snake = [(19, 10)]
    assert scheduler.update(1000) == 1
    assert playing.status is GameStatus.GAME_OVER
    assert scheduler.accumulator_ms == 0
