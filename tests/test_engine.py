from __future__ import annotations

import random

from gridsnake.engine import Command, GameEvent, GameStatus, SimulationEngine, TickOutcome
from gridsnake.scores import MemoryScoreStore
from gridsnake.settings import GameConfig
from gridsnake.utils import Heading


def test_initial_state(engine) -> None:
    snap = engine.snapshot()
    assert snap.status is GameStatus.MENU
    assert snap.snake == ((10, 10),)
    assert snap.food == (15, 15)
    assert snap.level == 1
    assert snap.tick_interval_ms == 150


def test_high_score_loaded_once() -> None:
    engine = SimulationEngine(score_store=MemoryScoreStore(9))
    assert engine.snapshot().high_score == 9


def test_straight_run_without_food(playing) -> None:
    playing.state.food = (15, 15)
    for _ in range(5):
        assert playing.advance() is TickOutcome.MOVED
    snap = playing.snapshot()
    assert snap.head == (15, 10)
    assert len(snap.snake) == 1
    assert snap.score == 0


def test_eating_grows_snake(playing) -> None:
    events: list[GameEvent] = []
    playing.subscribe(events.append)
    playing.state.snake = [(1, 0), (0, 0)]
    playing.state.food = (2, 0)

    assert playing.advance() is TickOutcome.ATE
    snap = playing.snapshot()
    assert snap.snake == ((2, 0), (1, 0), (0, 0))
    assert snap.score == 1
    assert snap.level == 1
    assert snap.tick_interval_ms == 150
    assert snap.food not in snap.snake
    assert events == [GameEvent.FOOD_EATEN]


def test_level_up_speeds_ticks(playing) -> None:
    playing.state.score = 4
    playing.state.food = (11, 10)
    playing.advance()
    assert playing.snapshot().level == 2
    assert playing.tick_interval_ms == 140


def test_wall_collision_ends_game() -> None:
    store = MemoryScoreStore(3)
    engine = SimulationEngine(score_store=store, rng=random.Random(5))
    engine.start()
    engine.state.snake = [(0, 4)]
    engine.state.food = (9, 9)
    engine.state.score = 2
    engine.request_direction(Heading.UP)
    engine.advance()
    engine.request_direction(Heading.LEFT)
    events: list[GameEvent] = []
    engine.subscribe(events.append)

    assert engine.advance() is TickOutcome.COLLIDED
    snap = engine.snapshot()
    assert snap.status is GameStatus.GAME_OVER
    assert snap.snake == ((0, 3),)
    assert snap.food == (9, 9)
    assert snap.high_score == 3
    assert store.saves == []
    assert events == [GameEvent.COLLISION]


def test_collision_records_new_high_score(playing) -> None:
    playing.state.snake = [(19, 10)]
    playing.state.score = 12
    playing.advance()
    assert playing.status is GameStatus.GAME_OVER
    assert playing.snapshot().high_score == 12
    assert playing.score_store.saves == [12]


def test_moving_into_tail_is_fatal(playing) -> None:
    # Square loop: head at (5,5) heading down into the tail cell (5,6).
    playing.state.snake = [(5, 5), (6, 5), (6, 6), (5, 6)]
    playing.state.food = (0, 0)
    playing.policy.reset(Heading.LEFT)
    playing.request_direction(Heading.DOWN)
    assert playing.advance() is TickOutcome.COLLIDED


def test_no_duplicate_cells_while_playing() -> None:
    engine = SimulationEngine(rng=random.Random(99))
    engine.start()
    turns = [Heading.DOWN, Heading.LEFT, Heading.UP, Heading.RIGHT]
    for tick in range(400):
        if tick % 3 == 0:
            engine.request_direction(turns[(tick // 3) % 4])
        before = len(engine.state.snake)
        outcome = engine.advance()
        snake = engine.state.snake
        if engine.status is GameStatus.PLAYING:
            assert len(set(snake)) == len(snake)
            assert engine.state.food not in snake
            assert len(snake) == before + (1 if outcome is TickOutcome.ATE else 0)
        else:
            break


def test_last_direction_request_applies(playing) -> None:
    assert playing.request_direction(Heading.UP)
    assert playing.request_direction(Heading.DOWN)
    playing.state.food = (0, 0)
    playing.advance()
    assert playing.snapshot().head == (10, 11)
    assert playing.state.current_heading is Heading.DOWN


def test_reverse_request_ignored(playing) -> None:
    assert not playing.request_direction(Heading.LEFT)
    playing.state.food = (0, 0)
    playing.advance()
    assert playing.snapshot().head == (11, 10)


def test_toggle_pause_in_menu_is_noop(engine) -> None:
    assert not engine.toggle_pause()
    assert engine.status is GameStatus.MENU


def test_pause_freezes_and_keeps_pending_turn(playing) -> None:
    playing.state.food = (0, 0)
    assert playing.dispatch(Command.TOGGLE_PAUSE)
    assert playing.request_direction(Heading.UP)
    assert playing.advance() is TickOutcome.IDLE
    assert playing.snapshot().head == (10, 10)
    assert playing.dispatch(Command.TOGGLE_PAUSE)
    playing.advance()
    assert playing.snapshot().head == (10, 9)


def test_status_transitions(engine) -> None:
    assert not engine.reset()
    assert engine.start()
    assert not engine.start()
    assert not engine.reset()
    engine.toggle_pause()
    assert engine.reset()
    assert engine.status is GameStatus.MENU

    engine.start()
    engine.state.snake = [(19, 0)]
    engine.advance()
    assert engine.status is GameStatus.GAME_OVER
    assert not engine.toggle_pause()
    assert engine.dispatch(Command.START)
    assert engine.status is GameStatus.PLAYING
    assert engine.snapshot().snake == ((10, 10),)
    assert engine.snapshot().score == 0


def test_reset_keeps_board(engine) -> None:
    engine.start()
    engine.state.snake = [(19, 0)]
    engine.state.score = 4
    engine.advance()
    assert engine.dispatch(Command.RESET)
    snap = engine.snapshot()
    assert snap.status is GameStatus.MENU
    assert snap.snake == ((19, 0),)
    assert snap.score == 4


def test_direction_ignored_outside_play(engine) -> None:
    assert not engine.dispatch(Heading.UP)
    assert engine.state.pending_heading is Heading.RIGHT


def test_board_full_is_terminal() -> None:
    store = MemoryScoreStore()
    engine = SimulationEngine(config=GameConfig(grid_size=2), score_store=store, rng=random.Random(0))
    events: list[GameEvent] = []
    engine.subscribe(events.append)
    engine.start()
    engine.state.snake = [(0, 0), (0, 1), (1, 1)]
    engine.state.food = (1, 0)
    engine.state.score = 2

    assert engine.advance() is TickOutcome.BOARD_FULL
    assert engine.status is GameStatus.BOARD_FULL
    assert events == [GameEvent.BOARD_FULL]
    assert store.saves == [3]
    assert engine.start()


def test_failing_listener_does_not_break_tick(playing) -> None:
    def boom(event: GameEvent) -> None:
        raise RuntimeError(event.name)

    playing.subscribe(boom)
    playing.state.food = (11, 10)
    assert playing.advance() is TickOutcome.ATE
    assert playing.snapshot().score == 1
