"""Authoritative snake simulation and the game-status state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable
import logging
import random
import threading

from .difficulty import curve
from .direction import DirectionPolicy
from .scores import MemoryScoreStore, ScoreStore
from .settings import DEFAULT_CONFIG, GameConfig
from .utils import (
    BoardFullError,
    Cell,
    Heading,
    is_out_of_bounds,
    is_self_collision,
    pick_free_cell,
    translate,
)

logger = logging.getLogger(__name__)

INITIAL_FOOD: Cell = (15, 15)


class GameStatus(Enum):
    """Finite states of a game session."""

    MENU = auto()
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()
    BOARD_FULL = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.GAME_OVER, GameStatus.BOARD_FULL)


class GameEvent(Enum):
    """Discrete notifications for audio and other observers."""

    FOOD_EATEN = "food_eaten"
    COLLISION = "collision"
    BOARD_FULL = "board_full"


class Command(Enum):
    """Non-directional commands accepted by ``SimulationEngine.dispatch``."""

    START = auto()
    TOGGLE_PAUSE = auto()
    RESET = auto()


class TickOutcome(Enum):
    """What a single call to ``advance`` did."""

    IDLE = auto()
    MOVED = auto()
    ATE = auto()
    COLLIDED = auto()
    BOARD_FULL = auto()


EventListener = Callable[[GameEvent], None]


@dataclass(slots=True)
class SimulationState:
    """Mutable session state owned by the engine."""

    snake: list[Cell]
    food: Cell
    current_heading: Heading = Heading.RIGHT
    pending_heading: Heading = Heading.RIGHT
    score: int = 0
    high_score: int = 0
    status: GameStatus = GameStatus.MENU
    tick_interval_ms: int = DEFAULT_CONFIG.initial_speed_ms
    level: int = 1


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of the state handed to renderers and tests."""

    snake: tuple[Cell, ...]
    food: Cell
    heading: Heading
    score: int
    high_score: int
    level: int
    tick_interval_ms: int
    status: GameStatus

    @property
    def head(self) -> Cell:
        return self.snake[0]


class SimulationEngine:
    """Owns the game state and applies ticks and player commands to it."""

    def __init__(
        self,
        config: GameConfig = DEFAULT_CONFIG,
        score_store: ScoreStore | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config
        self.score_store = score_store or MemoryScoreStore()
        self.rng = rng or random.Random()
        self.policy = DirectionPolicy()
        self._listeners: list[EventListener] = []
        self._lock = threading.RLock()

        start = config.start_cell
        food = INITIAL_FOOD
        if is_out_of_bounds(food, config.grid_size) or food == start:
            food = pick_free_cell({start}, config.grid_size, self.rng)
        self.state = SimulationState(
            snake=[start],
            food=food,
            high_score=self.score_store.load(),
            tick_interval_ms=config.initial_speed_ms,
        )

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def tick_interval_ms(self) -> int:
        return self.state.tick_interval_ms

    def subscribe(self, listener: EventListener) -> None:
        """Register a callable to receive game events."""
        self._listeners.append(listener)

    def snapshot(self) -> Snapshot:
        """Return an immutable copy of the current state."""
        with self._lock:
            state = self.state
            return Snapshot(
                snake=tuple(state.snake),
                food=state.food,
                heading=state.current_heading,
                score=state.score,
                high_score=state.high_score,
                level=state.level,
                tick_interval_ms=state.tick_interval_ms,
                status=state.status,
            )

    def dispatch(self, command: Command | Heading) -> bool:
        """Route a command or heading to its handler."""
        if isinstance(command, Heading):
            return self.request_direction(command)
        if command is Command.START:
            return self.start()
        if command is Command.TOGGLE_PAUSE:
            return self.toggle_pause()
        if command is Command.RESET:
            return self.reset()
        raise ValueError(f"unknown command: {command!r}")

    def start(self) -> bool:
        """Begin a fresh game from the menu or an ended game."""
        with self._lock:
            if self.state.status not in (GameStatus.MENU, GameStatus.GAME_OVER, GameStatus.BOARD_FULL):
                return False
            start = self.config.start_cell
            self.policy.reset(Heading.RIGHT)
            self.state.snake = [start]
            self.state.food = pick_free_cell({start}, self.config.grid_size, self.rng)
            self.state.score = 0
            difficulty = curve(0, self.config)
            self.state.level = difficulty.level
            self.state.tick_interval_ms = difficulty.tick_interval_ms
            self._sync_headings()
            self._set_status(GameStatus.PLAYING)
            return True

    def toggle_pause(self) -> bool:
        """Pause a running game or resume a paused one."""
        with self._lock:
            if self.state.status is GameStatus.PLAYING:
                self._set_status(GameStatus.PAUSED)
                return True
            if self.state.status is GameStatus.PAUSED:
                self._set_status(GameStatus.PLAYING)
                return True
            return False

    def reset(self) -> bool:
        """Return to the menu from a paused or finished game."""
        with self._lock:
            if self.state.status not in (GameStatus.PAUSED, GameStatus.GAME_OVER, GameStatus.BOARD_FULL):
                return False
            self._set_status(GameStatus.MENU)
            return True

    def request_direction(self, heading: Heading) -> bool:
        """Buffer a turn for the next tick; reversals are dropped."""
        with self._lock:
            if self.state.status not in (GameStatus.PLAYING, GameStatus.PAUSED):
                return False
            accepted = self.policy.request(heading)
            self._sync_headings()
            return accepted

    def advance(self) -> TickOutcome:
        """Move the snake one cell and resolve collisions and food."""
        with self._lock:
            state = self.state
            if state.status is not GameStatus.PLAYING:
                return TickOutcome.IDLE

            heading = self.policy.consume()
            self._sync_headings()
            new_head = translate(state.snake[0], heading)

            # The tail cell still counts: it has not moved out yet this tick.
            if is_out_of_bounds(new_head, self.config.grid_size) or is_self_collision(new_head, state.snake):
                logger.debug("Collision at %s heading %s", new_head, heading.name)
                self._finish(GameStatus.GAME_OVER)
                self._emit(GameEvent.COLLISION)
                return TickOutcome.COLLIDED

            state.snake.insert(0, new_head)
            if new_head != state.food:
                state.snake.pop()
                return TickOutcome.MOVED

            state.score += 1
            difficulty = curve(state.score, self.config)
            if difficulty.level != state.level:
                logger.info("Level %d reached, tick interval %d ms", difficulty.level, difficulty.tick_interval_ms)
            state.level = difficulty.level
            state.tick_interval_ms = difficulty.tick_interval_ms
            try:
                state.food = pick_free_cell(state.snake, self.config.grid_size, self.rng)
            except BoardFullError:
                self._finish(GameStatus.BOARD_FULL)
                self._emit(GameEvent.BOARD_FULL)
                return TickOutcome.BOARD_FULL
            self._emit(GameEvent.FOOD_EATEN)
            return TickOutcome.ATE

    def _finish(self, status: GameStatus) -> None:
        state = self.state
        if state.score > state.high_score:
            state.high_score = state.score
            self.score_store.save(state.high_score)
        self._set_status(status)

    def _set_status(self, status: GameStatus) -> None:
        if status is not self.state.status:
            logger.info("Status %s -> %s (score %d)", self.state.status.name, status.name, self.state.score)
        self.state.status = status

    def _sync_headings(self) -> None:
        self.state.current_heading = self.policy.current
        self.state.pending_heading = self.policy.pending

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Listener %r failed handling %s", listener, event.name)
