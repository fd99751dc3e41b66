"""Shared constants, grid geometry, and persistence helpers for gridsnake."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Tuple
import json
import logging
import random

logger = logging.getLogger(__name__)

GRID_SIZE = 20
CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600
HUD_HEIGHT = 64
FPS = 60

BG_COLOR = (26, 26, 26)
GRID_COLOR = (51, 51, 51)
TEXT_COLOR = (229, 231, 235)
SHADOW_COLOR = (12, 12, 12)
HEAD_COLOR = (74, 222, 128)
BODY_COLOR = (34, 197, 94)
FOOD_COLOR = (239, 68, 68)
YELLOW = (250, 204, 21)
BLUE = (96, 165, 250)

Cell = Tuple[int, int]

DATA_DIR = Path(".gridsnake")
SETTINGS_FILE = DATA_DIR / "settings.json"
HIGH_SCORE_FILE = DATA_DIR / "highscore.json"

# Rejected samples tolerated before falling back to an explicit free-cell scan.
MAX_RANDOM_SAMPLES = 64


class Heading(Enum):
    """Axis-aligned movement directions with their unit vectors."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> Heading:
        """Return the heading pointing the other way."""
        return _OPPOSITES[self]


_OPPOSITES = {
    Heading.UP: Heading.DOWN,
    Heading.DOWN: Heading.UP,
    Heading.LEFT: Heading.RIGHT,
    Heading.RIGHT: Heading.LEFT,
}


class BoardFullError(Exception):
    """Raised when no free cell is left to place food on."""


def ensure_data_dirs() -> None:
    """Create the data directory for save files."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp a value into a closed interval."""
    return max(minimum, min(maximum, value))


def is_opposite(a: Heading, b: Heading) -> bool:
    """Return whether two headings point in opposite directions."""
    return a.opposite is b


def translate(cell: Cell, heading: Heading) -> Cell:
    """Move a cell one step along a heading."""
    return (cell[0] + heading.dx, cell[1] + heading.dy)


def is_out_of_bounds(cell: Cell, grid_size: int = GRID_SIZE) -> bool:
    """Check if a cell lies outside the square playfield."""
    x, y = cell
    return x < 0 or x >= grid_size or y < 0 or y >= grid_size


def is_self_collision(head: Cell, body: Iterable[Cell]) -> bool:
    """Return whether the head lands on any cell of the body."""
    return any(head == segment for segment in body)


def pick_free_cell(
    occupied: Iterable[Cell],
    grid_size: int = GRID_SIZE,
    rng: random.Random | None = None,
) -> Cell:
    """Return a uniformly random grid cell that is not occupied.

    Raises ``BoardFullError`` when every cell of the grid is taken.
    """
    rng = rng or random.Random()
    occupied_set = {cell for cell in occupied if not is_out_of_bounds(cell, grid_size)}
    if len(occupied_set) >= grid_size * grid_size:
        raise BoardFullError(f"all {grid_size * grid_size} cells are occupied")

    for _ in range(MAX_RANDOM_SAMPLES):
        candidate = (rng.randrange(grid_size), rng.randrange(grid_size))
        if candidate not in occupied_set:
            return candidate

    free = [
        (x, y)
        for y in range(grid_size)
        for x in range(grid_size)
        if (x, y) not in occupied_set
    ]
    return rng.choice(free)


def load_json(path: Path, default: Any) -> Any:
    """Load JSON data, returning default when missing or malformed."""
    if not path.exists():
        return default
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except (ValueError, OSError) as exc:
        logger.warning("Could not read %s, using defaults: %s", path, exc)
        return default


def save_json(path: Path, payload: Any) -> None:
    """Save JSON data with deterministic formatting."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True)
