"""Translate raw keyboard and swipe input into steering intents."""

from __future__ import annotations

from dataclasses import dataclass, field
import pygame

from .engine import Command
from .settings import ControlScheme
from .utils import Heading

MIN_SWIPE_DISTANCE = 30

PAUSE_KEYS = (pygame.K_SPACE, pygame.K_p)


def build_key_map(*schemes: ControlScheme) -> dict[int, Heading]:
    """Merge control schemes into a key -> heading lookup."""
    mapping: dict[int, Heading] = {}
    for scheme in schemes:
        mapping[scheme.up] = Heading.UP
        mapping[scheme.down] = Heading.DOWN
        mapping[scheme.left] = Heading.LEFT
        mapping[scheme.right] = Heading.RIGHT
    return mapping


def swipe_heading(
    start: tuple[float, float],
    end: tuple[float, float],
    min_distance: float = MIN_SWIPE_DISTANCE,
) -> Heading | None:
    """Return the heading of a swipe along its dominant axis, if long enough."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if abs(dx) <= min_distance and abs(dy) <= min_distance:
        return None
    if abs(dx) > abs(dy):
        return Heading.RIGHT if dx > 0 else Heading.LEFT
    return Heading.DOWN if dy > 0 else Heading.UP


@dataclass(slots=True)
class InputMapper:
    """Turns gameplay events into headings or pause commands."""

    key_map: dict[int, Heading]
    swipe_start: tuple[float, float] | None = field(default=None, init=False)

    def key_intent(self, key: int) -> Heading | Command | None:
        """Map a key press to an intent."""
        if key in PAUSE_KEYS:
            return Command.TOGGLE_PAUSE
        return self.key_map.get(key)

    def begin_swipe(self, position: tuple[float, float]) -> None:
        self.swipe_start = position

    def end_swipe(self, position: tuple[float, float]) -> Heading | None:
        """Finish a swipe and return its heading, if any."""
        if self.swipe_start is None:
            return None
        heading = swipe_heading(self.swipe_start, position)
        self.swipe_start = None
        return heading
