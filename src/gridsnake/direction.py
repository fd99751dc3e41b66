"""Buffered steering input for the snake."""

from __future__ import annotations

import logging

from .utils import Heading, is_opposite

logger = logging.getLogger(__name__)


class DirectionPolicy:
    """Holds the applied heading and a single queued turn.

    Requests are validated against the heading of the last move, not against the
    last request, so two quick turns between ticks can never fold the snake back
    onto its own neck.
    """

    def __init__(self, heading: Heading = Heading.RIGHT) -> None:
        self.current = heading
        self.pending = heading

    def reset(self, heading: Heading = Heading.RIGHT) -> None:
        """Forget any queued turn and face the given heading."""
        self.current = heading
        self.pending = heading

    def request(self, candidate: Heading) -> bool:
        """Queue a turn unless it reverses the current heading."""
        if is_opposite(candidate, self.current):
            logger.debug("Ignoring reversal %s while heading %s", candidate.name, self.current.name)
            return False
        self.pending = candidate
        return True

    def consume(self) -> Heading:
        """Apply the queued turn and return the heading for this tick."""
        self.current = self.pending
        return self.current
