"""Single-integer high score persistence."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol
import logging

from .utils import HIGH_SCORE_FILE, load_json, save_json

logger = logging.getLogger(__name__)


class ScoreStore(Protocol):
    """Anything that can load and save the best score."""

    def load(self) -> int: ...

    def save(self, score: int) -> None: ...


class MemoryScoreStore:
    """In-process store, used when nothing should touch the disk."""

    def __init__(self, score: int = 0) -> None:
        self.score = score
        self.saves: list[int] = []

    def load(self) -> int:
        return self.score

    def save(self, score: int) -> None:
        self.score = score
        self.saves.append(score)


class HighScoreStore:
    """Stores the best score as a bare JSON integer."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or HIGH_SCORE_FILE

    def load(self) -> int:
        """Return the stored high score, or 0 if absent or malformed."""
        raw = load_json(self.path, 0)
        if isinstance(raw, bool):
            return 0
        try:
            score = int(raw)
        except (TypeError, ValueError, OverflowError):
            logger.warning("Malformed high score %r in %s, using 0", raw, self.path)
            return 0
        return max(0, score)

    def save(self, score: int) -> None:
        """Write the high score, logging rather than raising on I/O errors."""
        try:
            save_json(self.path, int(score))
        except OSError as exc:
            logger.warning("Could not save high score to %s: %s", self.path, exc)
