"""Build-time game configuration and persisted user settings."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import logging
import pygame

from .utils import GRID_SIZE, SETTINGS_FILE, clamp, ensure_data_dirs, load_json, save_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Grid size and difficulty constants shared by the simulation core."""

    grid_size: int = GRID_SIZE
    initial_speed_ms: int = 150
    speed_decrement_ms: int = 10
    min_speed_ms: int = 50
    score_increment: int = 5

    def __post_init__(self) -> None:
        for name in ("grid_size", "initial_speed_ms", "min_speed_ms", "score_increment"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.speed_decrement_ms < 0:
            raise ValueError(f"speed_decrement_ms must not be negative, got {self.speed_decrement_ms}")
        if self.min_speed_ms > self.initial_speed_ms:
            raise ValueError("min_speed_ms cannot exceed initial_speed_ms")

    @property
    def start_cell(self) -> tuple[int, int]:
        """Cell the snake spawns on."""
        return (self.grid_size // 2, self.grid_size // 2)


DEFAULT_CONFIG = GameConfig()


@dataclass(slots=True)
class ControlScheme:
    """Keyboard bindings for one set of steering keys."""

    up: int
    down: int
    left: int
    right: int


@dataclass(slots=True)
class GameSettings:
    """Persistent user-facing settings."""

    master_volume: float = 0.8
    sfx_volume: float = 0.8
    sound_enabled: bool = True
    show_grid: bool = True
    primary_controls: ControlScheme = field(
        default_factory=lambda: ControlScheme(
            up=pygame.K_UP,
            down=pygame.K_DOWN,
            left=pygame.K_LEFT,
            right=pygame.K_RIGHT,
        )
    )
    secondary_controls: ControlScheme = field(
        default_factory=lambda: ControlScheme(
            up=pygame.K_w,
            down=pygame.K_s,
            left=pygame.K_a,
            right=pygame.K_d,
        )
    )


class SettingsManager:
    """Load, save, and mutate user settings."""

    def __init__(self) -> None:
        ensure_data_dirs()
        self.settings = self.load()

    def load(self) -> GameSettings:
        """Load settings from disk with safe defaults."""
        raw = load_json(SETTINGS_FILE, {})
        settings = GameSettings()
        if not isinstance(raw, dict):
            logger.warning("Ignoring malformed settings payload in %s", SETTINGS_FILE)
            return settings

        try:
            settings.master_volume = clamp(float(raw.get("master_volume", settings.master_volume)), 0.0, 1.0)
            settings.sfx_volume = clamp(float(raw.get("sfx_volume", settings.sfx_volume)), 0.0, 1.0)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed volume settings in %s", SETTINGS_FILE)
        settings.sound_enabled = bool(raw.get("sound_enabled", settings.sound_enabled))
        settings.show_grid = bool(raw.get("show_grid", settings.show_grid))

        settings.primary_controls = self._load_controls(
            raw.get("primary_controls", {}), settings.primary_controls
        )
        settings.secondary_controls = self._load_controls(
            raw.get("secondary_controls", {}), settings.secondary_controls
        )
        return settings

    @staticmethod
    def _load_controls(payload: dict[str, int], defaults: ControlScheme) -> ControlScheme:
        if not isinstance(payload, dict):
            return defaults
        try:
            return ControlScheme(
                up=int(payload.get("up", defaults.up)),
                down=int(payload.get("down", defaults.down)),
                left=int(payload.get("left", defaults.left)),
                right=int(payload.get("right", defaults.right)),
            )
        except (TypeError, ValueError):
            return defaults

    def save(self) -> None:
        """Persist settings to disk."""
        try:
            save_json(SETTINGS_FILE, asdict(self.settings))
        except OSError as exc:
            logger.warning("Could not save settings to %s: %s", SETTINGS_FILE, exc)

    def toggle_sound(self) -> bool:
        """Flip sound on or off and persist."""
        self.settings.sound_enabled = not self.settings.sound_enabled
        self.save()
        return self.settings.sound_enabled

    def toggle_grid(self) -> bool:
        """Flip grid lines on or off and persist."""
        self.settings.show_grid = not self.settings.show_grid
        self.save()
        return self.settings.show_grid

