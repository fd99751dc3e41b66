"""Sound effects for game events with lazy mixer start-up."""

from __future__ import annotations

from array import array
from pathlib import Path
import logging
import math
import pygame

from .engine import GameEvent

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100

# (frequency Hz, duration s, waveform)
TONES = {
    "food_eaten": (800, 0.2, "sine"),
    "collision": (200, 0.5, "square"),
    "board_full": (1040, 0.6, "sine"),
    "menu": (560, 0.04, "sine"),
}


def create_tone(
    frequency_hz: float,
    duration_s: float,
    waveform: str = "sine",
    volume: float = 0.1,
    sample_rate: int = SAMPLE_RATE,
    channels: int = 1,
) -> array:
    """Render a 16-bit tone with an exponential decay envelope.

    Each sample is repeated once per channel, giving interleaved frames.
    """
    sample_count = max(1, int(sample_rate * duration_s))
    amplitude = 32767 * max(0.0, min(volume, 1.0))
    # Decay from full gain down to 10% over the tone, like a gain ramp 0.1 -> 0.01.
    decay = math.log(0.1) / sample_count
    pcm = array("h")
    for i in range(sample_count):
        phase = 2.0 * math.pi * frequency_hz * i / sample_rate
        wave = math.sin(phase)
        if waveform == "square":
            wave = 1.0 if wave >= 0 else -1.0
        sample = int(amplitude * math.exp(decay * i) * wave)
        pcm.extend([sample] * channels)
    return pcm


class AudioManager:
    """Plays event sounds, starting the mixer only when first needed.

    Wav files under ``assets/sounds`` override the synthesized tones. Any mixer
    failure leaves the manager silent instead of raising.
    """

    def __init__(self, root: Path, enabled: bool = True) -> None:
        self.root = root
        self.enabled = enabled
        self.initialized = False
        self.sound_enabled = False
        self.volume = 1.0
        self.sounds: dict[str, pygame.mixer.Sound] = {}
        self.mixer_format: tuple[int, int, int] = (SAMPLE_RATE, -16, 1)

    def ensure_initialized(self) -> bool:
        """Start the mixer and load sounds on first use."""
        if self.initialized:
            return self.sound_enabled
        if not self.enabled:
            return False
        self.initialized = True
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1, buffer=512)
            self.mixer_format = pygame.mixer.get_init()
            self.sound_enabled = True
        except pygame.error as exc:
            logger.warning("Audio disabled, mixer unavailable: %s", exc)
            self.sound_enabled = False
            return False
        self.load_assets()
        self.set_volume(self.volume)
        return True

    def load_assets(self) -> None:
        """Load wav overrides, synthesizing any that are missing."""
        for key, (frequency, duration, waveform) in TONES.items():
            path = self.root / "assets" / "sounds" / f"{key}.wav"
            try:
                if path.exists():
                    self.sounds[key] = pygame.mixer.Sound(str(path))
                else:
                    rate, size, channels = self.mixer_format
                    if abs(size) != 16:
                        logger.warning("Cannot synthesize %s for %d-bit mixer output", key, abs(size))
                        continue
                    pcm = create_tone(frequency, duration, waveform, sample_rate=rate, channels=channels)
                    self.sounds[key] = pygame.mixer.Sound(buffer=pcm.tobytes())
            except pygame.error as exc:
                logger.warning("Could not load sound %s: %s", key, exc)

    def set_volume(self, volume: float) -> None:
        """Apply a volume in [0, 1] to every loaded sound."""
        self.volume = volume
        for sound in self.sounds.values():
            sound.set_volume(volume)

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def play(self, key: str) -> None:
        """Play a named sound effect."""
        if not self.enabled or not self.sound_enabled:
            return
        sound = self.sounds.get(key)
        if sound:
            sound.play()

    def __call__(self, event: GameEvent) -> None:
        self.play(event.value)
