"""Main menu model and drawing."""

from __future__ import annotations

from dataclasses import dataclass, field
import pygame

from .utils import BG_COLOR, HEAD_COLOR, SHADOW_COLOR, TEXT_COLOR, YELLOW

NAV_UP_KEYS = (pygame.K_UP, pygame.K_w)
NAV_DOWN_KEYS = (pygame.K_DOWN, pygame.K_s)
SELECT_KEYS = (pygame.K_RETURN, pygame.K_SPACE)

CONTROLS_HINT = "Arrows / WASD / swipe to steer | Space to pause"


@dataclass(slots=True)
class MenuItem:
    """A selectable row bound to an action name."""

    label: str
    action: str


@dataclass(slots=True)
class Menu:
    """Vertical menu that wraps around and reports the chosen action."""

    title: str
    subtitle: str = ""
    items: list[MenuItem] = field(default_factory=list)
    selected_index: int = 0

    def set_items(self, items: list[MenuItem]) -> None:
        """Replace the rows, keeping the cursor on a valid row."""
        self.items = items
        self.selected_index = min(self.selected_index, max(0, len(items) - 1))

    def handle_key(self, key: int) -> str | None:
        """Move the cursor or return the selected action for a key press."""
        if not self.items:
            return None
        if key in NAV_UP_KEYS:
            self.selected_index = (self.selected_index - 1) % len(self.items)
        elif key in NAV_DOWN_KEYS:
            self.selected_index = (self.selected_index + 1) % len(self.items)
        elif key in SELECT_KEYS:
            return self.items[self.selected_index].action
        return None

    def render(
        self,
        surface: pygame.Surface,
        title_font: pygame.font.Font,
        body_font: pygame.font.Font,
        small_font: pygame.font.Font,
        high_score: int,
    ) -> None:
        """Draw title, rows, best score and the controls hint."""
        surface.fill(BG_COLOR)
        center_x = surface.get_width() // 2

        def blit_centered(text: pygame.Surface, y: int, dx: int = 0) -> None:
            surface.blit(text, (center_x - text.get_width() // 2 + dx, y))

        blit_centered(title_font.render(self.title, True, SHADOW_COLOR), 85, dx=3)
        blit_centered(title_font.render(self.title, True, HEAD_COLOR), 82)
        if self.subtitle:
            blit_centered(body_font.render(self.subtitle, True, TEXT_COLOR), 160)

        for idx, item in enumerate(self.items):
            selected = idx == self.selected_index
            label = f"> {item.label} <" if selected else item.label
            blit_centered(body_font.render(label, True, YELLOW if selected else TEXT_COLOR), 230 + idx * 42)

        blit_centered(small_font.render(f"High score: {high_score}", True, YELLOW), 420)
        blit_centered(small_font.render(CONTROLS_HINT, True, TEXT_COLOR), surface.get_height() - 40)
