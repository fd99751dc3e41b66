"""Pygame host session: event loop, rendering, and command routing."""

from __future__ import annotations

from pathlib import Path
import logging
import pygame

from .audio import SAMPLE_RATE, AudioManager
from .controls import InputMapper, build_key_map
from .engine import Command, GameStatus, SimulationEngine, Snapshot
from .menu import Menu, MenuItem
from .scheduler import TickScheduler
from .scores import HighScoreStore
from .settings import DEFAULT_CONFIG, GameConfig, GameSettings, SettingsManager
from .utils import (
    BG_COLOR,
    BLUE,
    BODY_COLOR,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    FOOD_COLOR,
    FPS,
    GRID_COLOR,
    HEAD_COLOR,
    HUD_HEIGHT,
    SHADOW_COLOR,
    TEXT_COLOR,
    YELLOW,
    ensure_data_dirs,
)

logger = logging.getLogger(__name__)


class SnakeGame:
    """Wires the simulation core to a pygame window, keyboard, and speakers."""

    def __init__(self, root: Path, config: GameConfig = DEFAULT_CONFIG) -> None:
        pygame.mixer.pre_init(SAMPLE_RATE, -16, 1, 512)
        pygame.init()
        pygame.font.init()
        ensure_data_dirs()

        self.root = root
        self.config = config
        self.settings_manager = SettingsManager()
        self.settings: GameSettings = self.settings_manager.settings

        self.screen = pygame.display.set_mode((CANVAS_WIDTH, CANVAS_HEIGHT + HUD_HEIGHT))
        pygame.display.set_caption("gridsnake")
        self.clock = pygame.time.Clock()

        self.title_font = pygame.font.SysFont("consolas", 52, bold=True)
        self.body_font = pygame.font.SysFont("consolas", 27, bold=True)
        self.small_font = pygame.font.SysFont("consolas", 18)

        self.cell_size = min(CANVAS_WIDTH, CANVAS_HEIGHT) // config.grid_size
        board_px = self.cell_size * config.grid_size
        self.board_origin = ((CANVAS_WIDTH - board_px) // 2, HUD_HEIGHT + (CANVAS_HEIGHT - board_px) // 2)

        self.engine = SimulationEngine(config=config, score_store=HighScoreStore())
        self.scheduler = TickScheduler(self.engine)
        self.audio = AudioManager(self.root, enabled=self.settings.sound_enabled)
        self.audio.volume = self.settings.master_volume * self.settings.sfx_volume
        self.engine.subscribe(self.audio)
        self.input = InputMapper(
            build_key_map(self.settings.primary_controls, self.settings.secondary_controls)
        )

        self.main_menu = Menu(title="SNAKE", subtitle="Classic arcade action")
        self._rebuild_main_menu()

    def _rebuild_main_menu(self) -> None:
        sound = "On" if self.settings.sound_enabled else "Off"
        grid = "On" if self.settings.show_grid else "Off"
        self.main_menu.set_items([
            MenuItem("Start Game", "start"),
            MenuItem(f"Sound: {sound}", "toggle_sound"),
            MenuItem(f"Grid: {grid}", "toggle_grid"),
            MenuItem("Exit", "exit"),
        ])

    def start_game(self) -> bool:
        """Start or restart a game, bringing up audio on first use."""
        self.audio.ensure_initialized()
        started = self.engine.dispatch(Command.START)
        if started:
            self.scheduler.stop()
        return started

    def run(self) -> None:
        """Main event/update/render loop."""
        running = True
        while running:
            dt_ms = self.clock.tick(FPS)
            running = self._handle_events()
            if not running:
                break
            self.scheduler.update(dt_ms)
            self._render()

        pygame.quit()

    def _handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.MOUSEBUTTONDOWN:
                self.input.begin_swipe(event.pos)
                continue
            if event.type == pygame.MOUSEBUTTONUP:
                heading = self.input.end_swipe(event.pos)
                if heading is not None:
                    self.engine.request_direction(heading)
                continue
            if event.type != pygame.KEYDOWN:
                continue

            status = self.engine.status
            if status is GameStatus.MENU:
                if event.key == pygame.K_ESCAPE:
                    return False
                if not self._handle_menu_input(event.key):
                    return False
            elif status in (GameStatus.PLAYING, GameStatus.PAUSED):
                self._handle_gameplay_input(event.key)
            elif status.is_terminal:
                if event.key in (pygame.K_SPACE, pygame.K_RETURN):
                    self.start_game()
                elif event.key in (pygame.K_BACKSPACE, pygame.K_ESCAPE):
                    self.engine.dispatch(Command.RESET)
        return True

    def _handle_menu_input(self, key: int) -> bool:
        action = self.main_menu.handle_key(key)
        self.audio.play("menu")
        if action is None:
            return True
        if action == "start":
            self.start_game()
        elif action == "toggle_sound":
            self.audio.set_enabled(self.settings_manager.toggle_sound())
            self._rebuild_main_menu()
        elif action == "toggle_grid":
            self.settings_manager.toggle_grid()
            self._rebuild_main_menu()
        elif action == "exit":
            return False
        return True

    def _handle_gameplay_input(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            if self.engine.status is GameStatus.PLAYING:
                self.engine.dispatch(Command.TOGGLE_PAUSE)
            else:
                self.engine.dispatch(Command.RESET)
            return
        if key == pygame.K_BACKSPACE:
            self.engine.dispatch(Command.RESET)
            return
        intent = self.input.key_intent(key)
        if intent is not None:
            self.engine.dispatch(intent)

    def _render(self) -> None:
        snapshot = self.engine.snapshot()
        self.screen.fill(BG_COLOR)
        if snapshot.status is GameStatus.MENU:
            self.main_menu.render(self.screen, self.title_font, self.body_font, self.small_font, snapshot.high_score)
        else:
            self._render_board(snapshot)
            self._render_hud(snapshot)
            if snapshot.status is GameStatus.PAUSED:
                self._render_overlay("PAUSED", "Space to resume | Backspace for menu")
            elif snapshot.status is GameStatus.GAME_OVER:
                self._render_overlay("GAME OVER", result_prompt(snapshot.score, snapshot.high_score))
            elif snapshot.status is GameStatus.BOARD_FULL:
                self._render_overlay("BOARD CLEARED", result_prompt(snapshot.score, snapshot.high_score))
        pygame.display.flip()

    def _cell_rect(self, cell: tuple[int, int], inset: int) -> pygame.Rect:
        ox, oy = self.board_origin
        return pygame.Rect(
            ox + cell[0] * self.cell_size + inset,
            oy + cell[1] * self.cell_size + inset,
            self.cell_size - inset * 2,
            self.cell_size - inset * 2,
        )

    def _render_board(self, snapshot: Snapshot) -> None:
        ox, oy = self.board_origin
        size = self.cell_size * self.config.grid_size
        if self.settings.show_grid:
            for i in range(self.config.grid_size + 1):
                offset = i * self.cell_size
                pygame.draw.line(self.screen, GRID_COLOR, (ox + offset, oy), (ox + offset, oy + size), 1)
                pygame.draw.line(self.screen, GRID_COLOR, (ox, oy + offset), (ox + size, oy + offset), 1)
        else:
            pygame.draw.rect(self.screen, GRID_COLOR, pygame.Rect(ox, oy, size, size), 1)

        for idx, cell in enumerate(snapshot.snake):
            color = HEAD_COLOR if idx == 0 else BODY_COLOR
            pygame.draw.rect(self.screen, color, self._cell_rect(cell, 1))
        pygame.draw.rect(self.screen, FOOD_COLOR, self._cell_rect(snapshot.food, 2))

    def _render_hud(self, snapshot: Snapshot) -> None:
        stats = [
            ("SCORE", snapshot.score, HEAD_COLOR),
            ("HIGH SCORE", snapshot.high_score, YELLOW),
            ("LEVEL", snapshot.level, BLUE),
        ]
        column = CANVAS_WIDTH // len(stats)
        for idx, (label, value, color) in enumerate(stats):
            head = self.small_font.render(label, True, color)
            body = self.body_font.render(str(value), True, TEXT_COLOR)
            center = column * idx + column // 2
            self.screen.blit(head, (center - head.get_width() // 2, 8))
            self.screen.blit(body, (center - body.get_width() // 2, 28))

    def _render_overlay(self, headline: str, prompt: str) -> None:
        overlay = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        self.screen.blit(overlay, (0, 0))

        center_x = self.screen.get_width() // 2
        center_y = self.screen.get_height() // 2
        shadow = self.title_font.render(headline, True, SHADOW_COLOR)
        title = self.title_font.render(headline, True, YELLOW)
        line = self.small_font.render(prompt, True, TEXT_COLOR)
        self.screen.blit(shadow, (center_x - title.get_width() // 2 + 3, center_y - 57))
        self.screen.blit(title, (center_x - title.get_width() // 2, center_y - 60))
        self.screen.blit(line, (center_x - line.get_width() // 2, center_y + 10))


def result_prompt(score: int, high_score: int) -> str:
    """Text under the end-of-game headline."""
    prompt = f"Score {score} | Enter to retry | Backspace for menu"
    if score > 0 and score == high_score:
        return f"NEW HIGH SCORE! {prompt}"
    return prompt
