"""Grid Snake window: input, rendering and sound wrapped around the tick engine."""

from __future__ import annotations

import logging
import random

import pygame

from .audio import AudioEngine
from .config import (
    BOARD_SIZE,
    CONTROL_HEIGHT,
    FONT_NAME,
    FONT_SIZE,
    FPS,
    KEY_TO_DIRECTION,
    LOG_LEVEL,
    PALETTE,
    SEED,
    TITLE_FONT_SIZE,
    GameConfig,
)
from .effects import (
    Flash,
    MatrixTitle,
    draw_flashes,
    draw_matrix_title,
    start_flash,
    update_flashes,
    update_title,
)
from .engine import PLAYING, Snapshot, TickEngine
from .scheduler import PygameTimerScheduler

logger = logging.getLogger(__name__)

WINDOW_SIZE = (BOARD_SIZE, BOARD_SIZE + CONTROL_HEIGHT)


def build_direction_buttons() -> dict[str, pygame.Rect]:
    """Lay out the on-screen d-pad in the strip below the board."""
    width, height, gap = 56, 28, 6
    center_x = BOARD_SIZE // 2
    top = BOARD_SIZE + gap
    second_row = top + height + gap
    return {
        "UP": pygame.Rect(center_x - width // 2, top, width, height),
        "LEFT": pygame.Rect(center_x - width // 2 - gap - width, second_row, width, height),
        "DOWN": pygame.Rect(center_x - width // 2, second_row, width, height),
        "RIGHT": pygame.Rect(center_x + width // 2 + gap, second_row, width, height),
    }


def build_restart_button() -> pygame.Rect:
    rect = pygame.Rect(0, 0, 120, 30)
    rect.center = (BOARD_SIZE // 2, BOARD_SIZE // 2 + 64)
    return rect


class GridSnake:
    """Presentation adapter: turns engine snapshots into pixels and sound."""

    def __init__(self) -> None:
        pygame.init()
        self._base_window_flags = pygame.DOUBLEBUF | pygame.SCALED
        self.fullscreen = False
        self.window = pygame.display.set_mode(WINDOW_SIZE, self._base_window_flags)
        pygame.display.set_caption("Grid Snake")
        self.scene = pygame.Surface(WINDOW_SIZE).convert_alpha()

        self.font = pygame.font.SysFont(FONT_NAME, FONT_SIZE)
        self.title_font = pygame.font.SysFont(FONT_NAME, TITLE_FONT_SIZE, bold=True)
        self.audio = AudioEngine()

        self.direction_buttons = build_direction_buttons()
        self.restart_button = build_restart_button()
        self.flashes: list[Flash] = []
        self.title: MatrixTitle | None = None

        self.scheduler = PygameTimerScheduler()
        self.engine = TickEngine(
            GameConfig(),
            scheduler=self.scheduler,
            rng=random.Random(SEED),
            on_snapshot=self._on_snapshot,
            on_food_eaten=self._on_food_eaten,
            on_collision=self._on_collision,
        )
        self.grid = self.engine.grid
        self.snapshot: Snapshot = self.engine.snapshot()

    # --- Engine hooks --------------------------------------------------

    def _on_snapshot(self, snapshot: Snapshot) -> None:
        self.snapshot = snapshot
        if snapshot.state == PLAYING:
            self.title = None

    def _on_food_eaten(self, snapshot: Snapshot) -> None:
        self.audio.play("eat")
        start_flash(self.flashes, PALETTE["eat_flash"])

    def _on_collision(self, kind: str) -> None:
        self.audio.play("crash")
        start_flash(self.flashes, PALETTE["crash_flash"])
        self.title = MatrixTitle("Game Over")

    # --- Display -------------------------------------------------------

    def _apply_display_mode(self) -> None:
        """Recreate the main window honoring the fullscreen toggle."""
        flags = self._base_window_flags
        if self.fullscreen:
            flags |= pygame.FULLSCREEN
        self.window = pygame.display.set_mode(WINDOW_SIZE, flags)
        title = "Grid Snake" + (" [Fullscreen]" if self.fullscreen else "")
        pygame.display.set_caption(title)

    # --- Input ---------------------------------------------------------

    def handle_events(self) -> bool:
        """Handle window/keyboard/pointer events and translate them into intents."""
        for event in pygame.event.get():
            if self.scheduler.handle_event(event):
                continue
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return False
                if event.key in (pygame.K_f, pygame.K_F11):
                    self.fullscreen = not self.fullscreen
                    self._apply_display_mode()
                    continue
                if self.engine.is_dead:
                    self.engine.request_restart()
                    continue
                new_dir = KEY_TO_DIRECTION.get(event.key)
                if new_dir:
                    self.engine.request_direction(new_dir)
            elif event.type == pygame.MOUSEBUTTONDOWN:
                # Touches also arrive as FINGERDOWN; skip the synthetic mouse copy.
                if event.button == 1 and not getattr(event, "touch", False):
                    self._handle_pointer(event.pos)
            elif event.type == pygame.FINGERDOWN:
                width, height = WINDOW_SIZE
                self._handle_pointer((int(event.x * width), int(event.y * height)))
        return True

    def _handle_pointer(self, pos: tuple[int, int]) -> None:
        if self.engine.is_dead and self.restart_button.collidepoint(pos):
            self.engine.request_restart()
            return
        for direction, rect in self.direction_buttons.items():
            if rect.collidepoint(pos):
                self.engine.request_direction(direction)
                return

    # --- Draw ----------------------------------------------------------

    def _draw_cell(self, cell: tuple[int, int], color: pygame.Color) -> None:
        pygame.draw.rect(self.scene, color, self.grid.pixel_rect(cell))

    def _draw_controls(self) -> None:
        strip = pygame.Rect(0, BOARD_SIZE, BOARD_SIZE, CONTROL_HEIGHT)
        self.scene.fill(PALETTE["bg"], strip)
        arrows = {"UP": "^", "DOWN": "v", "LEFT": "<", "RIGHT": ">"}
        for direction, rect in self.direction_buttons.items():
            pygame.draw.rect(self.scene, PALETTE["button"], rect, border_radius=6)
            label = self.font.render(arrows[direction], True, PALETTE["button_text"])
            self.scene.blit(label, label.get_rect(center=rect.center))

    def show_score(self) -> None:
        """Render the score inside the reserved top rows."""
        score_text = self.font.render(f"Score: {self.snapshot.score}", True, PALETTE["text"])
        band = self.grid.reserved_rows * self.grid.tile_size
        self.scene.blit(score_text, score_text.get_rect(midleft=(8, band // 2)))

    def overlay_lines(self) -> list[str]:
        """Text under the game-over title: final score and how to restart."""
        return [f"Score: {self.snapshot.score}", "Press any key to play again"]

    def _draw_overlay(self) -> None:
        overlay = pygame.Surface(self.grid.pixel_size, pygame.SRCALPHA)
        overlay.fill(PALETTE["overlay"])
        self.scene.blit(overlay, (0, 0))

        center = (BOARD_SIZE // 2, BOARD_SIZE // 2 - 24)
        if self.title is not None:
            draw_matrix_title(self.scene, self.title_font, self.title, center, PALETTE["text"])

        for idx, text in enumerate(self.overlay_lines()):
            surf = self.font.render(text, True, PALETTE["text"])
            line_y = BOARD_SIZE // 2 + 16 + idx * (FONT_SIZE + 6)
            self.scene.blit(surf, surf.get_rect(center=(BOARD_SIZE // 2, line_y)))

        remaining = self.engine.cooldown_remaining()
        locked = remaining > 0
        color = PALETTE["button_locked"] if locked else PALETTE["button"]
        pygame.draw.rect(self.scene, color, self.restart_button, border_radius=6)
        caption = f"Wait {remaining / 1000:.1f}s" if locked else "Restart"
        label = self.font.render(caption, True, PALETTE["button_text"])
        self.scene.blit(label, label.get_rect(center=self.restart_button.center))

    def draw(self) -> None:
        """Render the current frame (board, food, snake, HUD, overlay)."""
        board = pygame.Rect((0, 0), self.grid.pixel_size)
        self.scene.fill(PALETTE["bg"], board)
        pygame.draw.rect(self.scene, PALETTE["border"], board.inflate(-2, -2), width=2)

        self._draw_cell(self.snapshot.food, PALETTE["food"])
        for cell in self.snapshot.snake:
            self._draw_cell(cell, PALETTE["snake"])

        self.show_score()
        self._draw_controls()
        if self.snapshot.state != PLAYING:
            self._draw_overlay()
        draw_flashes(self.scene, self.flashes, board)

        self.window.fill((0, 0, 0))
        self.window.blit(self.scene, (0, 0))

    # --- Main loop -----------------------------------------------------

    def start(self) -> None:
        """Run the main loop: events drive ticks, effects and drawing run per frame."""
        snapshot = self.engine.reset()
        logger.info("game started, tick %d ms, food at %s", snapshot.tick_ms, snapshot.food)
        clock = pygame.time.Clock()
        running = True

        while running:
            dt = clock.tick(FPS) / 1000.0
            running = self.handle_events()

            self.flashes = update_flashes(self.flashes, dt)
            if self.title is not None:
                update_title(self.title, dt)

            self.draw()
            pygame.display.update()

        self.scheduler.cancel()
        pygame.quit()


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    game = GridSnake()
    game.start()
