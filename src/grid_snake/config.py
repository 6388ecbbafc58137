"""Centralized configuration and palette definitions for Grid Snake."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import pygame

BASE_DIR = Path(__file__).resolve().parent

SFX_DIR = Path(os.getenv("GRID_SNAKE_SFX_DIR") or BASE_DIR / "sfx")
LOG_LEVEL: str = os.getenv("GRID_SNAKE_LOG_LEVEL", "WARNING").upper()
_seed = os.getenv("GRID_SNAKE_SEED")
SEED: int | None = int(_seed) if _seed else None

TILE_SIZE: int = 12
GRID_CELLS: int = 25  # 300 / 12
BOARD_SIZE: int = TILE_SIZE * GRID_CELLS
RESERVED_TOP_ROWS: int = 3  # keep top rows free for the HUD text
CONTROL_HEIGHT: int = 72
FONT_NAME: str = "consolas"
FONT_SIZE: int = 16
TITLE_FONT_SIZE: int = 30
FPS: int = 60

BASE_TICK_MS: int = 150
MIN_TICK_MS: int = 70
SPEED_RAMP: float = 0.95
RESTART_COOLDOWN_MS: int = 1000
FLASH_MS: int = 500

START_SNAKE: tuple[tuple[int, int], ...] = ((8, 10), (7, 10), (6, 10))
START_DIRECTION: str = "RIGHT"

DIRECTIONS: dict[str, tuple[int, int]] = {
    "UP": (0, -1),
    "DOWN": (0, 1),
    "LEFT": (-1, 0),
    "RIGHT": (1, 0),
}
OPPOSITE: dict[str, str] = {
    "UP": "DOWN",
    "DOWN": "UP",
    "LEFT": "RIGHT",
    "RIGHT": "LEFT",
}
KEY_TO_DIRECTION = {
    pygame.K_UP: "UP",
    pygame.K_w: "UP",
    pygame.K_DOWN: "DOWN",
    pygame.K_s: "DOWN",
    pygame.K_LEFT: "LEFT",
    pygame.K_a: "LEFT",
    pygame.K_RIGHT: "RIGHT",
    pygame.K_d: "RIGHT",
}

SFX_EXTENSIONS: tuple[str, ...] = ("m4a", "mp3", "wav", "ogg")
SFX_VARIANTS: int = 20

PALETTE = {
    "bg": pygame.Color("#203b15"),
    "border": pygame.Color("#2f4d1f"),
    "snake": pygame.Color("#c8fda0"),
    "food": pygame.Color("#d2aa34"),
    "text": pygame.Color(216, 255, 196),
    "overlay": pygame.Color(6, 14, 4, 170),
    "button": pygame.Color(47, 77, 31),
    "button_text": pygame.Color(200, 253, 160),
    "button_locked": pygame.Color(32, 48, 24),
    "eat_flash": pygame.Color(210, 170, 52),
    "crash_flash": pygame.Color(230, 60, 50),
}


@dataclass(frozen=True)
class GameConfig:
    """Engine tunables; validated once so a bad value fails before play starts."""

    tile_size: int = TILE_SIZE
    grid_cells: int = GRID_CELLS
    reserved_rows: int = RESERVED_TOP_ROWS
    base_tick_ms: int = BASE_TICK_MS
    min_tick_ms: int = MIN_TICK_MS
    speed_ramp: float = SPEED_RAMP
    restart_cooldown_ms: int = RESTART_COOLDOWN_MS

    def __post_init__(self) -> None:
        if self.tile_size <= 0 or self.grid_cells <= 0:
            raise ValueError("tile_size and grid_cells must be positive")
        if not 0 <= self.reserved_rows < self.grid_cells:
            raise ValueError(
                f"reserved_rows must leave a spawn row (got {self.reserved_rows})"
            )
        if self.min_tick_ms <= 0 or self.base_tick_ms < self.min_tick_ms:
            raise ValueError("tick intervals must satisfy 0 < min <= base")
        if not 0.0 < self.speed_ramp <= 1.0:
            raise ValueError(f"speed_ramp must be in (0, 1], got {self.speed_ramp}")
        if self.restart_cooldown_ms < 0:
            raise ValueError("restart_cooldown_ms cannot be negative")
        if any(max(cell) >= self.grid_cells for cell in START_SNAKE):
            raise ValueError(f"a {self.grid_cells}-cell board cannot hold the start snake")
