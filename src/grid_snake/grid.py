"""Static board geometry shared by the engine and the renderer."""

from __future__ import annotations

from dataclasses import dataclass

import pygame

from .config import GameConfig

Cell = tuple[int, int]


@dataclass(frozen=True, slots=True)
class Grid:
    width: int
    height: int
    tile_size: int
    reserved_rows: int = 0

    @classmethod
    def from_config(cls, config: GameConfig) -> Grid:
        return cls(
            width=config.grid_cells,
            height=config.grid_cells,
            tile_size=config.tile_size,
            reserved_rows=config.reserved_rows,
        )

    @property
    def spawn_rows(self) -> range:
        """Rows food may appear in; the top band stays clear for the HUD."""
        return range(self.reserved_rows, self.height)

    @property
    def pixel_size(self) -> tuple[int, int]:
        return self.width * self.tile_size, self.height * self.tile_size

    def contains(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def pixel_rect(self, cell: Cell, inset: int = 1) -> pygame.Rect:
        """Screen rect for a cell, shrunk by ``inset`` px to leave a grid seam."""
        size = max(1, self.tile_size - inset)
        return pygame.Rect(cell[0] * self.tile_size, cell[1] * self.tile_size, size, size)
