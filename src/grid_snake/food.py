"""Food placement for Grid Snake."""

from __future__ import annotations

import random
from typing import Iterable

from .grid import Cell, Grid


class FoodSpawner:
    """Pick random free cells below the reserved HUD rows."""

    def __init__(self, grid: Grid, rng: random.Random | None = None) -> None:
        self.grid = grid
        self.rng = rng or random.Random()

    def spawn(self, snake: Iterable[Cell]) -> Cell:
        """Return a random cell that does not collide with the snake.

        Columns span the whole board, rows skip the reserved band. Loops until
        a free cell turns up, so the allowed band must not be completely full.
        """
        occupied = set(snake)
        rows = self.grid.spawn_rows
        while True:
            pos = (
                self.rng.randrange(0, self.grid.width),
                self.rng.randrange(rows.start, rows.stop),
            )
            if pos not in occupied:
                return pos
