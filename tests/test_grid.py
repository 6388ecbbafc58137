"""Tests for board geometry."""

import pytest

from grid_snake.config import GameConfig
from grid_snake.grid import Grid


class TestGrid:
    """Board geometry helpers."""

    def test_from_config_uses_square_board(self):
        grid = Grid.from_config(GameConfig(grid_cells=20, tile_size=10, reserved_rows=2))
        assert (grid.width, grid.height) == (20, 20)
        assert grid.pixel_size == (200, 200)
        assert grid.reserved_rows == 2

    @pytest.mark.parametrize(
        "cell, inside",
        [((0, 0), True), ((24, 24), True), ((-1, 5), False), ((5, -1), False),
         ((25, 3), False), ((3, 25), False)],
    )
    def test_contains(self, cell, inside):
        assert Grid(25, 25, 12).contains(cell) is inside

    def test_spawn_rows_skip_reserved_band(self):
        grid = Grid(25, 25, 12, reserved_rows=3)
        assert grid.spawn_rows == range(3, 25)

    def test_pixel_rect_leaves_seam(self):
        rect = Grid(25, 25, 12).pixel_rect((2, 3))
        assert (rect.x, rect.y, rect.width, rect.height) == (24, 36, 11, 11)
