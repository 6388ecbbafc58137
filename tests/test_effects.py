"""Tests for flash and game-over title effects."""

import pygame

from grid_snake.effects import MatrixTitle, start_flash, title_letter_states, update_flashes


class TestFlashes:
    """Border flash timers."""

    def test_restart_same_color(self):
        flashes = []
        color = pygame.Color(210, 170, 52)
        start_flash(flashes, color, duration=0.5)
        flashes = update_flashes(flashes, 0.3)
        start_flash(flashes, color, duration=0.5)
        assert len(flashes) == 1
        assert flashes[0].timer == 0.5

    def test_expired_flashes_are_dropped(self):
        flashes = []
        start_flash(flashes, pygame.Color(1, 2, 3), duration=0.5)
        start_flash(flashes, pygame.Color(4, 5, 6), duration=0.2)
        flashes = update_flashes(flashes, 0.25)
        assert [flash.color for flash in flashes] == [(1, 2, 3)]

    def test_zero_dt_keeps_state(self):
        flashes = []
        start_flash(flashes, pygame.Color(1, 2, 3), duration=0.5)
        assert update_flashes(flashes, 0.0)[0].timer == 0.5


class TestMatrixTitle:
    """Letter-by-letter game-over title animation."""

    def test_letters_start_hidden_and_raised(self):
        states = title_letter_states(MatrixTitle("Game"))
        assert [char for char, _, _ in states] == list("Game")
        assert all(alpha == 0 for _, _, alpha in states)
        assert all(offset < 0 for _, offset, _ in states)

    def test_letters_land_in_order(self):
        title = MatrixTitle("Over", letter_delay=0.1, drop_time=0.2)
        title.age = 0.2
        states = title_letter_states(title)
        assert states[0][1:] == (0.0, 255)
        assert 0 < states[1][2] < 255
        assert states[3][2] == 0

    def test_everything_settles(self):
        title = MatrixTitle("Game Over")
        title.age = 10.0
        assert all(offset == 0 and alpha == 255 for _, offset, alpha in title_letter_states(title))
