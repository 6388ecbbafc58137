"""Snake body movement and collision rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .config import DIRECTIONS
from .grid import Cell, Grid

WALL = "wall"
SELF = "self"


@dataclass(frozen=True, slots=True)
class StepOutcome:
    """Result of moving the snake one cell.

    ``snake`` is the new body when the move succeeded and the untouched body
    when it collided; ``collision`` is ``WALL``, ``SELF`` or ``None``.
    """

    snake: tuple[Cell, ...]
    ate: bool = False
    collision: str | None = None

    @property
    def alive(self) -> bool:
        return self.collision is None


def next_head(head: Cell, direction: str) -> Cell:
    dx, dy = DIRECTIONS[direction]
    return head[0] + dx, head[1] + dy


def step(
    snake: Sequence[Cell], direction: str, food: Cell | None, grid: Grid
) -> StepOutcome:
    """Advance the snake by exactly one grid cell."""
    body = tuple(snake)
    new_head = next_head(body[0], direction)

    if not grid.contains(new_head):
        return StepOutcome(snake=body, collision=WALL)
    # The tail still counts: it has not moved away yet when the head arrives.
    if new_head in body:
        return StepOutcome(snake=body, collision=SELF)

    if new_head == food:
        return StepOutcome(snake=(new_head,) + body, ate=True)
    return StepOutcome(snake=(new_head,) + body[:-1])
