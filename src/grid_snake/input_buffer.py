"""Single-slot steering buffer consumed once per tick."""

from __future__ import annotations

from .config import DIRECTIONS, OPPOSITE


class InputBuffer:
    """Hold at most one direction change until the next tick reads it."""

    def __init__(self) -> None:
        self.pending: str | None = None

    def set_pending(self, requested: str, current: str) -> bool:
        """Latch ``requested`` unless it would reverse into the snake's neck."""
        if requested not in DIRECTIONS:
            raise ValueError(f"unknown direction {requested!r}")
        if requested == OPPOSITE[current]:
            return False
        self.pending = requested
        return True

    def consume(self, current: str) -> str:
        direction = self.pending or current
        self.pending = None
        return direction

    def clear(self) -> None:
        self.pending = None
