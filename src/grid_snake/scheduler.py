"""Cancellable periodic tick drivers."""

from __future__ import annotations

import logging
from typing import Callable, Protocol

import pygame

logger = logging.getLogger(__name__)

TICK_EVENT = pygame.event.custom_type()


class Scheduler(Protocol):
    def reschedule(self, interval_ms: int, callback: Callable[[], None]) -> None:
        """Cancel any running timer and call ``callback`` every ``interval_ms``."""

    def cancel(self) -> None:
        """Stop delivering ticks."""


class PygameTimerScheduler:
    """Drive ticks through ``pygame.time.set_timer`` on a custom event.

    Every re-arm bumps a generation number carried on the event, so ticks that
    were already queued under the previous interval are dropped on delivery.
    """

    def __init__(self, event_type: int = TICK_EVENT) -> None:
        self.event_type = event_type
        self.generation: int = 0
        self._callback: Callable[[], None] | None = None

    def reschedule(self, interval_ms: int, callback: Callable[[], None]) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms}")
        self._stop_timer()
        self.generation += 1
        self._callback = callback
        event = pygame.event.Event(self.event_type, generation=self.generation)
        pygame.time.set_timer(event, interval_ms)
        logger.debug("tick timer armed at %d ms (gen %d)", interval_ms, self.generation)

    def cancel(self) -> None:
        self._stop_timer()
        self.generation += 1
        self._callback = None

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Run the callback for a current tick event; True if the event was ours."""
        if event.type != self.event_type:
            return False
        if self._callback is None or getattr(event, "generation", None) != self.generation:
            return True
        self._callback()
        return True

    def _stop_timer(self) -> None:
        pygame.time.set_timer(self.event_type, 0)
