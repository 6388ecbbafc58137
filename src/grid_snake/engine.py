"""Fixed-tick game engine: movement, growth, speed ramp and restart cooldown."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Any, Callable

import pygame

from .config import DIRECTIONS, START_DIRECTION, START_SNAKE, GameConfig
from .food import FoodSpawner
from .grid import Cell, Grid
from .input_buffer import InputBuffer
from .scheduler import Scheduler
from .snake import step

logger = logging.getLogger(__name__)

PLAYING = "playing"
DEAD = "dead"


@dataclass(slots=True)
class GameState:
    """Everything that lives for exactly one session; ``reset`` replaces it."""

    snake: tuple[Cell, ...]
    direction: str
    food: Cell
    tick_ms: int
    score: int = 0
    state: str = PLAYING
    restart_unlock_at: int = 0
    collision: str | None = None
    ticks: int = 0


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view handed to the presentation layer."""

    snake: tuple[Cell, ...]
    food: Cell
    score: int
    state: str
    direction: str
    tick_ms: int
    restart_unlock_at: int
    collision: str | None


def next_interval(current_ms: int, config: GameConfig) -> int:
    """Shrink the tick interval by the ramp factor, rounding halves up."""
    scaled = math.floor(current_ms * config.speed_ramp + 0.5)
    return max(config.min_tick_ms, int(scaled))


class TickEngine:
    """Owns the game state and advances it one grid step per timer tick.

    Presentation hooks are plain callables; anything they raise is logged and
    dropped so drawing or audio trouble never stalls the simulation.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        scheduler: Scheduler,
        clock: Callable[[], int] = pygame.time.get_ticks,
        rng: random.Random | None = None,
        on_snapshot: Callable[[Snapshot], None] | None = None,
        on_food_eaten: Callable[[Snapshot], None] | None = None,
        on_collision: Callable[[str], None] | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.grid = Grid.from_config(self.config)
        self.spawner = FoodSpawner(self.grid, rng)
        self.scheduler = scheduler
        self.clock = clock
        self.inputs = InputBuffer()
        self.on_snapshot = on_snapshot
        self.on_food_eaten = on_food_eaten
        self.on_collision = on_collision
        self.state: GameState = self._new_state()

    # --- Session lifecycle ---------------------------------------------

    def _new_state(self) -> GameState:
        snake = tuple(START_SNAKE)
        return GameState(
            snake=snake,
            direction=START_DIRECTION,
            food=self.spawner.spawn(snake),
            tick_ms=self.config.base_tick_ms,
        )

    def reset(self) -> Snapshot:
        """Start a fresh session and arm the tick driver at the base speed."""
        self.inputs.clear()
        self.state = self._new_state()
        self.scheduler.reschedule(self.state.tick_ms, self.tick)
        snapshot = self.snapshot()
        self._notify(self.on_snapshot, snapshot)
        return snapshot

    @property
    def is_dead(self) -> bool:
        return self.state.state == DEAD

    def cooldown_remaining(self) -> int:
        """Milliseconds left before a restart is honored (0 while playing)."""
        if not self.is_dead:
            return 0
        return max(0, self.state.restart_unlock_at - self.clock())

    def snapshot(self) -> Snapshot:
        game = self.state
        return Snapshot(
            snake=game.snake,
            food=game.food,
            score=game.score,
            state=game.state,
            direction=game.direction,
            tick_ms=game.tick_ms,
            restart_unlock_at=game.restart_unlock_at,
            collision=game.collision,
        )

    # --- Input -----------------------------------------------------------

    def request_direction(self, direction: str) -> bool:
        """Buffer a steering request; while dead it counts as a restart request."""
        if direction not in DIRECTIONS:
            raise ValueError(f"unknown direction {direction!r}")
        if self.is_dead:
            return self.request_restart()
        accepted = self.inputs.set_pending(direction, self.state.direction)
        if not accepted:
            logger.debug("dropped reversal %s while heading %s", direction, self.state.direction)
        return accepted

    def request_restart(self) -> bool:
        if not self.is_dead:
            logger.debug("restart ignored: game still running")
            return False
        remaining = self.cooldown_remaining()
        if remaining > 0:
            logger.debug("restart ignored: %d ms of cooldown left", remaining)
            return False
        logger.info("restarting after score %d", self.state.score)
        self.reset()
        return True

    # --- Logic step ------------------------------------------------------

    def tick(self) -> Snapshot:
        """Advance the game state by exactly one grid cell."""
        game = self.state
        game.direction = self.inputs.consume(game.direction)
        if game.state == DEAD:
            return self.snapshot()

        outcome = step(game.snake, game.direction, game.food, self.grid)
        game.ticks += 1

        if not outcome.alive:
            game.state = DEAD
            game.collision = outcome.collision
            game.restart_unlock_at = self.clock() + self.config.restart_cooldown_ms
            self.scheduler.cancel()
            logger.info(
                "snake hit %s at tick %d with score %d",
                outcome.collision,
                game.ticks,
                game.score,
            )
            self._notify(self.on_collision, outcome.collision)
        else:
            game.snake = outcome.snake
            if outcome.ate:
                game.score += 1
                game.food = self.spawner.spawn(game.snake)
                self._speed_up()
                self._notify(self.on_food_eaten, self.snapshot())

        snapshot = self.snapshot()
        self._notify(self.on_snapshot, snapshot)
        return snapshot

    def _speed_up(self) -> None:
        """Apply the speed ramp and restart the driver so it bites next tick."""
        game = self.state
        previous = game.tick_ms
        game.tick_ms = next_interval(previous, self.config)
        self.scheduler.reschedule(game.tick_ms, self.tick)
        logger.debug("tick interval %d -> %d ms", previous, game.tick_ms)

    def _notify(self, callback: Callable[..., Any] | None, *args: Any) -> None:
        if callback is None:
            return
        try:
            callback(*args)
        except Exception:
            logger.exception("presentation callback %r failed", callback)
