"""Shared fixtures: headless SDL, a fake millisecond clock and a manual tick driver."""

import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest  # noqa: E402

from grid_snake.config import GameConfig  # noqa: E402
from grid_snake.engine import TickEngine  # noqa: E402


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class ManualScheduler:
    """Records reschedule/cancel calls; tests fire ticks by hand."""

    def __init__(self):
        self.interval_ms = None
        self.callback = None
        self.history = []

    @property
    def active(self):
        return self.callback is not None

    def reschedule(self, interval_ms, callback):
        self.interval_ms = interval_ms
        self.callback = callback
        self.history.append(("reschedule", interval_ms))

    def cancel(self):
        self.interval_ms = None
        self.callback = None
        self.history.append(("cancel", None))

    def fire(self):
        assert self.callback is not None, "no tick scheduled"
        return self.callback()


@pytest.fixture
def clock():
    return FakeClock(now=5_000)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def engine(config, scheduler, clock):
    game = TickEngine(config, scheduler=scheduler, clock=clock, rng=random.Random(7))
    game.reset()
    return game
