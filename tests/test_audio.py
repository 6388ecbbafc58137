"""Tests for sample selection and the audio fallback chain."""

import random
from pathlib import Path
from unittest.mock import MagicMock

import pygame
import pytest

from grid_snake.audio import AudioEngine, SamplePool, candidate_paths, pick_index


@pytest.fixture
def silent_engine(monkeypatch):
    """An engine whose mixer failed to open, re-enabled by hand for mocks."""
    monkeypatch.setattr(pygame.mixer, "init", MagicMock(side_effect=pygame.error("no device")))
    engine = AudioEngine(rng=random.Random(0))
    engine.enabled = True
    return engine


class TestPickIndex:
    """Random sample choice with the no-triple-repeat rule."""

    def test_third_repeat_is_rerolled(self):
        rng = random.Random(0)
        for _ in range(200):
            assert pick_index(2, 0, 2, rng) == 1

    def test_single_sample_may_repeat(self):
        assert pick_index(1, 0, 5, random.Random(0)) == 0

    def test_second_repeat_is_allowed(self):
        rng = random.Random(0)
        picks = {pick_index(2, 0, 1, rng) for _ in range(200)}
        assert picks == {0, 1}


class TestSamplePool:
    """Pool bookkeeping of the last sample played."""

    def test_empty_pool_returns_none(self):
        assert SamplePool().pick(random.Random(0)) is None

    def test_never_three_in_a_row(self):
        sounds = ["a", "b"]
        pool = SamplePool(sounds=sounds)
        rng = random.Random(4)
        picks = [pool.pick(rng) for _ in range(300)]
        for first, second, third in zip(picks, picks[1:], picks[2:]):
            assert not first == second == third

    def test_tracks_repeat_count(self):
        pool = SamplePool(sounds=["only"])
        rng = random.Random(0)
        pool.pick(rng)
        pool.pick(rng)
        assert (pool.last_index, pool.last_count) == (0, 2)


class TestCandidatePaths:
    """Which files a cue looks for on disk."""

    def test_bases_and_extensions(self):
        paths = list(candidate_paths(Path("sfx"), "eat"))
        assert len(paths) == 21 * 4
        assert paths[0] == Path("sfx/eat.m4a")
        assert Path("sfx/eat20.ogg") in paths


class TestAudioEngine:
    """Mixer failure handling and the sample/fallback/beep chain."""

    def test_mixer_failure_disables_audio(self, monkeypatch):
        monkeypatch.setattr(pygame.mixer, "init", MagicMock(side_effect=pygame.error("no device")))
        engine = AudioEngine()
        assert engine.enabled is False
        engine.play("eat")

    def test_pool_sample_plus_beep(self, silent_engine):
        sample, fallback, beep = MagicMock(), MagicMock(), MagicMock()
        silent_engine.pools["eat"] = SamplePool(sounds=[sample])
        silent_engine.fallbacks["eat"] = fallback
        silent_engine.beeps["eat"] = beep

        silent_engine.play("eat")

        sample.play.assert_called_once()
        fallback.play.assert_not_called()
        beep.play.assert_called_once()

    def test_fallback_when_pool_empty(self, silent_engine):
        fallback, beep = MagicMock(), MagicMock()
        silent_engine.pools["crash"] = SamplePool()
        silent_engine.fallbacks["crash"] = fallback
        silent_engine.beeps["crash"] = beep

        silent_engine.play("crash")

        fallback.play.assert_called_once()
        beep.play.assert_called_once()

    def test_fallback_when_no_channel_free(self, silent_engine):
        sample, fallback = MagicMock(), MagicMock()
        sample.play.return_value = None
        silent_engine.pools["eat"] = SamplePool(sounds=[sample])
        silent_engine.fallbacks["eat"] = fallback

        silent_engine.play("eat")

        fallback.play.assert_called_once()

    def test_playback_error_mutes_quietly(self, silent_engine):
        sample = MagicMock()
        sample.play.side_effect = pygame.error("device lost")
        silent_engine.pools["eat"] = SamplePool(sounds=[sample])

        silent_engine.play("eat")

        assert silent_engine.enabled is False
