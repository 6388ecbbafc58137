"""Layered sound effects for Grid Snake: sample pools, fallback files, retro beeps."""

from __future__ import annotations

import logging
import math
import random
from array import array
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List

import pygame

from .config import BASE_DIR, SFX_DIR, SFX_EXTENSIONS, SFX_VARIANTS

logger = logging.getLogger(__name__)

CUES: tuple[str, ...] = ("eat", "crash")


# ===========================
#  Synth Configuration
# ===========================


@dataclass(frozen=True)
class SynthPatch:
    freq: float
    duration_ms: int
    gain: float
    attack_ms: float = 10.0
    floor: float = 0.0001
    waveform: str = "square"  # "square" or "sine"


# Always layered under whatever sample plays.
BEEPS: Dict[str, SynthPatch] = {
    "eat": SynthPatch(freq=880, duration_ms=60, gain=0.03),
    "crash": SynthPatch(freq=180, duration_ms=180, gain=0.04),
}


def candidate_paths(directory: Path, cue: str) -> Iterator[Path]:
    """Yield ``cue``, ``cue1`` .. ``cueN`` in every supported extension."""
    bases = [cue] + [f"{cue}{idx}" for idx in range(1, SFX_VARIANTS + 1)]
    for base in bases:
        for ext in SFX_EXTENSIONS:
            yield directory / f"{base}.{ext}"


def pick_index(
    pool_size: int, last_index: int, last_count: int, rng: random.Random
) -> int:
    """Random pool index that never plays the same sample three times running."""
    while True:
        idx = rng.randrange(max(1, pool_size))
        if pool_size > 1 and last_count >= 2 and idx == last_index:
            continue
        return idx


@dataclass
class SamplePool:
    sounds: List[pygame.mixer.Sound] = field(default_factory=list)
    last_index: int = -1
    last_count: int = 0

    def __len__(self) -> int:
        return len(self.sounds)

    def pick(self, rng: random.Random) -> pygame.mixer.Sound | None:
        if not self.sounds:
            return None
        idx = pick_index(len(self.sounds), self.last_index, self.last_count, rng)
        if idx == self.last_index:
            self.last_count += 1
        else:
            self.last_index = idx
            self.last_count = 1
        return self.sounds[idx]


# ===========================
#   Audio Engine
# ===========================


class AudioEngine:
    """Encapsulates mixer init plus pooled sample playback with beep layering."""

    def __init__(
        self,
        sfx_dir: Path = SFX_DIR,
        fallback_dir: Path = BASE_DIR / "sfx",
        rng: random.Random | None = None,
    ) -> None:
        self.enabled = False
        self.sample_rate: int = 32000
        self.volume: float = 0.95
        self.rng = rng or random.Random()
        self.pools: Dict[str, SamplePool] = {}
        self.fallbacks: Dict[str, pygame.mixer.Sound] = {}
        self.beeps: Dict[str, pygame.mixer.Sound] = {}

        self._init_audio(sfx_dir, fallback_dir)

    def _init_audio(self, sfx_dir: Path, fallback_dir: Path) -> None:
        """Initialise pygame.mixer, load sample pools and synthesise the beeps."""

        try:
            pygame.mixer.init(frequency=self.sample_rate, size=-16, channels=1)
        except pygame.error as exc:
            logger.warning("audio disabled: %s", exc)
            self.enabled = False
            return

        self.enabled = True
        mixer_info = pygame.mixer.get_init()
        if mixer_info:
            self.sample_rate = mixer_info[0]

        for cue in CUES:
            self.pools[cue] = SamplePool(self._load_all(candidate_paths(sfx_dir, cue)))
            fallback = self._load_first(
                fallback_dir / f"{cue}.{ext}" for ext in SFX_EXTENSIONS
            )
            if fallback is not None:
                self.fallbacks[cue] = fallback
            logger.info(
                "%s: %d pooled samples, fallback %s",
                cue,
                len(self.pools[cue]),
                "yes" if fallback is not None else "no",
            )
        for cue, patch in BEEPS.items():
            self.beeps[cue] = self._render_patch(patch)

    def _load(self, path: Path) -> pygame.mixer.Sound | None:
        if not path.is_file():
            return None
        try:
            return pygame.mixer.Sound(str(path))
        except (pygame.error, OSError) as exc:
            logger.debug("skipping %s: %s", path, exc)
            return None

    def _load_all(self, paths: Iterator[Path]) -> List[pygame.mixer.Sound]:
        sounds = []
        for path in paths:
            sound = self._load(path)
            if sound is not None:
                sounds.append(sound)
        return sounds

    def _load_first(self, paths: Iterator[Path]) -> pygame.mixer.Sound | None:
        for path in paths:
            sound = self._load(path)
            if sound is not None:
                return sound
        return None

    # ===========================
    #   Synthesizer Core
    # ===========================

    def _render_patch(self, patch: SynthPatch) -> pygame.mixer.Sound:
        """Square-wave blip with an exponential rise and decay."""

        sample_rate = self.sample_rate
        sample_count = max(1, int(sample_rate * patch.duration_ms / 1000))
        attack = max(1, int(sample_rate * patch.attack_ms / 1000))
        two_pi = 2.0 * math.pi

        samples = array("h")
        for idx in range(sample_count):
            t = idx / sample_rate
            if idx < attack:
                env = patch.floor * (patch.gain / patch.floor) ** (idx / attack)
            else:
                tail = (idx - attack) / max(1, sample_count - attack)
                env = patch.gain * (patch.floor / patch.gain) ** tail

            if patch.waveform == "square":
                wave = 1.0 if (patch.freq * t) % 1.0 < 0.5 else -1.0
            else:
                wave = math.sin(two_pi * patch.freq * t)
            samples.append(int(max(-32767, min(32767, wave * env * 32767))))
        return pygame.mixer.Sound(buffer=samples)

    # ===========================
    #   Public API
    # ===========================

    def _start(self, sound: pygame.mixer.Sound) -> bool:
        channel = sound.play()
        if channel is None:
            return False
        channel.set_volume(self.volume)
        return True

    def play(self, cue: str) -> None:
        """Play a pooled sample (or the fallback file) and layer the cue's beep."""
        if not self.enabled:
            return
        try:
            played = False
            pool = self.pools.get(cue)
            sound = pool.pick(self.rng) if pool else None
            if sound is not None:
                played = self._start(sound)
            if not played and cue in self.fallbacks:
                self._start(self.fallbacks[cue])
            beep = self.beeps.get(cue)
            if beep is not None:
                beep.play()
        except pygame.error as exc:
            logger.warning("audio playback failed, muting: %s", exc)
            self.enabled = False
