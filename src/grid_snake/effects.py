"""Shared visual effect helpers for Grid Snake."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import pygame

from .config import FLASH_MS


@dataclass(slots=True)
class Flash:
    color: tuple[int, int, int]
    timer: float
    duration: float


@dataclass(slots=True)
class MatrixTitle:
    """Game-over heading whose letters drop in one after another."""

    text: str
    age: float = 0.0
    letter_delay: float = 0.07
    drop_time: float = 0.35
    drop_height: float = 24.0


def start_flash(
    flashes: list[Flash], color: pygame.Color, *, duration: float = FLASH_MS / 1000
) -> None:
    """Restart the border flash for ``color`` from full strength."""

    rgb = (color.r, color.g, color.b)
    flashes[:] = [flash for flash in flashes if flash.color != rgb]
    flashes.append(Flash(color=rgb, timer=duration, duration=duration))


def update_flashes(flashes: list[Flash], dt: float) -> list[Flash]:
    if dt <= 0:
        return flashes
    for flash in flashes:
        flash.timer = max(0.0, flash.timer - dt)
    return [flash for flash in flashes if flash.timer > 0]


def draw_flashes(
    surface: pygame.Surface, flashes: Iterable[Flash], rect: pygame.Rect, width: int = 6
) -> None:
    """Pulse a tinted frame around ``rect``; strength follows the remaining time."""

    for flash in flashes:
        if flash.duration <= 0:
            continue
        strength = flash.timer / flash.duration
        overlay = pygame.Surface(rect.size, pygame.SRCALPHA)
        tint = pygame.Color(*flash.color)
        tint.a = int(200 * strength)
        pygame.draw.rect(overlay, tint, overlay.get_rect(), width=width, border_radius=4)
        surface.blit(overlay, rect.topleft)


def update_title(title: MatrixTitle, dt: float) -> None:
    if dt > 0:
        title.age += dt


def title_letter_states(title: MatrixTitle) -> list[tuple[str, float, int]]:
    """Return ``(char, y_offset, alpha)`` per letter at the title's current age."""

    states = []
    for idx, char in enumerate(title.text):
        local = title.age - idx * title.letter_delay
        progress = max(0.0, min(1.0, local / title.drop_time)) if title.drop_time else 1.0
        eased = 1.0 - (1.0 - progress) ** 2
        states.append((char, -title.drop_height * (1.0 - eased), int(255 * progress)))
    return states


def draw_matrix_title(
    surface: pygame.Surface,
    font: pygame.font.Font,
    title: MatrixTitle,
    center: tuple[int, int],
    color: pygame.Color,
) -> None:
    """Render the title letter by letter so each can fall on its own schedule."""

    glyphs = [font.render(char, True, color) for char in title.text]
    total_width = sum(glyph.get_width() for glyph in glyphs)
    x = center[0] - total_width // 2
    for glyph, (_, offset, alpha) in zip(glyphs, title_letter_states(title)):
        if alpha > 0:
            glyph.set_alpha(alpha)
            rect = glyph.get_rect(midleft=(x, int(center[1] + offset)))
            surface.blit(glyph, rect)
        x += glyph.get_width()
