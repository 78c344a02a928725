from __future__ import annotations

import logging
from typing import Optional

import pygame

from .constants import DEFAULT_FONT_SIZE
from .geometry import Color
from .tracking import SaberDetection

LOGGER = logging.getLogger(__name__)


def make_font(size: int) -> pygame.font.Font:
    return pygame.font.SysFont("Arial", size)


def debug_lines(detection: Optional[SaberDetection], fps: float, inspected: Optional[Color]) -> list[str]:
    return [
        f"FPS: {fps:.1f}",
        f"Treffer: {len(detection.points) if detection else 0}",
        f"Zentrum: {detection.center if detection else None}",
        f"Enden: {detection.tips if detection else None}",
        f"Pixel: {inspected}",
    ]


def render_debug_overlay(
    screen: pygame.Surface,
    detection: Optional[SaberDetection],
    fps: float,
    inspected: Optional[Color] = None,
) -> None:
    overlay = pygame.Surface((360, 150), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 160))
    font = make_font(DEFAULT_FONT_SIZE)
    for idx, line in enumerate(debug_lines(detection, fps, inspected)):
        txt = font.render(line, True, (255, 255, 255))
        overlay.blit(txt, (10, 8 + idx * 26))
    if inspected:
        pygame.draw.rect(overlay, inspected, pygame.Rect(320, 8, 30, 30))
    screen.blit(overlay, (15, 15))
