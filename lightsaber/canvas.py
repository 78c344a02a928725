from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import cv2
import numpy as np
import pygame

from .geometry import Color
from .snapshot import ImageData

LOGGER = logging.getLogger(__name__)

LINE_CAPS = ("butt", "round", "square")
MAX_THICKNESS = 32767


@dataclass
class StrokeStyle:
    width: float = 1.0
    cap: str = "butt"
    color: Color = (0, 0, 0)
    shadow_blur: float = 0.0
    shadow_color: Optional[Color] = None

    def __post_init__(self) -> None:
        if self.cap not in LINE_CAPS:
            raise ValueError(f"Unbekanntes Linienende: {self.cap}")


class Canvas:
    """RGBA-Zeichenfläche auf Basis eines numpy-Arrays."""

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Ungültige Canvas-Größe {width}x{height}")
        self.buffer = np.zeros((height, width, 4), dtype=np.uint8)

    @property
    def width(self) -> int:
        return self.buffer.shape[1]

    @property
    def height(self) -> int:
        return self.buffer.shape[0]

    def get_size(self) -> Tuple[int, int]:
        return self.width, self.height

    def clear_rect(self, x: int, y: int, w: int, h: int) -> None:
        region = self._clip(x, y, w, h)
        if region is None:
            return
        x0, y0, x1, y1 = region
        self.buffer[y0:y1, x0:x1] = 0

    def clear(self) -> None:
        self.clear_rect(0, 0, self.width, self.height)

    def draw_image(self, frame_bgr: np.ndarray, x: int = 0, y: int = 0) -> None:
        rgba = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGBA)
        region = self._clip(x, y, rgba.shape[1], rgba.shape[0])
        if region is None:
            return
        x0, y0, x1, y1 = region
        self.buffer[y0:y1, x0:x1] = rgba[y0 - y:y1 - y, x0 - x:x1 - x]

    def stroke_line(
        self,
        start: Sequence[float],
        end: Sequence[float],
        style: StrokeStyle,
    ) -> None:
        mask = self._stroke_mask(start, end, style)
        if style.shadow_blur > 0 and style.shadow_color is not None:
            # Sigma wie beim HTML-Canvas: shadowBlur / 2
            shadow = cv2.GaussianBlur(mask, (0, 0), sigmaX=style.shadow_blur / 2)
            self._composite(shadow, style.shadow_color)
        self._composite(mask, style.color)

    def get_image_data(
        self,
        x: int = 0,
        y: int = 0,
        w: Optional[int] = None,
        h: Optional[int] = None,
    ) -> ImageData:
        w = self.width - x if w is None else w
        h = self.height - y if h is None else h
        out = np.zeros((h, w, 4), dtype=np.uint8)
        region = self._clip(x, y, w, h)
        if region is not None:
            x0, y0, x1, y1 = region
            out[y0 - y:y1 - y, x0 - x:x1 - x] = self.buffer[y0:y1, x0:x1]
        return ImageData.from_rgba(out)

    def to_surface(self) -> pygame.Surface:
        return pygame.image.frombuffer(self.buffer.tobytes(), (self.width, self.height), "RGBA")

    def _clip(self, x: int, y: int, w: int, h: int) -> Optional[Tuple[int, int, int, int]]:
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + w, self.width), min(y + h, self.height)
        if x0 >= x1 or y0 >= y1:
            return None
        return x0, y0, x1, y1

    def _stroke_mask(self, start: Sequence[float], end: Sequence[float], style: StrokeStyle) -> np.ndarray:
        mask = np.zeros((self.height, self.width), dtype=np.uint8)
        thickness = min(max(1, int(round(style.width))), MAX_THICKNESS)
        sx, sy = float(start[0]), float(start[1])
        ex, ey = float(end[0]), float(end[1])

        if style.cap == "round":
            cv2.line(mask, (round(sx), round(sy)), (round(ex), round(ey)), 255, thickness, cv2.LINE_AA)
            return mask

        length = math.hypot(ex - sx, ey - sy)
        if length == 0:
            return mask
        ux, uy = (ex - sx) / length, (ey - sy) / length
        half = thickness / 2
        if style.cap == "square":
            sx, sy = sx - ux * half, sy - uy * half
            ex, ey = ex + ux * half, ey + uy * half
        nx, ny = -uy * half, ux * half
        corners = np.array(
            [
                (sx + nx, sy + ny),
                (ex + nx, ey + ny),
                (ex - nx, ey - ny),
                (sx - nx, sy - ny),
            ]
        )
        cv2.fillConvexPoly(mask, np.round(corners).astype(np.int32), 255, cv2.LINE_AA)
        return mask

    def _composite(self, coverage: np.ndarray, color: Color) -> None:
        alpha = coverage.astype(np.float32)[..., None] / 255.0
        if not alpha.any():
            return
        rgb = self.buffer[..., :3].astype(np.float32)
        rgb = rgb * (1.0 - alpha) + np.array(color, dtype=np.float32) * alpha
        dst_alpha = self.buffer[..., 3:].astype(np.float32) / 255.0
        out_alpha = alpha + dst_alpha * (1.0 - alpha)
        self.buffer[..., :3] = np.clip(np.round(rgb), 0, 255).astype(np.uint8)
        self.buffer[..., 3:] = np.clip(np.round(out_alpha * 255.0), 0, 255).astype(np.uint8)
