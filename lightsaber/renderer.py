from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .canvas import Canvas, StrokeStyle
from .config import BeamStyle
from .geometry import clamp, square_distance, vector_lerp
from .tracking import TipPair

LOGGER = logging.getLogger(__name__)


@dataclass
class BeamGeometry:
    start: Tuple[float, float]
    end: Tuple[float, float]
    square_distance: float
    width: float
    blur: float
    t: float


def compute_beam(tips: Optional[TipPair], style: BeamStyle) -> Optional[BeamGeometry]:
    """Geometrie der Klinge vom unteren Ende aus.

    Breite und Glühen wachsen mit der quadrierten Distanz der Enden. Der
    Faktor ``t`` liegt in [tip_min, tip_max] und wird als Lerp-Faktor
    verwendet, der Endpunkt liegt damit weit hinter ``tips[1]``.
    """

    if not tips:
        return None
    start, tip = tips
    distance = square_distance(start, tip)
    t = clamp(distance * style.tip_factor, style.tip_min, style.tip_max)
    end = vector_lerp(start, tip, t)
    return BeamGeometry(
        start=(start[0], start[1]),
        end=(end[0], end[1]),
        square_distance=distance,
        width=distance * style.width_factor,
        blur=distance * style.blur_factor,
        t=t,
    )


def draw_lightsaber(canvas: Canvas, tips: Optional[TipPair], style: BeamStyle) -> Optional[BeamGeometry]:
    beam = compute_beam(tips, style)
    if beam is None:
        return None
    stroke = StrokeStyle(
        width=beam.width,
        cap="round",
        color=style.color,
        shadow_blur=beam.blur,
        shadow_color=style.color,
    )
    canvas.stroke_line(beam.start, beam.end, stroke)
    return beam
