from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .config import Settings
from .geometry import Point, average, farthest_point, square_distance
from .locator import locate_points
from .snapshot import ImageData

LOGGER = logging.getLogger(__name__)

TipPair = Tuple[Point, Point]


@dataclass
class SaberDetection:
    points: List[Point] = field(default_factory=list)
    center: Optional[Point] = None
    tips: Optional[TipPair] = None
    frame_ts: float = 0.0


def compute_center(points: Sequence[Point]) -> Optional[Point]:
    if not points:
        return None
    return average(points)


def compute_tips(center: Optional[Point], points: Sequence[Point]) -> Optional[TipPair]:
    """Schätze die beiden Enden der Farbregion.

    Erstes Ende = weitester Punkt vom Schwerpunkt, zweites Ende = weitester
    Punkt vom ersten Ende. Das ist nur eine Näherung des Durchmessers.
    Index 0 ist danach immer das untere Ende (y >= Schwerpunkt).
    """

    if center is None:
        return None
    first = farthest_point(center, points)
    second = farthest_point(first, points)
    if first[1] - center[1] < 0:
        first, second = second, first
    return first, second


def stabilize_tips(
    points: Sequence[Point],
    tips: Optional[TipPair],
    iterations: int = 1,
) -> Optional[TipPair]:
    """Ordne alle Punkte dem näheren Ende zu und mittle jede Gruppe.

    Entspricht Schritten von 2-Means, gestartet mit den Rohenden. Bleibt eine
    Gruppe leer (z. B. bei nur einem Treffer), gibt es keine Klinge.
    """

    if tips is None:
        return None
    for _ in range(iterations):
        bottom_set: List[Point] = []
        top_set: List[Point] = []
        for point in points:
            if square_distance(tips[0], point) < square_distance(tips[1], point):
                bottom_set.append(point)
            else:
                top_set.append(point)
        if not bottom_set or not top_set:
            return None
        bottom = average(bottom_set)
        top = average(top_set)
        if (bottom, top) == tips:
            break
        tips = (bottom, top)
    return tips


class SaberTracker:
    def __init__(self, settings: Settings):
        self.settings = settings

    def process(self, image: ImageData) -> SaberDetection:
        profile = self.settings.tracking
        points = locate_points(image.data, image.width, profile.target_color, profile.threshold)
        center = compute_center(points)
        tips = compute_tips(center, points)
        tips = stabilize_tips(points, tips, profile.stabilize_iterations)
        LOGGER.debug("Treffer=%s Zentrum=%s Enden=%s", len(points), center, tips)
        return SaberDetection(points=points, center=center, tips=tips, frame_ts=time.time())
