from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .geometry import Color, Point, square_distance


def is_color_match(reference: Sequence[int], candidate: Sequence[int], threshold: float) -> bool:
    return square_distance(reference, candidate) < threshold


def locate_points(data: np.ndarray, width: int, reference: Color, threshold: float) -> List[Point]:
    """Alle Pixel eines RGBA-Puffers, deren Farbe zur Referenz passt.

    Der Puffer wird zeilenweise vollständig ausgewertet, der Alphakanal
    bleibt unberücksichtigt. Die Reihenfolge entspricht der Scan-Reihenfolge.
    """

    if width <= 0:
        raise ValueError(f"Ungültige Bildbreite: {width}")
    pixels = np.asarray(data, dtype=np.uint8).reshape(-1, 4)[:, :3].astype(np.int32)
    diff = pixels - np.asarray(reference, dtype=np.int32)
    distances = (diff * diff).sum(axis=1)
    indices = np.flatnonzero(distances < threshold)
    return [(int(index % width), int(index // width)) for index in indices]
