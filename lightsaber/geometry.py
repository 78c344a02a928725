from __future__ import annotations

import math
from typing import Sequence, Tuple

Point = Tuple[int, int]
Color = Tuple[int, int, int]


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def vector_lerp(va: Sequence[float], vb: Sequence[float], t: float) -> Tuple[float, ...]:
    return tuple(lerp(a, b, t) for a, b in zip(va, vb))


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def square_distance(origin: Sequence[float], target: Sequence[float]) -> float:
    """Quadrierte euklidische Distanz, funktioniert für Punkte und Farben."""

    total = 0
    for o, t in zip(origin, target):
        total += (t - o) ** 2
    return total


def average(points: Sequence[Point]) -> Point:
    """Schwerpunkt einer Punktmenge, beide Achsen abgerundet."""

    if not points:
        raise ValueError("Schwerpunkt einer leeren Punktmenge ist undefiniert")
    x_sum = 0
    y_sum = 0
    for x, y in points:
        x_sum += x
        y_sum += y
    return math.floor(x_sum / len(points)), math.floor(y_sum / len(points))


def farthest_point(origin: Sequence[float], points: Sequence[Point]) -> Point:
    """Punkt mit größter Distanz zu ``origin``.

    Bei Gleichstand gewinnt das erste Vorkommen.
    """

    if not points:
        raise ValueError("Keine Punkte für die Suche vorhanden")
    farthest = points[0]
    max_distance = square_distance(origin, farthest)
    for point in points[1:]:
        distance = square_distance(origin, point)
        if distance > max_distance:
            max_distance = distance
            farthest = point
    return farthest
