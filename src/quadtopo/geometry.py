"""Geometry helper functions used across the package."""

from __future__ import annotations

import math
from typing import Sequence

from .models import Point, Vertex


def direction_angle(origin: Vertex, dest: Vertex) -> float:
    """Polar angle of the vector origin → dest, in radians within (-pi, pi]."""
    return math.atan2(dest.y - origin.y, dest.x - origin.x)


def polygon_signed_area(polygon: Sequence[Point]) -> float:
    """Signed area of *polygon* via the shoelace formula.

    Positive when the points wind counter-clockwise, negative when
    clockwise.  Fewer than three points give 0.0.
    """
    n = len(polygon)
    if n < 3:
        return 0.0
    area = 0.0
    for i in range(n):
        x1, y1 = polygon[i]
        x2, y2 = polygon[(i + 1) % n]
        area += x1 * y2 - x2 * y1
    return area / 2.0


def polygon_area(polygon: Sequence[Point]) -> float:
    return abs(polygon_signed_area(polygon))


def segments_intersect(a1: Point, a2: Point, b1: Point, b2: Point) -> bool:
    """True if closed segments a1-a2 and b1-b2 touch or cross."""

    def orient(p: Point, q: Point, r: Point) -> float:
        return (q[0] - p[0]) * (r[1] - p[1]) - (q[1] - p[1]) * (r[0] - p[0])

    def on_segment(p: Point, q: Point, r: Point) -> bool:
        return (
            min(p[0], r[0]) <= q[0] <= max(p[0], r[0])
            and min(p[1], r[1]) <= q[1] <= max(p[1], r[1])
        )

    o1 = orient(a1, a2, b1)
    o2 = orient(a1, a2, b2)
    o3 = orient(b1, b2, a1)
    o4 = orient(b1, b2, a2)

    if o1 == 0 and on_segment(a1, b1, a2):
        return True
    if o2 == 0 and on_segment(a1, b2, a2):
        return True
    if o3 == 0 and on_segment(b1, a1, b2):
        return True
    if o4 == 0 and on_segment(b1, a2, b2):
        return True

    return (o1 > 0) != (o2 > 0) and (o3 > 0) != (o4 > 0)
