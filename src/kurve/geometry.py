"""Plane geometry used by trail collision checks."""

from __future__ import annotations

import math

from .utils import Point, Segment


def distance(a: Point, b: Point) -> float:
    """Return the Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def segments_intersect(first: Segment, second: Segment) -> bool:
    """Return whether two finite segments cross.

    Both segments are extended to lines ``a*x + b*y = c`` and the crossing
    point is solved with Cramer's rule. Parallel and coincident lines have a
    zero determinant and never count as intersecting, even when collinear
    segments overlap. The crossing point must lie inside the bounding box of
    both segments, bounds included, so touching endpoints register.
    """
    (x1, y1), (x2, y2) = first
    (x3, y3), (x4, y4) = second

    a1 = y2 - y1
    b1 = x1 - x2
    c1 = a1 * x1 + b1 * y1

    a2 = y4 - y3
    b2 = x3 - x4
    c2 = a2 * x3 + b2 * y3

    det = a1 * b2 - a2 * b1
    if det == 0:
        return False

    x = (b2 * c1 - b1 * c2) / det
    y = (a1 * c2 - a2 * c1) / det
    return (
        min(x1, x2) <= x <= max(x1, x2)
        and min(y1, y2) <= y <= max(y1, y2)
        and min(x3, x4) <= x <= max(x3, x4)
        and min(y3, y4) <= y <= max(y3, y4)
    )
