from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from shared.constants import DEFAULT_PERIMETER_CODE, EPSILON, PERIMETER_EDGES

EDGE_LEFT = 0
EDGE_TOP = 1
EDGE_RIGHT = 2
EDGE_BOTTOM = 3


class Point(NamedTuple):
    x: float
    y: float


def points_equal(a: Point, b: Point, epsilon: float = EPSILON) -> bool:
    """Coincidence test: squared distance below ``epsilon``. NaN never matches."""
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy < epsilon


def close_enough(a: float, b: float, epsilon: float = EPSILON) -> bool:
    d = a - b
    return d * d < epsilon


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned grid extent. ``maxy`` is the top edge (y grows upwards)."""

    minx: float
    miny: float
    maxx: float
    maxy: float

    def perimeter_code(
        self, p: Point, epsilon: float = EPSILON
    ) -> tuple[int, float]:
        """
        Clockwise position of a boundary point as ``(edge, coordinate)``.

        Edges are tested left, top, right, bottom in that order. A point on no
        edge gets ``(0, 0)`` and sorts to the start of the perimeter.
        """
        x, y = p[0], p[1]
        if close_enough(x, self.minx, epsilon):
            return EDGE_LEFT, y
        if close_enough(y, self.maxy, epsilon):
            return EDGE_TOP, x
        if close_enough(x, self.maxx, epsilon):
            return EDGE_RIGHT, -y
        if close_enough(y, self.miny, epsilon):
            return EDGE_BOTTOM, -x
        return DEFAULT_PERIMETER_CODE

    def shares_edge(self, a: Point, b: Point, epsilon: float = EPSILON) -> bool:
        """True when both points lie on one side of the rectangle."""
        sides = (
            (0, self.minx),
            (1, self.maxy),
            (0, self.maxx),
            (1, self.miny),
        )
        return any(
            close_enough(a[axis], bound, epsilon)
            and close_enough(b[axis], bound, epsilon)
            for axis, bound in sides
        )

    def corner(self, edge: int) -> Point:
        """Corner where a clockwise walk enters ``edge`` (taken modulo 4)."""
        m = edge % PERIMETER_EDGES
        x = self.minx if m in (EDGE_LEFT, EDGE_TOP) else self.maxx
        y = self.miny if m in (EDGE_LEFT, EDGE_BOTTOM) else self.maxy
        return Point(x, y)
