"""
Triangle sources.

The contour engine only needs ``triangles(grid)`` and, per triangle,
``intersect_at(level)``. Two sources are provided: a regular split of every
grid cell and a Delaunay triangulation of the sample cloud.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from scipy.spatial import Delaunay, QhullError

from contours.geometry import Point, points_equal
from shared.constants import (
    EPSILON,
    MIN_DELAUNAY_POINTS,
    MIN_GRID_SIZE,
    Diagonal,
    Triangulation,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from contours.grid import ScalarGrid

logger = logging.getLogger(__name__)

Vertex = tuple[float, float, float]


def _edge_point(u: Vertex, w: Vertex, level: float) -> Point:
    # Both triangles sharing an edge must compute the exact same point
    if (w[0], w[1]) < (u[0], u[1]):
        u, w = w, u
    t = (level - u[2]) / (w[2] - u[2])
    return Point(u[0] + (w[0] - u[0]) * t, u[1] + (w[1] - u[1]) * t)


class Triangle:
    """Three ``(x, y, value)`` vertices with a linear surface between them."""

    __slots__ = ('vertices',)

    def __init__(self, p0: Vertex, p1: Vertex, p2: Vertex) -> None:
        self.vertices: tuple[Vertex, Vertex, Vertex] = (
            (float(p0[0]), float(p0[1]), float(p0[2])),
            (float(p1[0]), float(p1[1]), float(p1[2])),
            (float(p2[0]), float(p2[1]), float(p2[2])),
        )

    def __repr__(self) -> str:
        return f'Triangle{self.vertices!r}'

    def gradient(self) -> tuple[float, float] | None:
        """Gradient of the linear surface, None for a zero-area triangle."""
        (x0, y0, v0), (x1, y1, v1), (x2, y2, v2) = self.vertices
        ax, ay, av = x1 - x0, y1 - y0, v1 - v0
        bx, by, bv = x2 - x0, y2 - y0, v2 - v0
        nz = ax * by - ay * bx
        if nz == 0:
            return None
        nx = ay * bv - av * by
        ny = av * bx - ax * bv
        return -nx / nz, -ny / nz

    def intersect_at(self, level: float) -> tuple[Point, Point] | None:
        """
        Crossing segment of the surface with ``level``.

        Vertices with ``value >= level`` count as above. The segment is oriented
        so that higher values lie to its right (y pointing up).
        """
        above = [v[2] >= level for v in self.vertices]
        n_above = sum(above)
        if n_above in (0, 3):
            return None
        lone = above.index(n_above == 1)
        others = [i for i in range(3) if i != lone]
        a = _edge_point(self.vertices[lone], self.vertices[others[0]], level)
        b = _edge_point(self.vertices[lone], self.vertices[others[1]], level)
        if points_equal(a, b, EPSILON):
            return None
        grad = self.gradient()
        if grad is None:
            return None
        dx, dy = b.x - a.x, b.y - a.y
        if dx * grad[1] - dy * grad[0] > 0:
            a, b = b, a
        return a, b


class TriangleSource(Protocol):
    def triangles(self, grid: ScalarGrid) -> Iterable[Triangle]: ...


class GridTriangleSource:
    """Splits every grid cell into two triangles along one diagonal."""

    def __init__(self, diagonal: Diagonal | str = Diagonal.MAIN) -> None:
        self.diagonal = Diagonal(diagonal)

    def triangles(self, grid: ScalarGrid) -> list[Triangle]:
        if grid.is_scattered:
            msg = 'Scattered samples need a Delaunay triangulation'
            raise ValueError(msg)
        n_rows, n_cols = grid.shape
        if n_rows < MIN_GRID_SIZE or n_cols < MIN_GRID_SIZE:
            return []

        xs = grid.xs.tolist()
        ys = grid.ys.tolist()
        values = grid.values.tolist()
        out: list[Triangle] = []
        for j in range(n_rows - 1):
            row0 = values[j]
            row1 = values[j + 1]
            for i in range(n_cols - 1):
                v00 = (xs[i], ys[j], row0[i])
                v10 = (xs[i + 1], ys[j], row0[i + 1])
                v11 = (xs[i + 1], ys[j + 1], row1[i + 1])
                v01 = (xs[i], ys[j + 1], row1[i])
                if self.diagonal is Diagonal.MAIN:
                    out.append(Triangle(v00, v10, v11))
                    out.append(Triangle(v00, v11, v01))
                else:
                    out.append(Triangle(v00, v10, v01))
                    out.append(Triangle(v10, v11, v01))
        return out


class DelaunayTriangleSource:
    """Delaunay triangulation of the sample positions (grid or scattered)."""

    def triangles(self, grid: ScalarGrid) -> list[Triangle]:
        pts = grid.points()
        if len(pts) < MIN_DELAUNAY_POINTS:
            return []
        try:
            tri = Delaunay(pts[:, :2])
        except QhullError as e:
            logger.warning('Delaunay triangulation failed: %s', e)
            return []
        rows = pts.tolist()
        return [
            Triangle(rows[i0], rows[i1], rows[i2])
            for i0, i1, i2 in tri.simplices.tolist()
        ]


def make_source(
    triangulation: Triangulation | str = Triangulation.GRID,
    diagonal: Diagonal | str = Diagonal.MAIN,
) -> TriangleSource:
    if Triangulation(triangulation) is Triangulation.DELAUNAY:
        return DelaunayTriangleSource()
    return GridTriangleSource(diagonal)
