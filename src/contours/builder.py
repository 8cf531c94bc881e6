"""
Contour extraction over a triangulated grid.

For every level each triangle reports its crossing segment, the segments are
stitched into chains, and chains left open at the grid boundary are closed
along the bounding rectangle. Levels are independent and may run in parallel.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from contours.boundary import close_open_chains
from contours.chains import ContourBuilder
from contours.geometry import Point
from contours.grid import ScalarGrid
from contours.triangles import GridTriangleSource
from shared.constants import CONTOUR_PARALLEL_WORKERS, EPSILON
from shared.progress import ConsoleProgress

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contours.geometry import BoundingBox
    from contours.triangles import Triangle, TriangleSource

logger = logging.getLogger(__name__)

SEGMENT_POINTS = 2


@dataclass
class Contour:
    """One closed polyline at one level; first and last points coincide."""

    level_index: int
    level: float
    points: list[Point] = field(default_factory=list)
    closed: bool = True


def _build_level(
    cb: ContourBuilder,
    triangles: Sequence[Triangle],
    level_index: int,
    bbox: BoundingBox,
) -> list[Contour]:
    level = cb.level
    segments = 0
    skipped = 0
    for tri in triangles:
        seg = tri.intersect_at(level)
        if not seg or len(seg) < SEGMENT_POINTS:
            continue
        a, b = Point(seg[0][0], seg[0][1]), Point(seg[1][0], seg[1][1])
        # A segment along the outer edge encloses nothing: both its vertices
        # sit exactly on the level
        if bbox.shares_edge(a, b, cb.epsilon):
            skipped += 1
            continue
        cb.add_segment(a, b)
        segments += 1
    if skipped:
        logger.debug(
            'Level #%d (%g): skipped %d segments on the grid edge',
            level_index,
            level,
            skipped,
        )

    closed = cb.closed_polylines()
    unclosed = cb.open_polylines()
    polygons = close_open_chains(unclosed, bbox, cb.epsilon)
    logger.debug(
        'Level #%d (%g): %d segments, %d loops, %d open chains -> %d polygons',
        level_index,
        level,
        segments,
        len(closed),
        len(unclosed),
        len(polygons),
    )
    return [Contour(level_index, level, pts) for pts in (*closed, *polygons)]


def build_contours(
    grid: ScalarGrid | Any,
    levels: Sequence[float],
    *,
    source: TriangleSource | None = None,
    epsilon: float = EPSILON,
    workers: int = CONTOUR_PARALLEL_WORKERS,
    progress: bool = False,
) -> list[Contour]:
    """
    Build closed contour polylines for every level.

    Args:
        grid: ScalarGrid or a 2D row-major array of samples.
        levels: Contour levels; the index in this list is the level key.
        source: Triangle source, regular cell split by default.
        epsilon: Squared-distance tolerance for coincident points.
        workers: Upper bound on threads used to process levels.
        progress: Show a console progress bar, one step per level.

    Returns:
        Contours sorted by level index.

    """
    grid = ScalarGrid.coerce(grid)
    level_values = [float(v) for v in levels]
    if not level_values or grid.is_empty:
        return []

    src = source if source is not None else GridTriangleSource()
    triangles = list(src.triangles(grid))
    if not triangles:
        logger.info('No triangles for grid of shape %s', grid.shape)
        return []
    bbox = grid.bbox

    bar = (
        ConsoleProgress(total=len(level_values), label='Contours')
        if progress
        else None
    )

    # One bucket per level, indexed by level index
    buckets = [ContourBuilder(level, epsilon) for level in level_values]

    def process_level(li: int) -> list[Contour]:
        result = _build_level(buckets[li], triangles, li, bbox)
        if bar is not None:
            bar.step()
        return result

    num_workers = min(
        max(1, workers), max(1, os.cpu_count() or 1), len(level_values)
    )
    if num_workers > 1:
        with ThreadPoolExecutor(max_workers=num_workers) as executor:
            per_level = list(executor.map(process_level, range(len(buckets))))
    else:
        per_level = [process_level(li) for li in range(len(buckets))]
    if bar is not None:
        bar.close()

    contours = [c for level_contours in per_level for c in level_contours]
    contours.sort(key=lambda c: c.level_index)
    logger.info(
        'Built %d contours for %d levels from %d triangles (workers=%d)',
        len(contours),
        len(level_values),
        len(triangles),
        num_workers,
    )
    return contours


def contours_by_level(
    grid: ScalarGrid | Any,
    levels: Sequence[float],
    **kwargs: Any,
) -> dict[int, list[list[Point]]]:
    """Mapping level_index -> list of polylines, with empty lists kept."""
    result: dict[int, list[list[Point]]] = {li: [] for li in range(len(levels))}
    for contour in build_contours(grid, levels, **kwargs):
        result[contour.level_index].append(contour.points)
    return result
