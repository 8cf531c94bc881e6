"""Closing of open chains along the grid's bounding rectangle."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from shared.constants import EPSILON, PERIMETER_EDGES

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contours.geometry import BoundingBox, Point

logger = logging.getLogger(__name__)


def corners_between(
    bbox: BoundingBox,
    exit_code: tuple[int, float],
    entry_code: tuple[int, float],
) -> list[Point]:
    """
    Corners passed when walking clockwise from ``exit_code`` to ``entry_code``.

    An entry behind the exit on the same edge means a full turn around the
    rectangle, so all four corners are returned.
    """
    edge, coord = exit_code
    target, target_coord = entry_code
    if target < edge or (target == edge and target_coord < coord):
        target += PERIMETER_EDGES
    return [bbox.corner(m) for m in range(edge + 1, target + 1)]


def _next_entry(
    exit_code: tuple[int, float],
    heads: list[tuple[int, float]],
    candidates: list[int],
) -> int:
    # A head at the exit point itself is reached without any corners
    ahead = [i for i in candidates if heads[i] >= exit_code]
    pool = ahead or candidates
    return min(pool, key=lambda i: (heads[i], i))


def close_open_chains(
    chains: Sequence[Sequence[Point]],
    bbox: BoundingBox,
    epsilon: float = EPSILON,
) -> list[list[Point]]:
    """
    Stitch open chains into closed polygons running along the boundary.

    Chains are ordered by the perimeter code of their first point. From each
    chain's last point the walk goes clockwise to the nearest first point of a
    chain not used yet, or back to the chain the polygon started with, which
    closes that polygon. Each polygon starts and ends with the same point.
    """
    if not chains:
        return []

    ordered = sorted(chains, key=lambda c: bbox.perimeter_code(c[0], epsilon))
    heads = [bbox.perimeter_code(c[0], epsilon) for c in ordered]
    tails = [bbox.perimeter_code(c[-1], epsilon) for c in ordered]
    used = [False] * len(ordered)

    polygons: list[list[Point]] = []
    for start in range(len(ordered)):
        if used[start]:
            continue
        used[start] = True
        loop = [start]
        links: list[list[Point]] = []
        current = start
        while True:
            candidates = [
                i for i in range(len(ordered)) if not used[i] or i == start
            ]
            nxt = _next_entry(tails[current], heads, candidates)
            links.append(corners_between(bbox, tails[current], heads[nxt]))
            if nxt == start:
                break
            used[nxt] = True
            loop.append(nxt)
            current = nxt

        polygon: list[Point] = [ordered[loop[-1]][-1], *links[-1]]
        for k, ci in enumerate(loop):
            polygon.extend(ordered[ci])
            if k < len(loop) - 1:
                polygon.extend(links[k])
        polygons.append(polygon)

    logger.debug(
        'Closed %d open chains into %d boundary polygons',
        len(ordered),
        len(polygons),
    )
    return polygons
