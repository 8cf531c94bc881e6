from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

from contours.geometry import BoundingBox

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

GRID_NDIM = 2


class ScalarGrid:
    """
    Rectangular grid of scalar samples.

    ``values[row][col]`` is row-major. Sample coordinates default to
    ``x = column index`` and ``y = row index``; explicit axes may be given as
    ``xs`` (one per column) and ``ys`` (one per row). A grid built from
    scattered points has no rows at all and can only be triangulated by
    Delaunay.
    """

    def __init__(
        self,
        values: Sequence[Sequence[float]] | np.ndarray,
        xs: Sequence[float] | np.ndarray | None = None,
        ys: Sequence[float] | np.ndarray | None = None,
    ) -> None:
        if isinstance(values, np.ndarray):
            arr = values.astype(np.float64)
        else:
            rows = [list(row) for row in values]
            widths = {len(row) for row in rows}
            if len(widths) > 1:
                msg = f'Ragged grid: row lengths {sorted(widths)}'
                raise ValueError(msg)
            arr = np.array(rows, dtype=np.float64)
        if arr.size == 0:
            arr = np.zeros((0, 0), dtype=np.float64)
        if arr.ndim != GRID_NDIM:
            msg = f'Grid must be two-dimensional, got {arr.ndim} dimensions'
            raise ValueError(msg)

        n_rows, n_cols = arr.shape
        self.values = arr
        self.xs = self._axis(xs, n_cols, 'xs')
        self.ys = self._axis(ys, n_rows, 'ys')
        self._scattered: np.ndarray | None = None

    @staticmethod
    def _axis(
        axis: Sequence[float] | np.ndarray | None, size: int, name: str
    ) -> np.ndarray:
        if axis is None:
            return np.arange(size, dtype=np.float64)
        out = np.asarray(axis, dtype=np.float64)
        if out.shape != (size,):
            msg = f'{name} must have {size} entries, got shape {out.shape}'
            raise ValueError(msg)
        return out

    @classmethod
    def from_rows(
        cls, rows: Sequence[Sequence[float]] | np.ndarray, **kw
    ) -> ScalarGrid:
        return cls(rows, **kw)

    @classmethod
    def from_columns(
        cls, columns: Sequence[Sequence[float]] | np.ndarray, **kw
    ) -> ScalarGrid:
        """Column-major input, transposed into rows."""
        if isinstance(columns, np.ndarray):
            return cls(columns.T, **kw)
        cols = [list(c) for c in columns]
        if not cols:
            return cls([], **kw)
        widths = {len(c) for c in cols}
        if len(widths) > 1:
            msg = f'Ragged grid: column lengths {sorted(widths)}'
            raise ValueError(msg)
        return cls([list(r) for r in zip(*cols, strict=True)], **kw)

    @classmethod
    def from_points(cls, points: Iterable[Any]) -> ScalarGrid:
        """
        Scattered samples: ``(x, y, value)`` tuples or mappings with
        ``x``/``y``/``value`` keys.
        """
        records = []
        for p in points:
            if isinstance(p, dict):
                records.append((p['x'], p['y'], p['value']))
            else:
                x, y, v = p
                records.append((x, y, v))
        grid = cls([])
        grid._scattered = np.array(records, dtype=np.float64).reshape(-1, 3)
        return grid

    @classmethod
    def coerce(cls, obj: Any) -> ScalarGrid:
        if isinstance(obj, ScalarGrid):
            return obj
        return cls(obj)

    @property
    def shape(self) -> tuple[int, int]:
        return self.values.shape  # type: ignore[return-value]

    @property
    def is_scattered(self) -> bool:
        return self._scattered is not None

    @property
    def is_empty(self) -> bool:
        if self._scattered is not None:
            return len(self._scattered) == 0
        return self.values.size == 0

    def points(self) -> np.ndarray:
        """Flat ``(N, 3)`` array of ``(x, y, value)`` in row-major order."""
        if self._scattered is not None:
            return self._scattered
        gx, gy = np.meshgrid(self.xs, self.ys)
        return np.column_stack((gx.ravel(), gy.ravel(), self.values.ravel()))

    @property
    def bbox(self) -> BoundingBox:
        pts = self.points()
        if len(pts) == 0:
            msg = 'Empty grid has no bounding box'
            raise ValueError(msg)
        return BoundingBox(
            minx=float(pts[:, 0].min()),
            miny=float(pts[:, 1].min()),
            maxx=float(pts[:, 0].max()),
            maxy=float(pts[:, 1].max()),
        )
