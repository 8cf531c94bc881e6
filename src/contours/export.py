"""Reading grids from disk and writing contour lists as JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np

from contours.grid import ScalarGrid
from shared.constants import JSON_INDENT

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contours.builder import Contour

logger = logging.getLogger(__name__)


def contours_to_dict(contours: Sequence[Contour]) -> dict[str, Any]:
    return {
        'contours': [
            {
                'level_index': c.level_index,
                'level': c.level,
                'closed': c.closed,
                'points': [[float(p.x), float(p.y)] for p in c.points],
            }
            for c in contours
        ]
    }


def dump_json(contours: Sequence[Contour], path: str | Path) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(contours_to_dict(contours), indent=JSON_INDENT)
    out.write_text(text, encoding='utf-8')
    logger.info('Saved %d contours to %s', len(contours), out)
    return out


def _grid_from_json(data: Any) -> ScalarGrid:
    if isinstance(data, list):
        return ScalarGrid.from_rows(data)
    if not isinstance(data, dict):
        msg = 'Grid JSON must be a list of rows or an object'
        raise ValueError(msg)
    axes = {k: data[k] for k in ('xs', 'ys') if k in data}
    # rows take priority over columns
    if isinstance(data.get('rows'), list):
        return ScalarGrid.from_rows(data['rows'], **axes)
    if isinstance(data.get('columns'), list):
        return ScalarGrid.from_columns(data['columns'], **axes)
    if isinstance(data.get('points'), list):
        return ScalarGrid.from_points(data['points'])
    msg = "Grid JSON needs one of 'rows', 'columns' or 'points'"
    raise ValueError(msg)


def load_grid(path: str | Path, *, columns: bool = False) -> ScalarGrid:
    """
    Load a grid from ``.json``, ``.npy`` or delimited text.

    Text files may be whitespace or comma separated; ``columns`` treats their
    lines (and ``.npy`` rows) as grid columns.
    """
    p = Path(path)
    if not p.exists():
        msg = f'Grid file not found: {p}'
        raise FileNotFoundError(msg)
    suffix = p.suffix.lower()
    if suffix == '.json':
        data = json.loads(p.read_text(encoding='utf-8'))
        grid = _grid_from_json(data)
    else:
        if suffix == '.npy':
            arr = np.load(p)
        else:
            delimiter = ',' if suffix == '.csv' else None
            arr = np.loadtxt(p, delimiter=delimiter, ndmin=2)
        grid = ScalarGrid.from_columns(arr) if columns else ScalarGrid.from_rows(arr)
    logger.info('Loaded grid %s with shape %s', p.name, grid.shape)
    return grid
