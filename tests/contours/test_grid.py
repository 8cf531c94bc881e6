"""Tests for contours.grid module."""

import numpy as np
import pytest

from contours.geometry import BoundingBox
from contours.grid import ScalarGrid


class TestScalarGridInit:
    """Tests for ScalarGrid construction."""

    def test_rows(self):
        grid = ScalarGrid([[1, 2, 3], [4, 5, 6]])
        assert grid.shape == (2, 3)
        assert grid.values.dtype == np.float64
        assert grid.xs.tolist() == [0.0, 1.0, 2.0]
        assert grid.ys.tolist() == [0.0, 1.0]

    def test_ndarray_input(self):
        grid = ScalarGrid(np.arange(6, dtype=np.int32).reshape(2, 3))
        assert grid.values.dtype == np.float64
        assert grid.values[1, 2] == 5.0

    def test_ragged_rows(self):
        with pytest.raises(ValueError, match='Ragged'):
            ScalarGrid([[1, 2], [3]])

    def test_one_dimensional_array(self):
        with pytest.raises(ValueError, match='two-dimensional'):
            ScalarGrid(np.array([1.0, 2.0]))

    def test_axis_length_mismatch(self):
        with pytest.raises(ValueError, match='xs must have 2 entries'):
            ScalarGrid([[1, 2], [3, 4]], xs=[0.0, 1.0, 2.0])

    def test_scalar_axis(self):
        with pytest.raises(ValueError, match=r'got shape \(\)'):
            ScalarGrid([[1, 2], [3, 4]], xs=5)

    def test_explicit_axes(self):
        grid = ScalarGrid([[1, 2], [3, 4]], xs=[10, 20], ys=[-1, 1])
        assert grid.xs.tolist() == [10.0, 20.0]
        assert grid.ys.tolist() == [-1.0, 1.0]

    def test_empty(self):
        grid = ScalarGrid([])
        assert grid.is_empty
        assert grid.shape == (0, 0)
        assert not grid.is_scattered


class TestScalarGridConstructors:
    def test_from_columns_transposes(self):
        grid = ScalarGrid.from_columns([[1, 2, 3], [4, 5, 6]])
        assert grid.values.tolist() == [[1, 4], [2, 5], [3, 6]]

    def test_from_columns_ndarray(self):
        grid = ScalarGrid.from_columns(np.array([[1.0, 2.0], [3.0, 4.0]]))
        assert grid.values.tolist() == [[1.0, 3.0], [2.0, 4.0]]

    def test_from_columns_ragged(self):
        with pytest.raises(ValueError, match='column lengths'):
            ScalarGrid.from_columns([[1, 2], [3]])

    def test_from_columns_empty(self):
        assert ScalarGrid.from_columns([]).is_empty

    def test_from_points_tuples_and_dicts(self):
        grid = ScalarGrid.from_points([(0, 0, 1), {'x': 2, 'y': 1, 'value': 5}])
        assert grid.is_scattered
        assert grid.points().tolist() == [[0.0, 0.0, 1.0], [2.0, 1.0, 5.0]]

    def test_from_points_empty(self):
        grid = ScalarGrid.from_points([])
        assert grid.is_scattered
        assert grid.is_empty

    def test_coerce(self):
        grid = ScalarGrid([[1, 2], [3, 4]])
        assert ScalarGrid.coerce(grid) is grid
        assert ScalarGrid.coerce([[1, 2], [3, 4]]).shape == (2, 2)


class TestScalarGridPoints:
    def test_row_major_points(self):
        grid = ScalarGrid([[1, 2], [3, 4]], xs=[0, 10], ys=[0, 5])
        assert grid.points().tolist() == [
            [0.0, 0.0, 1.0],
            [10.0, 0.0, 2.0],
            [0.0, 5.0, 3.0],
            [10.0, 5.0, 4.0],
        ]

    def test_bbox(self):
        grid = ScalarGrid([[1, 2, 3], [4, 5, 6]], xs=[-1, 0, 3], ys=[2, 4])
        assert grid.bbox == BoundingBox(minx=-1.0, miny=2.0, maxx=3.0, maxy=4.0)

    def test_bbox_of_scattered(self):
        grid = ScalarGrid.from_points([(1, 5, 0), (3, -2, 0), (2, 0, 0)])
        assert grid.bbox == BoundingBox(minx=1.0, miny=-2.0, maxx=3.0, maxy=5.0)

    def test_bbox_empty(self):
        with pytest.raises(ValueError, match='Empty grid'):
            _ = ScalarGrid([]).bbox
