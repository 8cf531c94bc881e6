from __future__ import annotations

from .boundary import close_open_chains as close_open_chains
from .builder import Contour as Contour
from .builder import build_contours as build_contours
from .builder import contours_by_level as contours_by_level
from .chains import ContourBuilder as ContourBuilder
from .geometry import BoundingBox as BoundingBox
from .geometry import Point as Point
from .grid import ScalarGrid as ScalarGrid
from .triangles import DelaunayTriangleSource as DelaunayTriangleSource
from .triangles import GridTriangleSource as GridTriangleSource
from .triangles import Triangle as Triangle

"""
Package initializer for contours.
Re-exports the contour extraction API.
"""
