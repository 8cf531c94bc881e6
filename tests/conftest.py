"""Pytest configuration and fixtures for contour tests."""

import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))


@pytest.fixture
def peak_rows():
    """3x3 grid: flat zero with a single interior peak of 1."""
    return [
        [0.0, 0.0, 0.0],
        [0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0],
    ]


@pytest.fixture
def midline_rows():
    """2x2 unit square, 0 along y=0 and 1 along y=1."""
    return [
        [0.0, 0.0],
        [1.0, 1.0],
    ]
