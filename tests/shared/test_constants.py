"""Tests for shared.constants module."""

from shared.constants import (
    DEFAULT_PERIMETER_CODE,
    EPSILON,
    Diagonal,
    SingleLineRenderer,
    Triangulation,
    default_triangulation,
)


class TestConstants:
    def test_epsilon(self):
        assert EPSILON == 1e-20

    def test_default_perimeter_code(self):
        assert DEFAULT_PERIMETER_CODE == (0, 0.0)

    def test_default_triangulation(self):
        assert default_triangulation() is Triangulation.GRID

    def test_enums_are_strings(self):
        assert Diagonal('anti') is Diagonal.ANTI
        assert Triangulation.DELAUNAY == 'delaunay'


class TestSingleLineRenderer:
    """Tests for SingleLineRenderer class."""

    def test_write_line_updates_last_len(self, capsys):
        renderer = SingleLineRenderer(single_line=True)
        renderer.write_line('test message')
        assert renderer._last_len == len('test message')
        assert capsys.readouterr().err == '\rtest message'

    def test_shorter_line_padded(self, capsys):
        renderer = SingleLineRenderer(single_line=True)
        renderer.write_line('long line')
        renderer.write_line('ab')
        assert capsys.readouterr().err.endswith('\rab' + ' ' * 7)

    def test_clear_line_resets_last_len(self, capsys):
        renderer = SingleLineRenderer(single_line=True)
        renderer.write_line('abc')
        renderer.clear_line()
        assert renderer._last_len == 0
        assert capsys.readouterr().err.endswith('\r   \r')

    def test_multi_line_mode(self, capsys):
        renderer = SingleLineRenderer(single_line=False)
        renderer.write_line('one')
        renderer.clear_line()
        assert capsys.readouterr().err == '\rone'
