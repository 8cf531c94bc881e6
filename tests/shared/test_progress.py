"""Tests for progress module."""

import threading
from unittest.mock import MagicMock

import pytest

from shared.progress import (
    ConsoleProgress,
    _CbStore,
    cleanup_progress_resources,
    set_progress_callback,
)


@pytest.fixture(autouse=True)
def _reset_callback():
    yield
    cleanup_progress_resources()


@pytest.fixture
def writer():
    return MagicMock()


class TestProgressCallback:
    """Tests for the global progress callback."""

    def test_set_and_cleanup(self):
        cb = MagicMock()
        set_progress_callback(cb)
        assert _CbStore.progress is cb
        cleanup_progress_resources()
        assert _CbStore.progress is None

    def test_callback_receives_steps(self, writer):
        cb = MagicMock()
        set_progress_callback(cb)
        bar = ConsoleProgress(total=2, label='Levels', writer=writer)
        bar.step()
        bar.step()
        assert [c.args for c in cb.call_args_list] == [
            (0, 2, 'Levels'),
            (1, 2, 'Levels'),
            (2, 2, 'Levels'),
        ]

    def test_failing_callback_does_not_break_progress(self, writer):
        set_progress_callback(MagicMock(side_effect=RuntimeError('boom')))
        bar = ConsoleProgress(total=1, writer=writer)
        bar.step()
        assert bar.done == 1


class TestConsoleProgress:
    """Tests for ConsoleProgress class."""

    def test_initial_render(self, writer):
        ConsoleProgress(total=5, label='Contours', writer=writer)
        writer.clear_line.assert_called_once()
        line = writer.write_line.call_args[0][0]
        assert line.startswith('Contours: [')
        assert '0/5' in line

    def test_step_clamped_to_total(self, writer):
        bar = ConsoleProgress(total=2, writer=writer)
        bar.step(5)
        assert bar.done == 2
        assert '2/2' in writer.write_line.call_args[0][0]

    def test_zero_total_becomes_one(self, writer):
        assert ConsoleProgress(total=0, writer=writer).total == 1

    def test_close_clears_line(self, writer):
        bar = ConsoleProgress(total=1, writer=writer)
        writer.reset_mock()
        bar.close()
        writer.clear_line.assert_called_once()

    def test_steps_from_threads(self, writer):
        bar = ConsoleProgress(total=50, writer=writer)
        threads = [threading.Thread(target=bar.step) for _ in range(50)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert bar.done == 50

    @pytest.mark.parametrize(
        ('seconds', 'expected'),
        [(5, '00:05'), (125, '02:05'), (3725, '01:02:05'), (float('inf'), '--:--')],
    )
    def test_format_eta(self, writer, seconds, expected):
        bar = ConsoleProgress(total=1, writer=writer)
        assert bar._format_eta(seconds) == expected
