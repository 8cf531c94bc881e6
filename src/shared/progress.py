import contextlib
import logging
import threading
import time
from collections.abc import Callable

from shared.constants import DEFAULT_WRITER, SingleLineRenderer

logger = logging.getLogger(__name__)


# Глобальный колбэк прогресса для внешних потребителей (опционально)
class _CbStore:
    progress: Callable[[int, int, str], None] | None = None


def set_progress_callback(cb: Callable[[int, int, str], None] | None) -> None:
    """Устанавливает глобальный колбэк прогресса: (done, total, label)."""
    _CbStore.progress = cb


def cleanup_progress_resources() -> None:
    """Очистка глобальных колбэков прогресса."""
    _CbStore.progress = None


class ConsoleProgress:
    """Прогресс-бар для пошаговых операций.

    ``step`` may be called from worker threads: one level finishing per call.
    """

    def __init__(
        self,
        total: int,
        label: str = 'Progress',
        writer: SingleLineRenderer | None = None,
    ) -> None:
        self.total = max(1, int(total))
        self.done = 0
        self.start = time.monotonic()
        self.label = label
        self._writer = writer or DEFAULT_WRITER
        self._lock = threading.Lock()
        self._writer.clear_line()
        self._render()  # показать 0%

    def _format_eta(self, remaining: float) -> str:
        if remaining is None or remaining == float('inf'):
            return '--:--'
        m, s = divmod(int(remaining), 60)
        h, m = divmod(m, 60)
        if h > 0:
            return f'{h:02d}:{m:02d}:{s:02d}'
        return f'{m:02d}:{s:02d}'

    def _render(self) -> None:
        elapsed = max(1e-6, time.monotonic() - self.start)
        rps = self.done / elapsed
        remaining = (self.total - self.done) / rps if rps > 0 else float('inf')
        bar_len = 30
        filled = int(bar_len * self.done / self.total)
        bar = '█' * filled + '░' * (bar_len - filled)
        msg = (
            f'{self.label}: [{bar}] {self.done}/{self.total} | {rps:4.1f}/s | ETA'
            f' {self._format_eta(remaining)}'
        )
        self._writer.write_line(msg)
        if _CbStore.progress is not None:
            with contextlib.suppress(Exception):
                _CbStore.progress(self.done, self.total, self.label)

    def step(self, n: int = 1) -> None:
        with self._lock:
            self.done = min(self.total, self.done + n)
            self._render()

    def close(self) -> None:
        self._writer.clear_line()
        logger.debug('%s finished: %d/%d', self.label, self.done, self.total)
