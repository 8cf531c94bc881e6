import sys
import threading
from enum import Enum

# Порог совпадения точек: квадрат евклидова расстояния
EPSILON = 1e-20

# Количество потоков для параллельной обработки уровней
CONTOUR_PARALLEL_WORKERS = 4

# Минимальный размер сетки по каждой оси для триангуляции
MIN_GRID_SIZE = 2

# Минимальное количество вершин для триангуляции Делоне
MIN_DELAUNAY_POINTS = 3

# Число рёбер ограничивающего прямоугольника
PERIMETER_EDGES = 4

# Код периметра для точки, не лежащей ни на одной стороне
DEFAULT_PERIMETER_CODE = (0, 0.0)

# Каталог профилей по умолчанию (относительно корня проекта)
PROFILES_DIR = 'configs/profiles'

# Формат логов
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Отступ JSON при экспорте контуров
JSON_INDENT = 2


class Triangulation(str, Enum):
    """Supported triangle sources."""

    GRID = 'grid'
    DELAUNAY = 'delaunay'


class Diagonal(str, Enum):
    """Which diagonal splits a grid cell into two triangles."""

    MAIN = 'main'  # (x0, y0) - (x1, y1)
    ANTI = 'anti'  # (x1, y0) - (x0, y1)


class GridOrientation(str, Enum):
    ROWS = 'rows'
    COLUMNS = 'columns'


def default_triangulation() -> Triangulation:
    return Triangulation.GRID


class SingleLineRenderer:
    """Потокобезопасный рендерер для вывода в одну строку."""

    def __init__(self, *, single_line: bool = True) -> None:
        self.single_line = single_line
        self._last_len = 0
        self._lock = threading.Lock()

    def clear_line(self) -> None:
        """Полностью очистить текущую строку прогресса."""
        with self._lock:
            if self.single_line and self._last_len > 0:
                sys.stderr.write('\r' + ' ' * self._last_len + '\r')
                sys.stderr.flush()
                self._last_len = 0

    def write_line(self, msg: str) -> None:
        """Перерисовать текущую строку прогресса."""
        with self._lock:
            if self.single_line:
                pad = max(0, self._last_len - len(msg))
                sys.stderr.write('\r' + msg + (' ' * pad))
            else:
                sys.stderr.write('\r' + msg)
            sys.stderr.flush()
            self._last_len = len(msg)


# Экземпляр по умолчанию (можно передать свой при создании классов)
DEFAULT_WRITER = SingleLineRenderer()
