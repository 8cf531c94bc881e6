from pydantic import BaseModel, field_validator

from shared.constants import (
    CONTOUR_PARALLEL_WORKERS,
    EPSILON,
    Diagonal,
    GridOrientation,
    Triangulation,
    default_triangulation,
)


class ContourSettings(BaseModel):
    """Settings of one contour extraction run, loaded from a TOML profile."""

    model_config = {
        'extra': 'ignore',  # игнорировать лишние поля из профилей
    }

    # Явный список уровней (индекс в списке является ключом уровня)
    levels: list[float] = []
    # Либо равномерная сетка уровней: base + i * interval, i < count
    level_base: float | None = None
    level_interval: float | None = None
    level_count: int | None = None

    # Порог совпадения точек (квадрат расстояния)
    epsilon: float = EPSILON
    # Количество потоков для обработки уровней
    workers: int = CONTOUR_PARALLEL_WORKERS
    triangulation: Triangulation = default_triangulation()
    diagonal: Diagonal = Diagonal.MAIN

    # Порядок данных во входном файле сетки
    orientation: GridOrientation = GridOrientation.ROWS

    output_path: str = 'contours.json'
    progress: bool = False

    @field_validator('epsilon')
    @classmethod
    def validate_epsilon(cls, v: float | str) -> float:
        v = float(v)
        if not v > 0.0:
            msg = 'epsilon must be positive'
            raise ValueError(msg)
        return v

    @field_validator('workers')
    @classmethod
    def validate_workers(cls, v: int | str) -> int:
        v = int(v)
        if v < 1:
            msg = 'workers must be at least 1'
            raise ValueError(msg)
        return v

    @field_validator('level_interval')
    @classmethod
    def validate_interval(cls, v: float | str | None) -> float | None:
        if v is None:
            return None
        v = float(v)
        if v <= 0.0:
            msg = 'level_interval must be positive'
            raise ValueError(msg)
        return v

    @field_validator('level_count')
    @classmethod
    def validate_count(cls, v: int | str | None) -> int | None:
        if v is None:
            return None
        v = int(v)
        if v < 0:
            msg = 'level_count cannot be negative'
            raise ValueError(msg)
        return v

    @property
    def resolved_levels(self) -> list[float]:
        """Explicit levels if given, otherwise the generated series."""
        if self.levels:
            return list(self.levels)
        if (
            self.level_base is None
            or self.level_interval is None
            or self.level_count is None
        ):
            return []
        return [
            self.level_base + i * self.level_interval for i in range(self.level_count)
        ]
