"""PathGenerator — генерация стохастического пути раунда.

Два режима блуждания, единый размер скачка max_jump = ceil(volatility / 3):

FREE_WALK:
- N = floor(min_steps + (max_steps - min_steps) * volatility / 10)
- Старт равномерно по всей сетке (или start_cell, если задан)
- Каждый шаг: обе координаты смещаются на независимые offset ∈ [-max_jump, +max_jump]
- Граница: WRAP (тор), никогда не clamp

TIME_INDEXED:
- N = количество колонок (шагов времени)
- col = time_index, растёт ровно на 1 начиная с 0, не рандомизируется
- row (уровень цены) стартует с середины, offset ∈ [-max_jump, +max_jump]
- Граница: CLAMP в [0, rows - 1], никогда не wrap

Путь отдаётся лениво: конечный, не перезапускаемый генератор PathStep,
чтобы оркестратор показывал шаг до вычисления следующего.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Generator, Optional, Tuple

from gridpool.core.domain.cell import Cell, GridBounds, PathStep
from gridpool.core.math import clamp, free_walk_step_count, max_jump, midpoint, wrap
from gridpool.engine.rng import RandomSource

logger = logging.getLogger(__name__)


class WalkMode(str, Enum):
    """Режим блуждания: какая ось свободная, какая ведётся временем."""

    FREE_WALK = "FREE_WALK"
    TIME_INDEXED = "TIME_INDEXED"


class BoundaryPolicy(str, Enum):
    """Поведение на границе сетки.

    WRAP сохраняет равномерное распределение по кольцу,
    CLAMP смещает массу к краям на длинных путях.
    """

    WRAP = "WRAP"
    CLAMP = "CLAMP"


@dataclass(frozen=True)
class GridConfig:
    """Размер сетки: rows — строки / уровни цены, cols — колонки / шаги времени."""

    rows: int = 10
    cols: int = 10

    def __post_init__(self):
        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"Grid must be at least 1x1, got {self.rows}x{self.cols}")

    def bounds(self) -> GridBounds:
        return GridBounds(rows=self.rows, cols=self.cols)


@dataclass(frozen=True)
class WalkConfig:
    """Конфигурация блуждания.

    boundary=None → политика режима по умолчанию
    (FREE_WALK → WRAP, TIME_INDEXED → CLAMP).
    start_cell используется только в FREE_WALK.
    """

    mode: WalkMode = WalkMode.FREE_WALK
    boundary: Optional[BoundaryPolicy] = None
    min_steps: int = 20
    max_steps: int = 50
    start_cell: Optional[Cell] = None

    def __post_init__(self):
        if self.min_steps < 1:
            raise ValueError(f"min_steps must be >= 1, got {self.min_steps}")
        if self.max_steps < self.min_steps:
            raise ValueError(
                f"max_steps {self.max_steps} below min_steps {self.min_steps}"
            )

    def effective_boundary(self) -> BoundaryPolicy:
        if self.boundary is not None:
            return self.boundary
        if self.mode == WalkMode.TIME_INDEXED:
            return BoundaryPolicy.CLAMP
        return BoundaryPolicy.WRAP


class PathGenerator:
    """Генератор пути раунда для заданной сетки и режима блуждания."""

    def __init__(
        self,
        grid_config: Optional[GridConfig] = None,
        walk_config: Optional[WalkConfig] = None,
    ):
        """
        Args:
            grid_config: размер сетки (default 10x10)
            walk_config: режим блуждания (default FREE_WALK + WRAP)

        Raises:
            ValueError: Если start_cell за пределами сетки
        """
        self.grid_config = grid_config or GridConfig()
        self.walk_config = walk_config or WalkConfig()
        self.boundary = self.walk_config.effective_boundary()

        if self.walk_config.start_cell is not None:
            self.grid_config.bounds().validate_cell(self.walk_config.start_cell)

    def step_count(self, volatility: int) -> int:
        """Длина пути N для данной волатильности."""
        if self.walk_config.mode == WalkMode.TIME_INDEXED:
            return self.grid_config.cols
        return free_walk_step_count(
            self.walk_config.min_steps, self.walk_config.max_steps, volatility
        )

    def generate(
        self, volatility: int, rng: RandomSource
    ) -> Generator[PathStep, None, None]:
        """Ленивый путь длины step_count(volatility).

        Аргументы проверяются сразу при вызове, шаги вычисляются
        по мере итерации.

        Raises:
            ValueError: Если volatility < 0
        """
        if volatility < 0:
            raise ValueError(f"volatility must be non-negative, got {volatility}")

        if self.walk_config.mode == WalkMode.TIME_INDEXED:
            return self._time_indexed_walk(volatility, rng)
        return self._free_walk(volatility, rng)

    def generate_path(self, volatility: int, rng: RandomSource) -> Tuple[PathStep, ...]:
        """Полный путь сразу (для симуляций и тестов)."""
        return tuple(self.generate(volatility, rng))

    def _free_walk(
        self, volatility: int, rng: RandomSource
    ) -> Generator[PathStep, None, None]:
        steps = self.step_count(volatility)
        jump = max_jump(volatility)
        rows, cols = self.grid_config.rows, self.grid_config.cols

        start = self.walk_config.start_cell
        if start is None:
            row = rng.randint(0, rows - 1)
            col = rng.randint(0, cols - 1)
        else:
            row, col = start.row, start.col

        logger.debug(
            "Free walk: steps=%d max_jump=%d start=(%d, %d) boundary=%s",
            steps, jump, row, col, self.boundary.value,
        )

        for time_index in range(steps):
            if time_index > 0:
                row = self._bound(row + rng.randint(-jump, jump), rows)
                col = self._bound(col + rng.randint(-jump, jump), cols)
            yield PathStep(time_index=time_index, cell=Cell(row=row, col=col))

    def _time_indexed_walk(
        self, volatility: int, rng: RandomSource
    ) -> Generator[PathStep, None, None]:
        steps = self.step_count(volatility)
        max_change = max_jump(volatility)
        price_levels = self.grid_config.rows
        price = midpoint(price_levels)

        logger.debug(
            "Time-indexed walk: steps=%d max_change=%d start_price=%d boundary=%s",
            steps, max_change, price, self.boundary.value,
        )

        for time_index in range(steps):
            if time_index > 0:
                offset = rng.randint(-max_change, max_change)
                price = self._bound(price + offset, price_levels)
            yield PathStep(time_index=time_index, cell=Cell(row=price, col=time_index))

    def _bound(self, value: int, size: int) -> int:
        if self.boundary == BoundaryPolicy.WRAP:
            return wrap(value, size)
        return clamp(value, 0, size - 1)
