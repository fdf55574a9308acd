"""
Cell — Координаты ячейки сетки и шаг пути

Immutable Pydantic модели:
- Cell: пара целых координат (row, col), value identity без жизненного цикла
- GridBounds: границы сетки [0, rows) × [0, cols)
- PathStep: (time_index, cell) — один шаг сгенерированного пути

В режиме TIME_INDEXED row — уровень цены, col — индекс времени.
"""

from typing import Tuple

from pydantic import BaseModel, Field


# =============================================================================
# CELL
# =============================================================================


class Cell(BaseModel):
    """
    Ячейка сетки.

    Immutable модель (frozen=True), hashable — используется как ключ
    BetLedger и элемент множества winning_cells.
    """

    row: int = Field(..., ge=0, description="Координата по оси строк / уровней цены")
    col: int = Field(..., ge=0, description="Координата по оси колонок / времени")

    model_config = {"frozen": True}

    def key(self) -> str:
        """Строковый ключ вида 'row-col'."""
        return f"{self.row}-{self.col}"

    def sort_key(self) -> Tuple[int, int]:
        """Ключ детерминированной сортировки (row, col)."""
        return (self.row, self.col)

    def __str__(self) -> str:
        return f"[{self.row}, {self.col}]"


# =============================================================================
# GRID BOUNDS
# =============================================================================


class GridBounds(BaseModel):
    """
    Границы сетки.

    Ячейка валидна, если 0 <= row < rows и 0 <= col < cols.
    """

    rows: int = Field(..., ge=1, description="Количество строк (уровней цены)")
    cols: int = Field(..., ge=1, description="Количество колонок (шагов времени)")

    model_config = {"frozen": True}

    def contains(self, cell: Cell) -> bool:
        """Проверка, что ячейка внутри сетки."""
        return cell.row < self.rows and cell.col < self.cols

    def validate_cell(self, cell: Cell) -> None:
        """
        Raises:
            ValueError: Если ячейка за пределами сетки
        """
        if not self.contains(cell):
            raise ValueError(
                f"Cell {cell} outside grid bounds {self.rows}x{self.cols}"
            )

    def total_cells(self) -> int:
        return self.rows * self.cols


# =============================================================================
# PATH STEP
# =============================================================================


class PathStep(BaseModel):
    """Один шаг пути раунда."""

    time_index: int = Field(..., ge=0, description="Порядковый номер шага (0..N-1)")
    cell: Cell = Field(..., description="Позиция на шаге")

    model_config = {"frozen": True}
