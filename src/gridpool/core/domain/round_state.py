"""
RoundState — Модели состояния раунда

Immutable Pydantic модели и enum'ы:
- RoundPhase: BETTING → RUNNING → SETTLED → (reset) → BETTING
- RoundError: причины отклонения команд (ожидаемые ошибки ввода, не исключения)
- SettlementResult: итог расчёта раунда
- RoundSnapshot: снапшот состояния для presentation layer
"""

from enum import Enum
from typing import FrozenSet, List, Optional

from pydantic import BaseModel, Field, model_validator

from .cell import Cell


# =============================================================================
# ENUMS
# =============================================================================


class RoundPhase(str, Enum):
    """Фаза раунда. Ровно одна активна в любой момент."""

    BETTING = "BETTING"
    RUNNING = "RUNNING"
    SETTLED = "SETTLED"


class RoundError(str, Enum):
    """
    Причина отклонения команды.

    Все ошибки локальные и восстановимые: отклонённая команда
    не изменяет ни ledger, ни balance, ни фазу.
    """

    INSUFFICIENT_CREDITS = "INSUFFICIENT_CREDITS"
    INVALID_PHASE = "INVALID_PHASE"
    NO_BETS_PLACED = "NO_BETS_PLACED"
    INVALID_CELL = "INVALID_CELL"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_VOLATILITY = "INVALID_VOLATILITY"


# =============================================================================
# SETTLEMENT
# =============================================================================


class SettlementResult(BaseModel):
    """
    Результат расчёта раунда (single-player pari-mutuel).

    payout = total_pool при выигрыше, иначе 0.
    """

    is_win: bool = Field(..., description="Есть ставка хотя бы на одну выигрышную ячейку")
    payout: int = Field(..., ge=0, description="Выплата игроку (credits)")
    total_pool: int = Field(..., ge=0, description="Сумма всех ставок раунда (credits)")
    winning_cells: FrozenSet[Cell] = Field(..., description="Выигрышные ячейки по политике")
    final_cell: Cell = Field(..., description="Последняя позиция пути")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_payout(self) -> "SettlementResult":
        """Выплата либо весь пул, либо ноль."""
        expected = self.total_pool if self.is_win else 0
        if self.payout != expected:
            raise ValueError(
                f"payout {self.payout} inconsistent with is_win={self.is_win}, "
                f"total_pool={self.total_pool}"
            )
        return self

    def sorted_winning_cells(self) -> List[Cell]:
        """Выигрышные ячейки в детерминированном порядке (row, col)."""
        return sorted(self.winning_cells, key=Cell.sort_key)


# =============================================================================
# SNAPSHOT
# =============================================================================


class LedgerEntry(BaseModel):
    """Ставка на одну ячейку."""

    cell: Cell
    amount: int = Field(..., gt=0)

    model_config = {"frozen": True}


class RoundSnapshot(BaseModel):
    """
    Снапшот состояния RoundController.

    Используется presentation layer для отрисовки: фаза, баланс,
    волатильность, ставки, текущая позиция курсора.
    """

    round_id: int = Field(..., ge=0, description="Номер текущего/последнего раунда")
    phase: RoundPhase
    balance: int = Field(..., ge=0, description="Баланс игрока (credits)")
    volatility: int = Field(..., ge=0)
    ledger: List[LedgerEntry] = Field(default_factory=list)
    total_staked: int = Field(..., ge=0)
    cells_with_bets: int = Field(..., ge=0)
    current_cell: Optional[Cell] = Field(None, description="Последняя показанная позиция пути")
    steps_emitted: int = Field(0, ge=0)
    last_settlement: Optional[SettlementResult] = None

    model_config = {"frozen": True}

    def to_dict(self) -> dict:
        """JSON-совместимое представление (round_snapshot контракт)."""
        data = self.model_dump(mode="json", exclude={"last_settlement"})
        if self.last_settlement is None:
            data["last_settlement"] = None
        else:
            data["last_settlement"] = {
                "is_win": self.last_settlement.is_win,
                "payout": self.last_settlement.payout,
                "total_pool": self.last_settlement.total_pool,
                "winning_cells": [
                    c.model_dump() for c in self.last_settlement.sorted_winning_cells()
                ],
                "final_cell": self.last_settlement.final_cell.model_dump(),
            }
        return data
