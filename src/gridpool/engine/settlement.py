"""SettlementEngine — расчёт раунда по правилу single-player pari-mutuel.

- total_pool = ledger.total_staked()
- winning_cells по политике:
  * SINGLE_CELL: только последняя ячейка пути
  * FULL_PATH: все различные ячейки, посещённые путём
- is_win ⇔ на хотя бы одной выигрышной ячейке есть ненулевая ставка
- payout = total_pool при выигрыше, иначе 0 (ставки уже списаны при размещении)

Чистая функция от (ledger, path): без побочных эффектов, воспроизводима.
"""

from enum import Enum
from typing import FrozenSet, Sequence

from gridpool.core.domain.cell import Cell, PathStep
from gridpool.core.domain.ledger import BetLedger
from gridpool.core.domain.round_state import SettlementResult


class WinningPolicy(str, Enum):
    """Какие ячейки пути считаются выигрышными."""

    SINGLE_CELL = "SINGLE_CELL"
    FULL_PATH = "FULL_PATH"


class SettlementEngine:
    """Расчёт выплаты раунда."""

    def __init__(self, winning_policy: WinningPolicy = WinningPolicy.SINGLE_CELL):
        self.winning_policy = winning_policy

    def winning_cells(self, path: Sequence[PathStep]) -> FrozenSet[Cell]:
        """
        Raises:
            ValueError: Если путь пустой
        """
        if not path:
            raise ValueError("Cannot settle an empty path")

        if self.winning_policy == WinningPolicy.FULL_PATH:
            return frozenset(step.cell for step in path)
        return frozenset({path[-1].cell})

    def settle(self, ledger: BetLedger, path: Sequence[PathStep]) -> SettlementResult:
        """Расчёт исхода раунда.

        Args:
            ledger: ставки раунда
            path: сгенерированный путь (N >= 1 шагов)

        Returns:
            SettlementResult с is_win, payout, total_pool, winning_cells, final_cell
        """
        winning = self.winning_cells(path)
        total_pool = ledger.total_staked()
        is_win = any(ledger.stake_on(cell) > 0 for cell in winning)

        return SettlementResult(
            is_win=is_win,
            payout=total_pool if is_win else 0,
            total_pool=total_pool,
            winning_cells=winning,
            final_cell=path[-1].cell,
        )
