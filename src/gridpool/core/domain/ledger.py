"""
BetLedger — Учёт ставок раунда

Immutable отображение Cell → stake (credits), обновление через
replace-on-write: каждая принятая ставка возвращает новый ledger
вместе с новым балансом.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каждое значение > 0; отсутствующая ячейка имеет неявную ставку 0
2. Повторные ставки на одну ячейку суммируются
3. Ставка amount > balance отклоняется целиком, без частичного применения
4. balance + total_staked() сохраняется при любой последовательности ставок
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .cell import Cell, GridBounds
from .round_state import LedgerEntry, RoundError


@dataclass(frozen=True)
class LedgerUpdate:
    """Результат попытки поставить ставку."""

    accepted: bool
    error: Optional[RoundError]

    # Новое состояние (при отклонении исходное)
    new_balance: int
    new_ledger: "BetLedger"

    # Детали
    details: str


class BetLedger:
    """Ставки игрока по ячейкам."""

    def __init__(self, stakes: Optional[Mapping[Cell, int]] = None):
        """
        Args:
            stakes: начальные ставки (default: пустой ledger)

        Raises:
            ValueError: Если какая-либо ставка <= 0
        """
        entries: Dict[Cell, int] = dict(stakes or {})
        for cell, amount in entries.items():
            if amount <= 0:
                raise ValueError(f"Stake on {cell} must be positive, got {amount}")
        self._stakes: Mapping[Cell, int] = MappingProxyType(entries)

    def place_bet(
        self,
        cell: Cell,
        amount: int,
        balance: int,
        bounds: Optional[GridBounds] = None,
    ) -> LedgerUpdate:
        """Принять ставку или отклонить её без изменений.

        Порядок проверок:
        1. Ячейка в пределах сетки (если переданы bounds)
        2. amount: целое (не bool), > 0
        3. amount <= balance

        Args:
            cell: ячейка ставки
            amount: размер ставки (credits)
            balance: текущий баланс игрока
            bounds: границы сетки для проверки ячейки (optional)

        Returns:
            LedgerUpdate с новым ledger и балансом либо с причиной отказа
        """
        if bounds is not None and not bounds.contains(cell):
            return self._reject(
                RoundError.INVALID_CELL,
                balance,
                f"Cell {cell} outside grid {bounds.rows}x{bounds.cols}",
            )

        if isinstance(amount, bool) or not isinstance(amount, int):
            return self._reject(
                RoundError.INVALID_AMOUNT,
                balance,
                f"Bet amount must be an integer, got {amount!r}",
            )

        if amount <= 0:
            return self._reject(
                RoundError.INVALID_AMOUNT,
                balance,
                f"Bet amount must be positive, got {amount}",
            )

        if amount > balance:
            return self._reject(
                RoundError.INSUFFICIENT_CREDITS,
                balance,
                f"Insufficient credits: bet {amount} > balance {balance}",
            )

        stakes = dict(self._stakes)
        stakes[cell] = stakes.get(cell, 0) + amount

        return LedgerUpdate(
            accepted=True,
            error=None,
            new_balance=balance - amount,
            new_ledger=BetLedger(stakes),
            details=f"Bet {amount} on {cell}, cell total {stakes[cell]}",
        )

    def total_staked(self) -> int:
        """Сумма всех ставок — он же пул раунда."""
        return sum(self._stakes.values())

    def stake_on(self, cell: Cell) -> int:
        """Ставка на ячейку, 0 если ставки нет."""
        return self._stakes.get(cell, 0)

    def clear(self) -> "BetLedger":
        return BetLedger()

    def cells(self) -> List[Cell]:
        """Ячейки со ставками в порядке (row, col)."""
        return sorted(self._stakes, key=Cell.sort_key)

    def cells_with_bets(self) -> int:
        return len(self._stakes)

    def items(self) -> List[Tuple[Cell, int]]:
        return [(cell, self._stakes[cell]) for cell in self.cells()]

    def entries(self) -> List[LedgerEntry]:
        """Ставки в виде LedgerEntry (для снапшотов)."""
        return [LedgerEntry(cell=cell, amount=amount) for cell, amount in self.items()]

    def is_empty(self) -> bool:
        return not self._stakes

    def _reject(self, error: RoundError, balance: int, details: str) -> LedgerUpdate:
        return LedgerUpdate(
            accepted=False,
            error=error,
            new_balance=balance,
            new_ledger=self,
            details=details,
        )

    def __len__(self) -> int:
        return len(self._stakes)

    def __contains__(self, cell: object) -> bool:
        return cell in self._stakes

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BetLedger):
            return NotImplemented
        return dict(self._stakes) == dict(other._stakes)

    def __hash__(self) -> int:
        return hash(frozenset(self._stakes.items()))

    def __repr__(self) -> str:
        body = ", ".join(f"{cell.key()}: {amount}" for cell, amount in self.items())
        return f"BetLedger({{{body}}})"
