"""
Тесты для доменных моделей: Cell, GridBounds, PathStep, SettlementResult, RoundSnapshot

Проверяет:
1. Создание и валидацию моделей Pydantic
2. Immutability (frozen=True) и hashability
3. Сериализацию
4. Граничные случаи и невалидные данные
"""

import pytest
from pydantic import ValidationError

from gridpool.core.domain import (
    Cell,
    GridBounds,
    LedgerEntry,
    PathStep,
    RoundPhase,
    RoundSnapshot,
    SettlementResult,
)


# =============================================================================
# CELL TESTS
# =============================================================================


class TestCell:
    """Тесты для модели Cell"""

    def test_cell_creation(self):
        cell = Cell(row=3, col=7)
        assert cell.row == 3
        assert cell.col == 7

    def test_cell_negative_coordinates_rejected(self):
        with pytest.raises(ValidationError):
            Cell(row=-1, col=0)
        with pytest.raises(ValidationError):
            Cell(row=0, col=-2)

    def test_cell_immutable(self):
        cell = Cell(row=1, col=1)
        with pytest.raises(ValidationError):
            cell.row = 2

    def test_cell_value_identity(self):
        """Ячейки с одинаковыми координатами равны и имеют один hash."""
        assert Cell(row=2, col=4) == Cell(row=2, col=4)
        assert hash(Cell(row=2, col=4)) == hash(Cell(row=2, col=4))
        assert len({Cell(row=2, col=4), Cell(row=2, col=4), Cell(row=4, col=2)}) == 2

    def test_cell_key_and_str(self):
        cell = Cell(row=5, col=9)
        assert cell.key() == "5-9"
        assert str(cell) == "[5, 9]"

    def test_cell_sort_key(self):
        cells = [Cell(row=2, col=1), Cell(row=0, col=5), Cell(row=2, col=0)]
        assert sorted(cells, key=Cell.sort_key) == [
            Cell(row=0, col=5),
            Cell(row=2, col=0),
            Cell(row=2, col=1),
        ]


# =============================================================================
# GRID BOUNDS TESTS
# =============================================================================


class TestGridBounds:
    """Тесты для GridBounds"""

    @pytest.fixture
    def bounds(self) -> GridBounds:
        return GridBounds(rows=10, cols=8)

    def test_contains_corners(self, bounds):
        assert bounds.contains(Cell(row=0, col=0))
        assert bounds.contains(Cell(row=9, col=7))

    def test_contains_outside(self, bounds):
        assert not bounds.contains(Cell(row=10, col=0))
        assert not bounds.contains(Cell(row=0, col=8))

    def test_validate_cell_raises(self, bounds):
        with pytest.raises(ValueError, match="outside grid bounds"):
            bounds.validate_cell(Cell(row=10, col=10))

    def test_total_cells(self, bounds):
        assert bounds.total_cells() == 80

    def test_zero_size_rejected(self):
        with pytest.raises(ValidationError):
            GridBounds(rows=0, cols=5)


# =============================================================================
# PATH STEP / SETTLEMENT RESULT
# =============================================================================


class TestPathStep:
    def test_path_step(self):
        step = PathStep(time_index=3, cell=Cell(row=1, col=2))
        assert step.time_index == 3
        assert step.cell == Cell(row=1, col=2)

    def test_negative_time_index_rejected(self):
        with pytest.raises(ValidationError):
            PathStep(time_index=-1, cell=Cell(row=0, col=0))


class TestSettlementResult:
    """Тесты для SettlementResult"""

    def test_win_payout_is_pool(self):
        result = SettlementResult(
            is_win=True,
            payout=30,
            total_pool=30,
            winning_cells=frozenset({Cell(row=1, col=1)}),
            final_cell=Cell(row=1, col=1),
        )
        assert result.payout == result.total_pool

    def test_inconsistent_payout_rejected(self):
        """Выплата обязана быть либо всем пулом, либо нулём."""
        with pytest.raises(ValidationError, match="inconsistent"):
            SettlementResult(
                is_win=True,
                payout=10,
                total_pool=30,
                winning_cells=frozenset({Cell(row=1, col=1)}),
                final_cell=Cell(row=1, col=1),
            )

        with pytest.raises(ValidationError, match="inconsistent"):
            SettlementResult(
                is_win=False,
                payout=30,
                total_pool=30,
                winning_cells=frozenset({Cell(row=1, col=1)}),
                final_cell=Cell(row=1, col=1),
            )

    def test_sorted_winning_cells(self):
        result = SettlementResult(
            is_win=False,
            payout=0,
            total_pool=10,
            winning_cells=frozenset({Cell(row=3, col=0), Cell(row=0, col=3)}),
            final_cell=Cell(row=3, col=0),
        )
        assert result.sorted_winning_cells() == [Cell(row=0, col=3), Cell(row=3, col=0)]


# =============================================================================
# SNAPSHOT
# =============================================================================


class TestRoundSnapshot:
    def test_to_dict_without_settlement(self):
        snapshot = RoundSnapshot(
            round_id=0,
            phase=RoundPhase.BETTING,
            balance=990,
            volatility=5,
            ledger=[LedgerEntry(cell=Cell(row=5, col=5), amount=10)],
            total_staked=10,
            cells_with_bets=1,
        )
        data = snapshot.to_dict()

        assert data["phase"] == "BETTING"
        assert data["ledger"] == [{"cell": {"row": 5, "col": 5}, "amount": 10}]
        assert data["current_cell"] is None
        assert data["last_settlement"] is None

    def test_to_dict_with_settlement(self):
        settlement = SettlementResult(
            is_win=True,
            payout=10,
            total_pool=10,
            winning_cells=frozenset({Cell(row=5, col=5)}),
            final_cell=Cell(row=5, col=5),
        )
        snapshot = RoundSnapshot(
            round_id=1,
            phase=RoundPhase.SETTLED,
            balance=1000,
            volatility=5,
            total_staked=10,
            cells_with_bets=1,
            current_cell=Cell(row=5, col=5),
            steps_emitted=35,
            last_settlement=settlement,
        )
        data = snapshot.to_dict()

        assert data["last_settlement"]["winning_cells"] == [{"row": 5, "col": 5}]
        assert data["last_settlement"]["is_win"] is True
        assert data["steps_emitted"] == 35

    def test_negative_balance_rejected(self):
        with pytest.raises(ValidationError):
            RoundSnapshot(
                round_id=0,
                phase=RoundPhase.BETTING,
                balance=-1,
                volatility=5,
                total_staked=0,
                cells_with_bets=0,
            )
