"""Monte Carlo оценка исхода раунда для фиксированного набора ставок.

Прогоняет независимые пути против одного ledger и собирает статистику:
hit rate, RTP (возвращено / поставлено), средняя длина пути,
среднее число различных ячеек пути, распределение финальных ячеек.
Баланс игрока не затрагивается.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict

from gridpool.core.domain.ledger import BetLedger
from gridpool.engine.path_generator import PathGenerator
from gridpool.engine.rng import SeededRandomSource
from gridpool.engine.settlement import SettlementEngine

logger = logging.getLogger(__name__)


@dataclass
class SimulationSummary:
    """Результаты симуляции."""

    rounds: int
    volatility: int
    wins: int
    hit_rate: float
    total_wagered: int
    total_returned: int
    rtp: float
    avg_path_length: float
    distinct_cells_avg: float
    final_cell_distribution: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "rounds": self.rounds,
            "volatility": self.volatility,
            "wins": self.wins,
            "hit_rate": round(self.hit_rate, 4),
            "total_wagered": self.total_wagered,
            "total_returned": self.total_returned,
            "rtp": round(self.rtp, 4),
            "avg_path_length": round(self.avg_path_length, 2),
            "distinct_cells_avg": round(self.distinct_cells_avg, 2),
            "final_cell_distribution": self.final_cell_distribution,
        }


def simulate_rounds(
    path_generator: PathGenerator,
    settlement_engine: SettlementEngine,
    ledger: BetLedger,
    volatility: int,
    rounds: int = 10_000,
    seed: int = 42,
) -> SimulationSummary:
    """Monte Carlo прогон раундов с одинаковыми ставками.

    Args:
        path_generator: генератор пути (режим и сетка)
        settlement_engine: политика выигрышных ячеек
        ledger: ставки, повторяемые в каждом раунде
        volatility: уровень волатильности
        rounds: количество раундов (> 0)
        seed: seed для воспроизводимости

    Raises:
        ValueError: Если ledger пустой или rounds <= 0
    """
    if ledger.is_empty():
        raise ValueError("Cannot simulate with an empty ledger")
    if rounds <= 0:
        raise ValueError(f"rounds must be positive, got {rounds}")

    rng = SeededRandomSource(seed)
    stake = ledger.total_staked()

    wins = 0
    total_returned = 0
    total_steps = 0
    total_distinct = 0
    finals: Dict[str, int] = {}

    for _ in range(rounds):
        path = path_generator.generate_path(volatility, rng)
        result = settlement_engine.settle(ledger, path)

        if result.is_win:
            wins += 1
        total_returned += result.payout
        total_steps += len(path)
        total_distinct += len({step.cell for step in path})

        key = result.final_cell.key()
        finals[key] = finals.get(key, 0) + 1

    total_wagered = stake * rounds
    summary = SimulationSummary(
        rounds=rounds,
        volatility=volatility,
        wins=wins,
        hit_rate=wins / rounds,
        total_wagered=total_wagered,
        total_returned=total_returned,
        rtp=total_returned / total_wagered,
        avg_path_length=total_steps / rounds,
        distinct_cells_avg=total_distinct / rounds,
        final_cell_distribution={k: round(v / rounds, 4) for k, v in sorted(finals.items())},
    )

    logger.info(
        "Simulated %d rounds at volatility %d: hit_rate=%.4f rtp=%.4f",
        rounds, volatility, summary.hit_rate, summary.rtp,
    )
    return summary
