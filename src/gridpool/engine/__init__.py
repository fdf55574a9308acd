"""Engine — алгоритмическое ядро раунда.

- RandomSource: инжектируемый источник случайности
- PathGenerator: стохастический путь (FREE_WALK / TIME_INDEXED)
- SettlementEngine: single-player pari-mutuel расчёт
- simulate_rounds: Monte Carlo оценка hit rate и RTP
"""

from .path_generator import BoundaryPolicy, GridConfig, PathGenerator, WalkConfig, WalkMode
from .rng import FixedRandomSource, RandomSource, ScriptedRandomSource, SeededRandomSource
from .settlement import SettlementEngine, WinningPolicy
from .simulation import SimulationSummary, simulate_rounds

__all__ = [
    "RandomSource",
    "SeededRandomSource",
    "FixedRandomSource",
    "ScriptedRandomSource",
    "PathGenerator",
    "GridConfig",
    "WalkConfig",
    "WalkMode",
    "BoundaryPolicy",
    "SettlementEngine",
    "WinningPolicy",
    "SimulationSummary",
    "simulate_rounds",
]
