"""RoundConfig — конфигурация раунда и пресеты вариантов игры.

Пресеты:
- cursor:     FREE_WALK + WRAP + SINGLE_CELL (курсор, выигрывает финальная ячейка)
- price:      TIME_INDEXED + CLAMP + SINGLE_CELL (цена, выигрывает финальный уровень)
- price_path: TIME_INDEXED + CLAMP + FULL_PATH (цена, выигрывает любая посещённая ячейка)
"""

from dataclasses import dataclass, field

from gridpool.core.math import validate_in_range
from gridpool.engine.path_generator import GridConfig, PathGenerator, WalkConfig, WalkMode
from gridpool.engine.settlement import SettlementEngine, WinningPolicy


@dataclass(frozen=True)
class RoundConfig:
    """Конфигурация RoundController.

    - starting_credits: баланс при создании контроллера
    - default_bet_amount: размер ставки, если amount не передан
    - initial_volatility: волатильность до первой смены
    - volatility_min / volatility_max: допустимый диапазон волатильности
    """

    grid: GridConfig = field(default_factory=GridConfig)
    walk: WalkConfig = field(default_factory=WalkConfig)
    winning_policy: WinningPolicy = WinningPolicy.SINGLE_CELL
    starting_credits: int = 1000
    default_bet_amount: int = 10
    initial_volatility: int = 5
    volatility_min: int = 1
    volatility_max: int = 10

    def __post_init__(self):
        validate_in_range(self.starting_credits, "starting_credits", min_value=0)
        validate_in_range(self.default_bet_amount, "default_bet_amount", min_value=1)
        validate_in_range(self.volatility_min, "volatility_min", min_value=0)
        validate_in_range(
            self.volatility_max, "volatility_max", min_value=self.volatility_min
        )
        validate_in_range(
            self.initial_volatility,
            "initial_volatility",
            min_value=self.volatility_min,
            max_value=self.volatility_max,
        )

    def build_path_generator(self) -> PathGenerator:
        return PathGenerator(grid_config=self.grid, walk_config=self.walk)

    def build_settlement_engine(self) -> SettlementEngine:
        return SettlementEngine(winning_policy=self.winning_policy)


PRESETS = {
    "cursor": RoundConfig(
        walk=WalkConfig(mode=WalkMode.FREE_WALK),
        winning_policy=WinningPolicy.SINGLE_CELL,
    ),
    "price": RoundConfig(
        walk=WalkConfig(mode=WalkMode.TIME_INDEXED),
        winning_policy=WinningPolicy.SINGLE_CELL,
    ),
    "price_path": RoundConfig(
        walk=WalkConfig(mode=WalkMode.TIME_INDEXED),
        winning_policy=WinningPolicy.FULL_PATH,
    ),
}

PRESET_NAMES = list(PRESETS.keys())


def get_preset(name: str) -> RoundConfig:
    """Конфигурация варианта игры по имени."""
    config = PRESETS.get(name.lower())
    if config is None:
        raise ValueError(f"Unknown preset: {name}. Available: {PRESET_NAMES}")
    return config
