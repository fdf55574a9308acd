"""Round — управление фазами раунда и пресеты вариантов игры.

- RoundController: state machine BETTING → RUNNING → SETTLED → (reset) → BETTING
- RoundConfig: конфигурация сетки, блуждания, политики выигрыша и баланса
- PRESETS: cursor / price / price_path
"""

from .config import PRESET_NAMES, PRESETS, RoundConfig, get_preset
from .controller import CommandResult, RoundController

__all__ = [
    "RoundController",
    "CommandResult",
    "RoundConfig",
    "PRESETS",
    "PRESET_NAMES",
    "get_preset",
]
