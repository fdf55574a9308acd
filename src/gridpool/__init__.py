"""
gridpool — single-player grid betting round engine.

Usage:
    from gridpool import RoundController, get_preset
    controller = RoundController(get_preset("cursor"))
    controller.place_bet((5, 5), 10)
    result = controller.play()
"""

from gridpool.core.domain import Cell, RoundError, RoundPhase
from gridpool.round import CommandResult, RoundConfig, RoundController, get_preset

__version__ = "0.1.0"

__all__ = [
    "Cell",
    "RoundError",
    "RoundPhase",
    "CommandResult",
    "RoundConfig",
    "RoundController",
    "get_preset",
]
