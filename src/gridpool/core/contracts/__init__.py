"""
Contract Validation Module

Модуль для валидации JSON контрактов границы core ↔ presentation layer.
"""

from .validators import (
    ContractValidator,
    RoundEventValidator,
    RoundSnapshotValidator,
    SchemaLoader,
    validate_round_event,
    validate_round_snapshot,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "RoundEventValidator",
    "RoundSnapshotValidator",
    # Functions
    "validate_round_event",
    "validate_round_snapshot",
]
