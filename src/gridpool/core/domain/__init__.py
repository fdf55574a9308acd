"""
Domain models and value objects.

Contains fundamental domain entities like Cell, BetLedger, round state and events.
"""

from gridpool.core.domain.cell import Cell, GridBounds, PathStep
from gridpool.core.domain.events import (
    BetAccepted,
    BetRejected,
    PathStepEvent,
    RoundEvent,
    RoundReset,
    RoundSettled,
    RoundStarted,
    VolatilityChanged,
)
from gridpool.core.domain.ledger import BetLedger, LedgerUpdate
from gridpool.core.domain.round_state import (
    LedgerEntry,
    RoundError,
    RoundPhase,
    RoundSnapshot,
    SettlementResult,
)

__all__ = [
    # Cell module
    "Cell",
    "GridBounds",
    "PathStep",
    # Ledger
    "BetLedger",
    "LedgerUpdate",
    "LedgerEntry",
    # Round state
    "RoundPhase",
    "RoundError",
    "RoundSnapshot",
    "SettlementResult",
    # Events
    "RoundEvent",
    "BetAccepted",
    "BetRejected",
    "VolatilityChanged",
    "RoundStarted",
    "PathStepEvent",
    "RoundSettled",
    "RoundReset",
]
