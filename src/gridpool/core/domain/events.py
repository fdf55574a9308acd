"""
Events — События RoundController для presentation layer

Immutable Pydantic модели. Каждое событие несёт дискриминатор event_type
и сериализуется через to_dict() в форму, соответствующую контракту
gridpool/core/contracts/schema/round_event.json.

Порядок событий раунда:
RoundStarted → PathStepEvent × N → RoundSettled
либо RoundStarted → PathStepEvent × k → RoundReset (отмена)
"""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

from .cell import Cell
from .round_state import RoundError


class _EventBase(BaseModel):
    model_config = {"frozen": True}

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")


# =============================================================================
# BETTING EVENTS
# =============================================================================


class BetAccepted(_EventBase):
    """Ставка принята."""

    event_type: Literal["BET_ACCEPTED"] = "BET_ACCEPTED"
    cell: Cell
    amount: int = Field(..., gt=0, description="Размер принятой ставки")
    new_total: int = Field(..., gt=0, description="Суммарная ставка на ячейку")
    new_balance: int = Field(..., ge=0, description="Баланс после списания")


class BetRejected(_EventBase):
    """Команда отклонена (ставка, старт, смена волатильности)."""

    event_type: Literal["BET_REJECTED"] = "BET_REJECTED"
    reason: RoundError
    details: str = ""


class VolatilityChanged(_EventBase):
    event_type: Literal["VOLATILITY_CHANGED"] = "VOLATILITY_CHANGED"
    volatility: int = Field(..., ge=0)


# =============================================================================
# ROUND EVENTS
# =============================================================================


class RoundStarted(_EventBase):
    """Раунд запущен, ставки заморожены."""

    event_type: Literal["ROUND_STARTED"] = "ROUND_STARTED"
    round_id: int = Field(..., ge=1)
    volatility: int = Field(..., ge=0)
    step_count: int = Field(..., ge=1, description="Длина пути N")
    total_pool: int = Field(..., gt=0)


class PathStepEvent(_EventBase):
    """Очередной шаг пути (по одному на шаг, строго по порядку)."""

    event_type: Literal["PATH_STEP"] = "PATH_STEP"
    round_id: int = Field(..., ge=1)
    time_index: int = Field(..., ge=0)
    cell: Cell


class RoundSettled(_EventBase):
    """Раунд рассчитан."""

    event_type: Literal["ROUND_SETTLED"] = "ROUND_SETTLED"
    round_id: int = Field(..., ge=1)
    is_win: bool
    payout: int = Field(..., ge=0)
    total_pool: int = Field(..., ge=0)
    winning_cells: List[Cell] = Field(..., description="Отсортированы по (row, col)")
    final_cell: Cell
    new_balance: int = Field(..., ge=0)


class RoundReset(_EventBase):
    """Сброс: ledger очищен, фаза BETTING.

    cancelled_round_id заполнен, если reset прервал раунд в фазе RUNNING.
    """

    event_type: Literal["ROUND_RESET"] = "ROUND_RESET"
    cancelled_round_id: Optional[int] = None


RoundEvent = Union[
    BetAccepted,
    BetRejected,
    VolatilityChanged,
    RoundStarted,
    PathStepEvent,
    RoundSettled,
    RoundReset,
]
