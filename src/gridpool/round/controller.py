"""RoundController — state machine раунда и единая точка входа команд.

Фазы:
- BETTING: place_bet и set_volatility разрешены; start только при total_staked() > 0
- RUNNING: путь отдаётся по шагу через advance()/run(); ставки и волатильность заморожены
- SETTLED: расчёт выполнен один раз, результат доступен до reset()
- reset(): из любой фазы → BETTING, ledger очищен, путь отброшен, баланс не меняется

Отмена: reset() во время RUNNING закрывает генератор пути, отбрасывает
частичный путь и не эмитит RoundSettled.

Ошибки ввода возвращаются как CommandResult(accepted=False, error=...),
без исключений и без частичных изменений состояния.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Generator, Iterator, List, Optional, Tuple, Union

from gridpool.core.domain.cell import Cell, PathStep
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
from gridpool.core.domain.ledger import BetLedger
from gridpool.core.domain.round_state import (
    RoundError,
    RoundPhase,
    RoundSnapshot,
    SettlementResult,
)
from gridpool.engine.rng import RandomSource, SeededRandomSource
from gridpool.round.config import RoundConfig

logger = logging.getLogger(__name__)

EventListener = Callable[[RoundEvent], None]
CellLike = Union[Cell, Tuple[int, int]]


def _is_int(value: object) -> bool:
    """Целое число, но не bool."""
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class CommandResult:
    """Результат команды RoundController."""

    accepted: bool
    error: Optional[RoundError]

    # События, эмитированные командой (в порядке эмиссии)
    events: Tuple[RoundEvent, ...]

    # Детали
    details: str


class RoundController:
    """Оркестратор раунда: владеет BetLedger, балансом, фазой и волатильностью.

    Экземпляры независимы; все команды сериализуются через RLock,
    поэтому пара accept-then-deduct атомарна и для нескольких вызывающих.
    """

    def __init__(
        self,
        config: Optional[RoundConfig] = None,
        rng: Optional[RandomSource] = None,
    ):
        """
        Args:
            config: конфигурация раунда (default: пресет cursor)
            rng: источник случайности (default: SeededRandomSource без seed)
        """
        self.config = config or RoundConfig()
        self._rng = rng or SeededRandomSource()
        self._path_generator = self.config.build_path_generator()
        self._settlement_engine = self.config.build_settlement_engine()
        self._bounds = self.config.grid.bounds()

        self._lock = threading.RLock()
        self._listeners: List[EventListener] = []

        self._phase = RoundPhase.BETTING
        self._balance = self.config.starting_credits
        self._ledger = BetLedger()
        self._volatility = self.config.initial_volatility

        self._round_id = 0
        self._steps: Optional[Generator[PathStep, None, None]] = None
        self._path: List[PathStep] = []
        self._expected_steps = 0
        self._last_settlement: Optional[SettlementResult] = None

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def subscribe(self, listener: EventListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def place_bet(self, cell: CellLike, amount: Optional[int] = None) -> CommandResult:
        """Ставка на ячейку (только в BETTING).

        Args:
            cell: Cell или пара (row, col)
            amount: размер ставки (default: config.default_bet_amount)
        """
        with self._lock:
            if self._phase != RoundPhase.BETTING:
                return self._reject(
                    RoundError.INVALID_PHASE,
                    f"Cannot place bet in phase {self._phase.value}",
                )

            target = self._coerce_cell(cell)
            if target is None:
                return self._reject(RoundError.INVALID_CELL, f"Invalid cell {cell!r}")

            stake = self.config.default_bet_amount if amount is None else amount
            update = self._ledger.place_bet(target, stake, self._balance, self._bounds)
            if not update.accepted:
                return self._reject(update.error, update.details)

            event = BetAccepted(
                cell=target,
                amount=stake,
                new_total=update.new_ledger.stake_on(target),
                new_balance=update.new_balance,
            )
            self._ledger = update.new_ledger
            self._balance = update.new_balance

            logger.debug("%s; balance=%d", update.details, self._balance)
            return self._accept([event], update.details)

    def set_volatility(self, level: int) -> CommandResult:
        """Смена волатильности (только в BETTING)."""
        with self._lock:
            if self._phase != RoundPhase.BETTING:
                return self._reject(
                    RoundError.INVALID_PHASE,
                    f"Cannot change volatility in phase {self._phase.value}",
                )

            if not _is_int(level):
                return self._reject(
                    RoundError.INVALID_VOLATILITY,
                    f"Volatility must be an integer, got {level!r}",
                )

            low, high = self.config.volatility_min, self.config.volatility_max
            if not low <= level <= high:
                return self._reject(
                    RoundError.INVALID_VOLATILITY,
                    f"Volatility {level} outside [{low}, {high}]",
                )

            event = VolatilityChanged(volatility=level)
            self._volatility = level
            return self._accept([event], f"Volatility set to {level}")

    def start(self) -> CommandResult:
        """BETTING → RUNNING. Путь генерируется лениво через advance()/run()."""
        with self._lock:
            if self._phase != RoundPhase.BETTING:
                return self._reject(
                    RoundError.INVALID_PHASE,
                    f"Cannot start round in phase {self._phase.value}",
                )

            total_pool = self._ledger.total_staked()
            if total_pool <= 0:
                return self._reject(RoundError.NO_BETS_PLACED, "No bets placed")

            # Событие и генератор строятся до изменения состояния
            round_id = self._round_id + 1
            expected_steps = self._path_generator.step_count(self._volatility)
            event = RoundStarted(
                round_id=round_id,
                volatility=self._volatility,
                step_count=expected_steps,
                total_pool=total_pool,
            )
            steps = self._path_generator.generate(self._volatility, self._rng)

            self._round_id = round_id
            self._path = []
            self._last_settlement = None
            self._expected_steps = expected_steps
            self._steps = steps
            self._phase = RoundPhase.RUNNING

            logger.info(
                "Round %d started: volatility=%d steps=%d pool=%d cells=%d",
                self._round_id,
                self._volatility,
                self._expected_steps,
                total_pool,
                self._ledger.cells_with_bets(),
            )
            return self._accept([event], f"Round {self._round_id} started")

    def advance(self) -> CommandResult:
        """Следующий шаг пути (только в RUNNING).

        На последнем шаге в том же вызове выполняется расчёт:
        события [PathStepEvent, RoundSettled], фаза → SETTLED.
        PathStepEvent доставляется listeners до расчёта, в фазе RUNNING.
        """
        with self._lock:
            if self._phase != RoundPhase.RUNNING or self._steps is None:
                return self._reject(
                    RoundError.INVALID_PHASE,
                    f"Cannot advance in phase {self._phase.value}",
                )

            step = next(self._steps, None)
            if step is None:
                # Генератор исчерпан раньше ожидаемого: путь завершён
                return self._accept([self._settle()], "Path exhausted")

            round_id = self._round_id
            self._path.append(step)
            logger.debug("Round %d step %d at %s", round_id, step.time_index, step.cell)

            step_event = PathStepEvent(
                round_id=round_id, time_index=step.time_index, cell=step.cell
            )
            self._emit([step_event])
            events: List[RoundEvent] = [step_event]

            # Listener мог вызвать reset() на этом шаге: раунд уже отменён
            if self._phase != RoundPhase.RUNNING or self._round_id != round_id:
                return self._accept_without_emit(
                    events, f"Step {step.time_index}, round {round_id} cancelled"
                )

            if len(self._path) >= self._expected_steps:
                settled = self._settle()
                self._emit([settled])
                events.append(settled)

            return self._accept_without_emit(events, f"Step {step.time_index}")

    def run(self) -> Iterator[RoundEvent]:
        """Генератор событий текущего раунда до расчёта или отмены.

        Между yield блокировка не удерживается: reset() из потребителя
        завершает генератор без RoundSettled.
        """
        with self._lock:
            round_id = self._round_id

        while True:
            with self._lock:
                if self._phase != RoundPhase.RUNNING or self._round_id != round_id:
                    return
                result = self.advance()
            yield from result.events

    def play(self) -> CommandResult:
        """start() и прогон пути до расчёта за один вызов (headless режим)."""
        with self._lock:
            started = self.start()
            if not started.accepted:
                return started

            events: List[RoundEvent] = list(started.events)
            events.extend(self.run())

            settlement = self._last_settlement
            details = (
                f"Round {self._round_id} settled: "
                f"{'win' if settlement is not None and settlement.is_win else 'loss'}"
            )
            return self._accept_without_emit(events, details)

    def reset(self) -> CommandResult:
        """Из любой фазы → BETTING. Баланс сохраняется."""
        with self._lock:
            cancelled_round_id = None
            if self._phase == RoundPhase.RUNNING:
                cancelled_round_id = self._round_id
                logger.info(
                    "Round %d cancelled after %d of %d steps",
                    self._round_id,
                    len(self._path),
                    self._expected_steps,
                )

            if self._steps is not None:
                self._steps.close()

            self._steps = None
            self._path = []
            self._expected_steps = 0
            self._last_settlement = None
            self._ledger = self._ledger.clear()
            self._phase = RoundPhase.BETTING

            logger.info("Reset to BETTING, balance=%d", self._balance)
            return self._accept(
                [RoundReset(cancelled_round_id=cancelled_round_id)],
                "Round reset",
            )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def phase(self) -> RoundPhase:
        return self._phase

    @property
    def balance(self) -> int:
        return self._balance

    @property
    def volatility(self) -> int:
        return self._volatility

    @property
    def ledger(self) -> BetLedger:
        return self._ledger

    @property
    def path(self) -> Tuple[PathStep, ...]:
        return tuple(self._path)

    @property
    def round_id(self) -> int:
        return self._round_id

    @property
    def last_settlement(self) -> Optional[SettlementResult]:
        return self._last_settlement

    def snapshot(self) -> RoundSnapshot:
        with self._lock:
            return RoundSnapshot(
                round_id=self._round_id,
                phase=self._phase,
                balance=self._balance,
                volatility=self._volatility,
                ledger=self._ledger.entries(),
                total_staked=self._ledger.total_staked(),
                cells_with_bets=self._ledger.cells_with_bets(),
                current_cell=self._path[-1].cell if self._path else None,
                steps_emitted=len(self._path),
                last_settlement=self._last_settlement,
            )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _settle(self) -> RoundSettled:
        result = self._settlement_engine.settle(self._ledger, tuple(self._path))
        event = RoundSettled(
            round_id=self._round_id,
            is_win=result.is_win,
            payout=result.payout,
            total_pool=result.total_pool,
            winning_cells=result.sorted_winning_cells(),
            final_cell=result.final_cell,
            new_balance=self._balance + result.payout,
        )

        self._balance = event.new_balance
        self._last_settlement = result
        self._steps = None
        self._phase = RoundPhase.SETTLED

        logger.info(
            "Round %d settled: final=%s win=%s payout=%d pool=%d balance=%d",
            self._round_id,
            result.final_cell,
            result.is_win,
            result.payout,
            result.total_pool,
            self._balance,
        )
        return event

    def _coerce_cell(self, cell: CellLike) -> Optional[Cell]:
        if isinstance(cell, Cell):
            return cell
        try:
            row, col = cell
        except (TypeError, ValueError):
            return None
        if not _is_int(row) or not _is_int(col) or row < 0 or col < 0:
            return None
        return Cell(row=row, col=col)

    def _emit(self, events: List[RoundEvent]) -> None:
        for event in events:
            for listener in list(self._listeners):
                listener(event)

    def _accept(self, events: List[RoundEvent], details: str) -> CommandResult:
        self._emit(events)
        return self._accept_without_emit(events, details)

    def _accept_without_emit(self, events: List[RoundEvent], details: str) -> CommandResult:
        return CommandResult(
            accepted=True,
            error=None,
            events=tuple(events),
            details=details,
        )

    def _reject(self, error: RoundError, details: str) -> CommandResult:
        logger.debug("Rejected %s: %s", error.value, details)
        event = BetRejected(reason=error, details=details)
        self._emit([event])
        return CommandResult(
            accepted=False,
            error=error,
            events=(event,),
            details=details,
        )
