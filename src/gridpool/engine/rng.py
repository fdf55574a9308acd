"""RNG — источники случайных целых для генерации пути.

PathGenerator получает случайность только через RandomSource,
поэтому путь детерминирован при фиксированном seed или stub-источнике.
"""

import random
from typing import Iterable, List, Optional, Protocol, runtime_checkable

from gridpool.core.math import clamp


@runtime_checkable
class RandomSource(Protocol):
    """Capability-объект: равномерное целое в [low, high] включительно."""

    def randint(self, low: int, high: int) -> int:
        ...


class SeededRandomSource:
    """Источник на основе random.Random (seed=None → системная энтропия)."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        if low > high:
            raise ValueError(f"Empty range [{low}, {high}]")
        return self._rng.randint(low, high)


class FixedRandomSource:
    """Stub для тестов: всегда возвращает value, прижатое к запрошенному диапазону.

    FixedRandomSource(0) даёт нулевое смещение на каждом шаге блуждания.
    calls растёт на одну запись за вызов, для игровых раундов не использовать.
    """

    def __init__(self, value: int = 0):
        self.value = value
        self.calls: List[tuple[int, int]] = []

    def randint(self, low: int, high: int) -> int:
        if low > high:
            raise ValueError(f"Empty range [{low}, {high}]")
        self.calls.append((low, high))
        return clamp(self.value, low, high)


class ScriptedRandomSource:
    """Stub для тестов: воспроизводит заданную последовательность значений.

    Каждое значение прижимается к запрошенному диапазону.
    calls растёт на одну запись за вызов, для игровых раундов не использовать.
    """

    def __init__(self, values: Iterable[int]):
        self._values = list(values)
        self._index = 0
        self.calls: List[tuple[int, int]] = []

    def randint(self, low: int, high: int) -> int:
        if low > high:
            raise ValueError(f"Empty range [{low}, {high}]")
        if self._index >= len(self._values):
            raise RuntimeError(
                f"ScriptedRandomSource exhausted after {len(self._values)} draws"
            )
        value = self._values[self._index]
        self._index += 1
        self.calls.append((low, high))
        return clamp(value, low, high)

    @property
    def remaining(self) -> int:
        return len(self._values) - self._index
