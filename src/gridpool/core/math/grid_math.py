"""
Grid Math — целочисленные примитивы для перемещения по сетке

Модуль содержит всю арифметику, от которой зависит генерация пути:
- Граничные политики: wrap (тор) и clamp (прижатие к краю)
- Размер скачка по волатильности: ceil(volatility / 3)
- Длина пути free-walk: floor(min + (max - min) * volatility / 10)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. wrap(x, size) всегда в [0, size) для любого целого x
2. clamp(x, lo, hi) всегда в [lo, hi]
3. Все функции детерминированы и не имеют побочных эффектов
"""

import math
from typing import Final

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Делитель волатильности для размера скачка (1-3 → 1, 4-6 → 2, 7-9 → 3, 10 → 4)
JUMP_VOLATILITY_DIVISOR: Final[int] = 3

# Шкала волатильности для длины пути free-walk
VOLATILITY_SCALE: Final[int] = 10


# =============================================================================
# ГРАНИЧНЫЕ ПОЛИТИКИ
# =============================================================================


def wrap(value: int, size: int) -> int:
    """
    Тороидальное заворачивание координаты.

    Args:
        value: Координата до заворачивания (может быть отрицательной)
        size: Размер оси (> 0)

    Returns:
        value mod size, всегда в [0, size)

    Raises:
        ValueError: Если size <= 0

    Examples:
        >>> wrap(-1, 10)
        9
        >>> wrap(12, 10)
        2
    """
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")

    return value % size


def clamp(value: int, min_value: int, max_value: int) -> int:
    """
    Ограничение координаты диапазоном [min_value, max_value].

    Examples:
        >>> clamp(-3, 0, 9)
        0
        >>> clamp(11, 0, 9)
        9
    """
    if min_value > max_value:
        raise ValueError(f"min_value {min_value} exceeds max_value {max_value}")

    return max(min_value, min(value, max_value))


def midpoint(size: int) -> int:
    """Середина оси (стартовый уровень цены)."""
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")

    return size // 2


# =============================================================================
# ПАРАМЕТРЫ БЛУЖДАНИЯ
# =============================================================================


def max_jump(volatility: int) -> int:
    """
    Максимальный сдвиг координаты за один шаг.

    max_jump = ceil(volatility / 3)

    Args:
        volatility: Уровень волатильности (>= 0)

    Returns:
        Максимальный модуль смещения за шаг
    """
    if volatility < 0:
        raise ValueError(f"volatility must be non-negative, got {volatility}")

    return math.ceil(volatility / JUMP_VOLATILITY_DIVISOR)


def free_walk_step_count(min_steps: int, max_steps: int, volatility: int) -> int:
    """
    Длина пути в режиме free-walk.

    N = floor(min_steps + (max_steps - min_steps) * volatility / 10)

    Целочисленная арифметика: результат совпадает с floor для
    неотрицательных аргументов и не страдает от погрешностей float.
    """
    if min_steps < 1:
        raise ValueError(f"min_steps must be >= 1, got {min_steps}")
    if max_steps < min_steps:
        raise ValueError(f"max_steps {max_steps} below min_steps {min_steps}")
    if volatility < 0:
        raise ValueError(f"volatility must be non-negative, got {volatility}")

    return min_steps + (max_steps - min_steps) * volatility // VOLATILITY_SCALE


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_in_range(
    value: int,
    name: str,
    min_value: int | None = None,
    max_value: int | None = None,
) -> None:
    """
    Валидация, что целое значение в заданном диапазоне.

    Raises:
        ValueError: Если value вне диапазона
    """
    if min_value is not None and value < min_value:
        raise ValueError(f"{name} must be >= {min_value}, got {value}")

    if max_value is not None and value > max_value:
        raise ValueError(f"{name} must be <= {max_value}, got {value}")
