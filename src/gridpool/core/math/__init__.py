"""
Core math modules для gridpool

Целочисленные примитивы сетки: граничные политики и параметры блуждания.
"""

from gridpool.core.math.grid_math import (
    JUMP_VOLATILITY_DIVISOR,
    VOLATILITY_SCALE,
    clamp,
    free_walk_step_count,
    max_jump,
    midpoint,
    validate_in_range,
    wrap,
)

__all__ = [
    # Constants
    "JUMP_VOLATILITY_DIVISOR",
    "VOLATILITY_SCALE",
    # Boundary policies
    "wrap",
    "clamp",
    "midpoint",
    # Walk parameters
    "max_jump",
    "free_walk_step_count",
    # Validation
    "validate_in_range",
]
