"""
Tick-size price rounding.

Prices are snapped with round-half-up on `price / tick_size`, then rounded to
the tick size's number of decimals so equal prices always map to the same
float key (0.1 * 101 gives 10.100000000000001, the key must be 10.1).
"""

import math
from decimal import Decimal


def tick_decimals(tick_size: float) -> int:
    """Number of decimal places in `tick_size` (0.25 -> 2, 1e-05 -> 5, 5 -> 0)."""
    exponent = Decimal(repr(tick_size)).normalize().as_tuple().exponent
    return max(0, -exponent)


def round_to_tick(price: float, tick_size: float) -> float:
    """Snap `price` to the nearest multiple of `tick_size` (halves round up)."""
    if tick_size <= 0:
        raise ValueError(f"tick_size must be > 0, got {tick_size}")

    steps = math.floor(price / tick_size + 0.5)
    return round(steps * tick_size, tick_decimals(tick_size))


__all__ = ["round_to_tick", "tick_decimals"]
