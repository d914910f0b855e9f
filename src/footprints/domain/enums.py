"""
Enumerations for footprint components.

Centralized location for all enum types used across the domain,
processing and storage layers.
"""

from enum import Enum, IntEnum


# ============================================================================
# TICK ENUMS
# ============================================================================

class TickType(Enum):
    """Live classification produced by the uptick/downtick rule."""
    UNKNOWN = "unknown"  # First tick, no reference price yet
    BUY = "buy"          # Uptick
    SELL = "sell"        # Downtick


class TickClassification(IntEnum):
    """Persisted tick classification (integer values are part of the FP1 format)."""
    UNKNOWN = 0
    UPTICK = 1
    DOWNTICK = 2
    ZERO_TICK = 3

    @classmethod
    def from_tick_type(cls, tick_type: TickType) -> "TickClassification":
        """Map Buy to Uptick and Sell to Downtick; anything else is Unknown."""
        if tick_type is TickType.BUY:
            return cls.UPTICK
        if tick_type is TickType.SELL:
            return cls.DOWNTICK
        return cls.UNKNOWN


# ============================================================================
# STATISTICS ENUMS
# ============================================================================

class ImbalanceType(Enum):
    """Side of a detected volume imbalance."""
    NONE = "none"
    BUY = "buy"    # Buy volume significantly exceeds sell volume
    SELL = "sell"  # Sell volume significantly exceeds buy volume
