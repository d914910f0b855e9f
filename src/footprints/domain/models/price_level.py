"""
PriceLevel - Volume traded at a single tick-rounded price inside a bar.
"""

import math
from dataclasses import dataclass

from .volume_node import VolumeNode


@dataclass
class PriceLevel(VolumeNode):
    """Buy/sell volume at one price (rounded to tick size)."""
    price: float = 0.0

    @property
    def buy_sell_ratio(self) -> float:
        """
        Buy volume divided by sell volume.

        Returns:
            0.0 when the level has no volume, +inf when only buy volume exists.
        """
        if self.sell_volume == 0 and self.buy_volume == 0:
            return 0.0
        if self.sell_volume == 0:
            return math.inf
        return self.buy_volume / self.sell_volume

    @property
    def dominant_side(self) -> str:
        """Return "Buy", "Sell" or "Neutral"."""
        if self.buy_volume > self.sell_volume:
            return "Buy"
        if self.sell_volume > self.buy_volume:
            return "Sell"
        return "Neutral"
