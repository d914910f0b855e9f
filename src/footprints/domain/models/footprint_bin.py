"""
FootprintBin - Equal-width price bucket aggregating several price levels.

The bar's high-low range is divided into N bins so a footprint shows a handful
of rows instead of one row per tick.
"""

import math
from dataclasses import dataclass

from .volume_node import VolumeNode


@dataclass
class FootprintBin(VolumeNode):
    """Half-open price range [price_bottom, price_top); the topmost bin is closed."""
    price_bottom: float = 0.0
    price_top: float = 0.0

    @property
    def price_mid(self) -> float:
        return (self.price_top + self.price_bottom) / 2.0

    @property
    def ratio(self) -> float:
        """
        Buy-to-sell ratio.

        Returns:
            1.0 when both sides are empty, +inf when sell is zero and buy is not.
        """
        if self.sell_volume == 0:
            return math.inf if self.buy_volume > 0 else 1.0
        return self.buy_volume / self.sell_volume
