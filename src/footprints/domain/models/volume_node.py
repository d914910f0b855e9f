"""
VolumeNode - Buy/sell volume container shared by price levels and bins.
"""

from dataclasses import dataclass

from ..enums import ImbalanceType


@dataclass
class VolumeNode:
    """Buy/sell volume plus the statistics flags set by the footprint engine."""
    buy_volume: int = 0
    sell_volume: int = 0
    is_point_of_control: bool = False
    is_in_value_area: bool = False
    has_imbalance: bool = False
    imbalance_type: ImbalanceType = ImbalanceType.NONE

    @property
    def total_volume(self) -> int:
        return self.buy_volume + self.sell_volume

    @property
    def delta(self) -> int:
        """Buy volume minus sell volume."""
        return self.buy_volume - self.sell_volume

    def add_volume(self, volume: int, is_buy: bool) -> None:
        if is_buy:
            self.buy_volume += volume
        else:
            self.sell_volume += volume
