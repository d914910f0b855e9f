"""
FootprintBar - Volume distribution across price levels for one candlestick.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from footprints.processing.statistics import detect_imbalance, expand_value_area, mark_point_of_control
from .footprint_bin import FootprintBin
from .price_level import PriceLevel


@dataclass
class FootprintBar:
    """
    Footprint of one bar, identified by its open time.

    Bar indices shift when a chart reloads, so `bar_time` is the only identity
    a footprint carries. Content is mutable while ticks are accumulated; once
    POC, value area and imbalances have been computed consumers treat it as
    read-only. When `bins` is populated renderers should prefer it over the
    raw price levels.
    """
    bar_time: datetime
    price_levels: Dict[float, PriceLevel] = field(default_factory=dict)
    total_buy_volume: int = 0
    total_sell_volume: int = 0
    point_of_control: Optional[PriceLevel] = None
    value_area_high: float = 0.0
    value_area_low: float = 0.0
    imbalance_levels: List[PriceLevel] = field(default_factory=list)
    bins: List[FootprintBin] = field(default_factory=list)
    high: float = 0.0
    low: float = 0.0

    # ------------------------------------------------------------------
    # TOTALS
    # ------------------------------------------------------------------
    @property
    def total_volume(self) -> int:
        return self.total_buy_volume + self.total_sell_volume

    @property
    def delta(self) -> int:
        return self.total_buy_volume - self.total_sell_volume

    @property
    def has_data(self) -> bool:
        """False for a bar with no price levels (not renderable yet)."""
        return bool(self.price_levels)

    @property
    def bin_point_of_control(self) -> Optional[FootprintBin]:
        return next((b for b in self.bins if b.is_point_of_control), None)

    # ------------------------------------------------------------------
    # ACCUMULATION
    # ------------------------------------------------------------------
    def add_tick_volume(self, price: float, volume: int, is_buy: bool) -> None:
        """
        Add volume at `price` (already rounded to tick size).

        Creates the price level on first use.
        """
        level = self.price_levels.get(price)
        if level is None:
            level = PriceLevel(price=price)
            self.price_levels[price] = level

        level.add_volume(volume, is_buy)

        if is_buy:
            self.total_buy_volume += volume
        else:
            self.total_sell_volume += volume

    # ------------------------------------------------------------------
    # STATISTICS
    # ------------------------------------------------------------------
    def calculate_poc(self) -> None:
        """Flag the level with the highest total volume (lowest price on ties)."""
        levels = self.get_sorted_levels()
        poc_index = mark_point_of_control(levels)
        self.point_of_control = levels[poc_index] if poc_index is not None else None

    def calculate_value_area(self, percentage: float = 70.0) -> None:
        """Expand from the POC until `percentage` of the bar volume is covered."""
        if self.point_of_control is None or not self.price_levels:
            self.value_area_high = 0.0
            self.value_area_low = 0.0
            return

        levels = self.get_sorted_levels()
        poc_index = next(i for i, level in enumerate(levels) if level is self.point_of_control)
        lower, upper = expand_value_area(levels, poc_index, percentage)

        self.value_area_low = levels[lower].price
        self.value_area_high = levels[upper].price

    def detect_imbalances(self, threshold_percentage: float = 300.0) -> None:
        """Flag imbalanced levels and collect them in `imbalance_levels`."""
        self.imbalance_levels = [
            level for level in self.get_sorted_levels()
            if detect_imbalance(level, threshold_percentage)
        ]

    # ------------------------------------------------------------------
    # QUERIES
    # ------------------------------------------------------------------
    def get_sorted_levels(self) -> List[PriceLevel]:
        """Price levels sorted by price ascending."""
        return sorted(self.price_levels.values(), key=lambda level: level.price)

    def get_highest_price(self) -> float:
        return max(self.price_levels) if self.price_levels else 0.0

    def get_lowest_price(self) -> float:
        return min(self.price_levels) if self.price_levels else 0.0

    def to_dataframe(self):
        """Price levels as a pandas DataFrame, price ascending."""
        from footprints.processing.frames import levels_frame

        return levels_frame(self.get_sorted_levels())

    def bins_to_dataframe(self):
        """Bins as a pandas DataFrame (empty when binning is disabled)."""
        from footprints.processing.frames import bins_frame

        return bins_frame(self.bins)

    def __repr__(self) -> str:
        poc = self.point_of_control.price if self.point_of_control else None
        return (
            f"FootprintBar(bar_time={self.bar_time.isoformat()}, levels={len(self.price_levels)}, "
            f"buy={self.total_buy_volume}, sell={self.total_sell_volume}, poc={poc}, bins={len(self.bins)})"
        )
