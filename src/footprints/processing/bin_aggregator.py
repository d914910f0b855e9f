"""
Bin Aggregator - Re-buckets a bar's price levels into N equal-width bins.
"""

import math
from typing import Iterable, List

from footprints.domain.models.footprint_bin import FootprintBin
from footprints.domain.models.price_level import PriceLevel
from footprints.processing.price_rounding import tick_decimals
from footprints.processing.statistics import detect_imbalance, expand_value_area, mark_point_of_control


def build_bins(
    levels: Iterable[PriceLevel],
    high: float,
    low: float,
    tick_size: float,
    number_of_bins: int,
    imbalance_threshold: float = 300.0,
    value_area_percentage: float = 70.0
) -> List[FootprintBin]:
    """
    Partition price levels into equal-width bins over [low, high] and compute bin statistics.

    A bar whose range is narrower than one tick (doji) collapses to a single
    bin [low, high + tick_size) flagged as POC and value area. Otherwise bin i
    spans [low + i*size, low + (i+1)*size); a level's bin index is
    floor((price - low) / size) clamped to [0, N-1], so a level at exactly
    `high` lands in the top bin.

    Args:
        levels: Price levels of the bar
        high: Bar OHLC high
        low: Bar OHLC low
        tick_size: Instrument tick size
        number_of_bins: N (must be > 0)
        imbalance_threshold: Ratio threshold in percent
        value_area_percentage: Value area target in percent

    Returns:
        Bins ordered by price ascending
    """
    if number_of_bins <= 0:
        raise ValueError(f"number_of_bins must be > 0, got {number_of_bins}")

    levels = list(levels)
    # rounded so a one-tick bar (10.1 - 10.0 == 0.0999...96) is not taken for a doji
    price_range = high - low

    if round(price_range, tick_decimals(tick_size)) < tick_size:
        single = FootprintBin(price_bottom=low, price_top=high + tick_size)
        for level in levels:
            single.buy_volume += level.buy_volume
            single.sell_volume += level.sell_volume
        detect_imbalance(single, imbalance_threshold)
        single.is_point_of_control = True
        single.is_in_value_area = True
        return [single]

    bin_size = price_range / number_of_bins
    bins = [
        FootprintBin(price_bottom=low + i * bin_size, price_top=low + (i + 1) * bin_size)
        for i in range(number_of_bins)
    ]

    for level in levels:
        index = math.floor((level.price - low) / bin_size)
        index = max(0, min(number_of_bins - 1, index))
        bins[index].buy_volume += level.buy_volume
        bins[index].sell_volume += level.sell_volume

    for b in bins:
        detect_imbalance(b, imbalance_threshold)

    poc_index = mark_point_of_control(bins)
    if poc_index is not None:
        expand_value_area(bins, poc_index, value_area_percentage)

    return bins


__all__ = ["build_bins"]
