"""
Processing layer: tick classification, price rounding and footprint statistics.

FootprintBarBuilder lives in `footprints.processing.bar_builder`.
"""

from .tick_classifier import TickClassifier
from .price_rounding import round_to_tick, tick_decimals
from .statistics import (
    find_point_of_control,
    mark_point_of_control,
    expand_value_area,
    detect_imbalance,
)

__all__ = [
    "TickClassifier",
    "round_to_tick",
    "tick_decimals",
    "find_point_of_control",
    "mark_point_of_control",
    "expand_value_area",
    "detect_imbalance",
]
