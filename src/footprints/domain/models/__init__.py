"""
Data models for footprint analysis.

Pure data containers; the statistics they expose are computed by
`footprints.processing.statistics`.
"""

from .volume_node import VolumeNode
from .price_level import PriceLevel
from .footprint_bin import FootprintBin
from .tick_data import MarketTick, FootprintTickData
from .footprint_bar import FootprintBar

__all__ = [
    "VolumeNode",
    "PriceLevel",        # Volume at one rounded price
    "FootprintBin",      # Equal-width price bucket
    "FootprintBar",      # Footprint of one candlestick
    "MarketTick",        # Live bid/ask quote
    "FootprintTickData", # Persisted classified tick
]
