"""
Footprints - uptick/downtick footprint (volume profile) engine.

Classifies ticks as buy or sell pressure, aggregates them into per-price and
per-bin volume for each bar, and persists classified ticks so footprints can
be rebuilt after a restart.
"""

__version__ = "1.6.0"

from footprints.domain.enums import TickType, TickClassification, ImbalanceType
from footprints.domain.models import (
    VolumeNode,
    PriceLevel,
    FootprintBin,
    FootprintBar,
    FootprintTickData,
    MarketTick,
)
from footprints.processing.tick_classifier import TickClassifier
from footprints.processing.bar_builder import FootprintBarBuilder
from footprints.storage.tick_storage import FootprintTickStorage

__all__ = [
    "__version__",
    "TickType",
    "TickClassification",
    "ImbalanceType",
    "VolumeNode",
    "PriceLevel",
    "FootprintBin",
    "FootprintBar",
    "FootprintTickData",
    "MarketTick",
    "TickClassifier",
    "FootprintBarBuilder",
    "FootprintTickStorage",
]
