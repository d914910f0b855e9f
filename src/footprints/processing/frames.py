"""
pandas export of footprint levels and bins for renderers.
"""

from typing import Iterable

import pandas as pd

from footprints.domain.models.volume_node import VolumeNode

LEVEL_COLUMNS = [
    "price", "buy_volume", "sell_volume", "total_volume",
    "delta", "is_poc", "in_value_area", "imbalance",
]
BIN_COLUMNS = ["price_bottom", "price_top"] + LEVEL_COLUMNS


def _node_row(node: VolumeNode) -> dict:
    return {
        "buy_volume": node.buy_volume,
        "sell_volume": node.sell_volume,
        "total_volume": node.total_volume,
        "delta": node.delta,
        "is_poc": node.is_point_of_control,
        "in_value_area": node.is_in_value_area,
        "imbalance": node.imbalance_type.value,
    }


def levels_frame(levels: Iterable) -> pd.DataFrame:
    """One row per price level, in the order given (price ascending for sorted levels)."""
    rows = [dict(price=level.price, **_node_row(level)) for level in levels]
    return pd.DataFrame(rows, columns=LEVEL_COLUMNS)


def bins_frame(bins: Iterable) -> pd.DataFrame:
    """One row per bin; `price` is the bin's midpoint."""
    rows = [
        dict(price_bottom=b.price_bottom, price_top=b.price_top, price=b.price_mid, **_node_row(b))
        for b in bins
    ]
    return pd.DataFrame(rows, columns=BIN_COLUMNS)


__all__ = ["levels_frame", "bins_frame", "LEVEL_COLUMNS", "BIN_COLUMNS"]
