"""
footprints-replay

Rebuilds footprints purely from a symbol's persisted tick log and prints a
per-bar summary (POC, value area, delta). No live feed is involved.

Usage:
    footprints-replay --symbol EUR/USD --timeframe 15
"""

import argparse
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional

import pandas as pd
from dotenv import load_dotenv

from footprints.config.app import load_app_config
from footprints.config.symbols import load_symbols_config
from footprints.core.logger import get_logger
from footprints.domain.models import FootprintBar
from footprints.processing.bar_builder import FootprintBarBuilder
from footprints.storage.kv_store import DuckDBKeyValueStore
from footprints.storage.tick_storage import FootprintTickStorage


def _floor_time(ts: datetime, bar_duration: timedelta) -> datetime:
    epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)
    return ts - ((ts - epoch) % bar_duration)


def replay_bars(
    storage: FootprintTickStorage,
    builder: FootprintBarBuilder,
    bar_duration: timedelta,
    imbalance_threshold: float = 300.0,
    value_area_percentage: float = 70.0,
    number_of_bins: int = 0
) -> List[FootprintBar]:
    """Build one footprint per bar window that holds stored ticks, oldest first."""
    bar_opens = sorted({_floor_time(t.timestamp, bar_duration) for t in storage})

    bars = []
    for bar_open in bar_opens:
        bar_close = bar_open + bar_duration
        ticks = list(storage.get_ticks_for_bar(bar_open, bar_close))
        prices = [t.price for t in ticks]

        bar = builder.build(
            bar_open,
            bar_close,
            imbalance_threshold=imbalance_threshold,
            value_area_percentage=value_area_percentage,
            number_of_bins=number_of_bins,
            bar_high=max(prices),
            bar_low=min(prices),
            stored_ticks=ticks
        )
        if bar.has_data:
            bars.append(bar)
    return bars


def summarize(bars: List[FootprintBar]) -> pd.DataFrame:
    rows = [
        {
            "bar_time": bar.bar_time,
            "levels": len(bar.price_levels),
            "buy": bar.total_buy_volume,
            "sell": bar.total_sell_volume,
            "delta": bar.delta,
            "poc": bar.point_of_control.price if bar.point_of_control else None,
            "va_low": bar.value_area_low,
            "va_high": bar.value_area_high,
            "imbalances": len(bar.imbalance_levels),
        }
        for bar in bars
    ]
    return pd.DataFrame(rows, columns=[
        "bar_time", "levels", "buy", "sell", "delta", "poc", "va_low", "va_high", "imbalances"
    ])


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="footprints-replay",
        description="Rebuild footprints from the persisted tick log of a symbol"
    )
    parser.add_argument("--symbol", required=True, help="Symbol name as in symbols.yml (e.g. EUR/USD)")
    parser.add_argument("--timeframe", type=int, default=15, help="Bar duration in minutes (default: 15)")
    parser.add_argument("--config-dir", default=None, help="Config directory (default: $CONFIG_DIR or ./config)")
    parser.add_argument("--db", default=None, help="DuckDB path (default: storage.database_path)")
    parser.add_argument("--last", type=int, default=20, help="Print only the last N bars (default: 20)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = _parse_args(argv)
    logger = get_logger(__name__)

    config_dir = Path(args.config_dir or os.getenv("CONFIG_DIR", "config"))
    app_config = load_app_config(config_dir / "app.yml")
    symbols_config = load_symbols_config(config_dir / "symbols.yml")

    symbol_cfg = symbols_config.get(args.symbol)
    if symbol_cfg is None:
        logger.error(f"Unknown symbol {args.symbol!r} (not in {config_dir / 'symbols.yml'})")
        return 1

    if args.timeframe <= 0:
        logger.error(f"--timeframe must be > 0, got {args.timeframe}")
        return 1

    store = DuckDBKeyValueStore(args.db or app_config.storage.database_path)
    try:
        data = store.get_string(FootprintTickStorage.generate_storage_key(symbol_cfg.name))
    finally:
        store.close()

    storage = FootprintTickStorage.deserialize(
        data,
        max_ticks=app_config.storage.max_ticks,
        max_tick_age=app_config.storage.max_tick_age
    )
    if storage is None or storage.count == 0:
        logger.warning(f"No stored ticks for {symbol_cfg.name}")
        return 0

    analysis = app_config.analysis
    builder = FootprintBarBuilder(analysis.effective_tick_size(symbol_cfg.tick_size))
    bars = replay_bars(
        storage,
        builder,
        timedelta(minutes=args.timeframe),
        imbalance_threshold=analysis.imbalance_threshold,
        value_area_percentage=analysis.value_area_percentage,
        number_of_bins=analysis.number_of_bins
    )

    logger.info(f"Replayed {storage.count} ticks into {len(bars)} bars for {symbol_cfg.name}")
    print(summarize(bars[-args.last:]).to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
