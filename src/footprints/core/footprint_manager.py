"""
Footprint Manager

Orchestrates all footprint components for a single symbol:
- FootprintBarBuilder (tick classification and statistics)
- TickPersistence (stored ticks, replayed into bars after a restart)
- FootprintCache (bar_time keyed, bounded)
- Routes host bar updates: historical bars are built once, the current
  bar is rebuilt on every update subject to a render throttle
- Notifies the renderer with renderable footprints only
"""

import time
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from footprints.config.app.models import AppConfig
from footprints.config.symbols.models import SymbolConfig
from footprints.core.footprint_cache import FootprintCache
from footprints.core.logger import get_symbol_logger
from footprints.domain.enums import TickType
from footprints.domain.models import FootprintBar
from footprints.processing.bar_builder import Candle, FootprintBarBuilder, TickSource, estimate_bar_duration
from footprints.storage.kv_store import KeyValueStore
from footprints.storage.tick_persistence import TickPersistence


class FootprintManager:
    """
    Host-facing footprint pipeline for one symbol.

    Single-threaded: the host calls `process_bar` from its per-tick/per-bar
    callback. Candles are dicts with "time" (bar open), "high" and "low".
    """

    def __init__(
        self,
        symbol_cfg: SymbolConfig,
        app_config: AppConfig,
        store: Optional[KeyValueStore] = None,
        tick_source: Optional[TickSource] = None,
        on_footprint: Optional[Callable[[FootprintBar], None]] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Args:
            symbol_cfg: Symbol configuration (name, tick size)
            app_config: Application configuration
            store: Key-value store for tick persistence (optional)
            tick_source: Live tick feed for the builder (optional)
            on_footprint: Renderer callback, receives bars with price levels
            clock: Monotonic clock in seconds used for the render throttle
        """
        self.symbol = symbol_cfg.name
        self.logger = get_symbol_logger(self.symbol)
        self.symbol_cfg = symbol_cfg
        self.app_config = app_config
        self.analysis = app_config.analysis
        self.cache_settings = app_config.cache
        self.on_footprint = on_footprint
        self.clock = clock

        self.tick_size = self.analysis.effective_tick_size(symbol_cfg.tick_size)

        # Persistence is optional: without a store only live ticks are used
        self.persistence: Optional[TickPersistence] = None
        if store is not None and app_config.storage.enabled:
            self.persistence = TickPersistence(self.symbol, store, app_config.storage)

        self.builder = FootprintBarBuilder(
            self.tick_size,
            tick_source=tick_source,
            on_tick_classified=self._on_tick_classified
        )
        self.cache = FootprintCache(self.cache_settings.max_cache_size)

        self.current_bar_time: Optional[datetime] = None
        self._last_render: Optional[float] = None
        self.is_initialized = False

    # -------------------------------------------------------------------------
    # INITIALIZATION
    # -------------------------------------------------------------------------

    def initialize(self, candles: Sequence[Candle], now: Optional[datetime] = None) -> int:
        """
        Reset state, load stored ticks and rebuild the most recent bars.

        Returns:
            Number of bars rebuilt
        """
        self.cache.clear()
        self.current_bar_time = None
        self._last_render = None

        self.logger.info(
            f"Initializing: tick_size={self.tick_size}, "
            f"imbalance={self.analysis.imbalance_threshold}%, "
            f"value_area={self.analysis.value_area_percentage}%, "
            f"bins={self.analysis.number_of_bins}, "
            f"max_bars={self.cache_settings.max_bars_to_display}"
        )

        if self.persistence is not None:
            self.persistence.initialize(now)

        rebuilt = self.recalculate_recent(candles)
        self.is_initialized = True
        self.logger.info(f"Initialization complete - {rebuilt} recent bars rebuilt")
        return rebuilt

    def recalculate_recent(self, candles: Sequence[Candle]) -> int:
        """Build the last `recalculate_bars` bars so stored ticks show up after a reload."""
        count = min(self.cache_settings.recalculate_bars, len(candles))
        start = len(candles) - count

        for index in range(start, len(candles)):
            self._process(candles, index, force_rebuild=False)
            self.cache.mark_processed(candles[index]["time"])

        return count

    # -------------------------------------------------------------------------
    # BAR UPDATES
    # -------------------------------------------------------------------------

    def process_bar(self, candles: Sequence[Candle], index: int) -> Optional[FootprintBar]:
        """
        Handle a host update for the bar at `index`.

        Returns:
            The footprint passed to the renderer, or None when the bar was
            skipped (not visible, throttled, already processed or empty)
        """
        if not self.is_bar_visible(index, len(candles)):
            return None

        bar_time = candles[index]["time"]

        if index == len(candles) - 1:
            if not self._should_render_current_bar():
                return None

            self.current_bar_time = bar_time
            bar = self._process(candles, index, force_rebuild=True)
            self._last_render = self.clock()

            # Intermediate saves happen every save_interval_ticks; also save on each render
            if self.persistence is not None:
                self.persistence.save()
            return bar

        if self.cache.is_processed(bar_time):
            return None

        bar = self._process(candles, index, force_rebuild=False)
        self.cache.mark_processed(bar_time)
        return bar

    def is_bar_visible(self, index: int, bar_count: int) -> bool:
        """Bars within `max_bars_to_display` of the current bar are processed."""
        return (bar_count - 1) - index <= self.cache_settings.max_bars_to_display

    def _should_render_current_bar(self) -> bool:
        if self._last_render is None:
            return True
        elapsed_ms = (self.clock() - self._last_render) * 1000.0
        return elapsed_ms >= self.cache_settings.render_throttle_ms

    # -------------------------------------------------------------------------
    # BUILD
    # -------------------------------------------------------------------------

    def _process(self, candles: Sequence[Candle], index: int, force_rebuild: bool) -> Optional[FootprintBar]:
        bar = self.get_or_build(candles, index, force_rebuild)
        if not bar.has_data:
            return None

        if self.on_footprint is not None:
            self.on_footprint(bar)
        return bar

    def get_or_build(self, candles: Sequence[Candle], index: int, force_rebuild: bool = False) -> FootprintBar:
        """Return the cached footprint, or build it from stored and live ticks and cache it."""
        candle = candles[index]
        bar_time = candle["time"]

        if not force_rebuild:
            cached = self.cache.get(bar_time)
            if cached is not None:
                return cached

        next_open = candles[index + 1]["time"] if index + 1 < len(candles) else None
        duration = estimate_bar_duration(candles)
        bar_close = next_open if next_open is not None else bar_time + duration

        stored_ticks = None
        if self.persistence is not None and self.persistence.tick_storage.count > 0:
            stored_ticks = self.persistence.get_ticks_for_bar(bar_time, bar_close)

        bar = self.builder.build_for_candle(
            candle,
            next_open_time=next_open,
            bar_duration=duration,
            imbalance_threshold=self.analysis.imbalance_threshold,
            value_area_percentage=self.analysis.value_area_percentage,
            number_of_bins=self.analysis.number_of_bins,
            stored_ticks=stored_ticks
        )

        evicted = self.cache.add(bar)
        if evicted:
            self.logger.info(
                f"Cache pruned: removed {evicted} old entries "
                f"(size: {self.cache.size()}/{self.cache.max_size})"
            )
        return bar

    def visible_footprints(self, candles: Sequence[Candle]) -> List[FootprintBar]:
        """Renderable cached footprints for the visible part of `candles`."""
        count = len(candles)
        times = [c["time"] for i, c in enumerate(candles) if self.is_bar_visible(i, count)]
        return self.cache.visible_bars(times)

    # -------------------------------------------------------------------------
    # PERSISTENCE
    # -------------------------------------------------------------------------

    def _on_tick_classified(self, timestamp: datetime, price: float, tick_type: TickType) -> None:
        if self.persistence is not None:
            self.persistence.store_processed_tick(timestamp, price, tick_type)

    def shutdown(self) -> None:
        """Final save of the tick log."""
        if self.persistence is not None:
            self.persistence.save()
        self.logger.info("Shutdown complete")


__all__ = ["FootprintManager"]
