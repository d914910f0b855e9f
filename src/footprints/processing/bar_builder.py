"""
Footprint Bar Builder

Builds a FootprintBar for one bar's time window:
1. Replays persisted ticks (already classified) for the window
2. Classifies live ticks in [open, close) with the uptick/downtick rule
3. Computes POC, value area and imbalances over price levels
4. Optionally re-buckets the levels into N equal-width bins

One builder owns one TickClassifier that is reset per bar, so a builder
instance must only build one bar at a time.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Iterable, Optional

from footprints.core.logger import get_logger
from footprints.domain.enums import TickClassification, TickType
from footprints.domain.models import FootprintBar, FootprintTickData, MarketTick
from footprints.processing.bin_aggregator import build_bins
from footprints.processing.price_rounding import round_to_tick
from footprints.processing.tick_classifier import TickClassifier

Candle = Dict[str, Any]
TickSource = Callable[[], Iterable[MarketTick]]
TickClassifiedCallback = Callable[[datetime, float, TickType], None]

DEFAULT_BAR_DURATION = timedelta(minutes=1)


class FootprintBarBuilder:
    """
    Tick-by-tick footprint construction.

    Tick volume is a tick count: every attributed tick adds 1 to its side.
    """

    def __init__(
        self,
        tick_size: float,
        tick_source: Optional[TickSource] = None,
        on_tick_classified: Optional[TickClassifiedCallback] = None
    ):
        """
        Args:
            tick_size: Instrument tick size used to round prices into levels
            tick_source: Returns the live ticks currently held by the feed (optional)
            on_tick_classified: Called with (timestamp, mid_price, side) for every
                live tick that received a Buy/Sell classification
        """
        if tick_size <= 0:
            raise ValueError(f"tick_size must be > 0, got {tick_size}")

        self.logger = get_logger(__name__)
        self.tick_size = tick_size
        self.tick_source = tick_source
        self.on_tick_classified = on_tick_classified
        self.classifier = TickClassifier()

    # ------------------------------------------------------------------
    # BUILD
    # ------------------------------------------------------------------
    def build(
        self,
        bar_open: datetime,
        bar_close: datetime,
        imbalance_threshold: float = 300.0,
        value_area_percentage: float = 70.0,
        number_of_bins: int = 0,
        bar_high: float = 0.0,
        bar_low: float = 0.0,
        stored_ticks: Optional[Iterable[FootprintTickData]] = None
    ) -> FootprintBar:
        """
        Build the footprint for the window [bar_open, bar_close).

        Stored ticks are replayed first: only upticks and downticks add volume,
        but every replayed price warms up the classifier so the first live tick
        is classified against recent history. Live ticks at or before the newest
        stored tick are already part of the replay and are skipped, so a rebuilt
        bar neither counts nor reports them twice.

        Returns:
            A finalized FootprintBar. It has no price levels when neither stored
            nor live ticks fall into the window; callers skip rendering it.
        """
        if bar_close <= bar_open:
            raise ValueError(f"bar_close {bar_close} must be after bar_open {bar_open}")

        bar = FootprintBar(bar_time=bar_open)
        self.classifier.reset()

        replayed = 0
        replayed_until: Optional[datetime] = None
        if stored_ticks is not None:
            for tick in stored_ticks:
                self.classifier.classify(tick.price)
                if replayed_until is None or tick.timestamp > replayed_until:
                    replayed_until = tick.timestamp
                if not tick.is_directional:
                    continue

                price = round_to_tick(tick.price, self.tick_size)
                bar.add_tick_volume(price, 1, tick.classification == TickClassification.UPTICK)
                replayed += 1

        live = 0
        if self.tick_source is not None:
            for tick in self.tick_source():
                if tick.time < bar_open or tick.time >= bar_close:
                    continue
                # Already counted through the stored log
                if replayed_until is not None and _as_utc(tick.time) <= replayed_until:
                    continue

                mid_price = tick.mid_price
                tick_type = self.classifier.classify(mid_price)
                if tick_type == TickType.UNKNOWN:
                    continue

                if self.on_tick_classified is not None:
                    self.on_tick_classified(tick.time, mid_price, tick_type)

                price = round_to_tick(mid_price, self.tick_size)
                bar.add_tick_volume(price, 1, tick_type == TickType.BUY)
                live += 1

        bar.calculate_poc()
        bar.calculate_value_area(value_area_percentage)
        bar.detect_imbalances(imbalance_threshold)

        bar.high = bar_high
        bar.low = bar_low

        if number_of_bins > 0 and bar.has_data:
            bar.bins = build_bins(
                bar.price_levels.values(),
                high=bar_high,
                low=bar_low,
                tick_size=self.tick_size,
                number_of_bins=number_of_bins,
                imbalance_threshold=imbalance_threshold,
                value_area_percentage=value_area_percentage
            )

        self.logger.debug(
            f"[FootprintBarBuilder] Built {bar_open.isoformat()}: "
            f"replayed={replayed}, live={live}, levels={len(bar.price_levels)}"
        )
        return bar

    def build_for_candle(
        self,
        candle: Candle,
        next_open_time: Optional[datetime] = None,
        bar_duration: timedelta = DEFAULT_BAR_DURATION,
        imbalance_threshold: float = 300.0,
        value_area_percentage: float = 70.0,
        number_of_bins: int = 0,
        stored_ticks: Optional[Iterable[FootprintTickData]] = None
    ) -> FootprintBar:
        """
        Build from a candle dict with "time", "high" and "low" keys.

        The window closes at the next candle's open time; for the last candle,
        at its open time plus `bar_duration`.
        """
        bar_open = candle["time"]
        bar_close = next_open_time if next_open_time is not None else bar_open + bar_duration

        return self.build(
            bar_open,
            bar_close,
            imbalance_threshold=imbalance_threshold,
            value_area_percentage=value_area_percentage,
            number_of_bins=number_of_bins,
            bar_high=float(candle["high"]),
            bar_low=float(candle["low"]),
            stored_ticks=stored_ticks
        )


def _as_utc(dt: datetime) -> datetime:
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt

def estimate_bar_duration(candles) -> timedelta:
    """Distance between the first two candles, or one minute with fewer than two."""
    if len(candles) >= 2:
        duration = candles[1]["time"] - candles[0]["time"]
        if duration > timedelta(0):
            return duration
    return DEFAULT_BAR_DURATION


__all__ = ["FootprintBarBuilder", "estimate_bar_duration", "Candle", "TickSource"]
