"""
Tick Persistence

Loads and saves one symbol's FootprintTickStorage through a KeyValueStore and
applies the staleness policy:
- On load, a log whose last tick is older than `max_tick_gap` is discarded
- Per bar, stored ticks whose newest tick is more than `max_bar_tick_gap`
  away from the bar open are not replayed

Persistence is best-effort: store errors are logged and never propagate.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from footprints.config.app.models import StorageSettings
from footprints.core.logger import get_logger
from footprints.domain.enums import TickClassification, TickType
from footprints.domain.models import FootprintTickData
from footprints.storage.kv_store import KeyValueStore
from footprints.storage.tick_storage import FootprintTickStorage


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TickPersistence:
    """Owns the tick log of one symbol and its key in the key-value store."""

    def __init__(
        self,
        symbol: str,
        store: KeyValueStore,
        settings: Optional[StorageSettings] = None
    ):
        self.logger = get_logger(__name__)
        self.symbol = symbol
        self.store = store
        self.settings = settings or StorageSettings()

        self.storage_key = FootprintTickStorage.generate_storage_key(symbol)
        self.ticks_since_last_save = 0
        self.tick_storage = self._new_storage()

    def _new_storage(self) -> FootprintTickStorage:
        return FootprintTickStorage(
            self.symbol,
            max_ticks=self.settings.max_ticks,
            max_tick_age=self.settings.max_tick_age,
            cleanup_interval=self.settings.cleanup_interval
        )

    # ------------------------------------------------------------------
    # LOAD
    # ------------------------------------------------------------------
    def initialize(self, now: Optional[datetime] = None) -> int:
        """
        Load the stored log for this symbol.

        Falls back to an empty log when nothing is stored, the blob cannot be
        parsed, or the last tick is older than `max_tick_gap`.

        Returns:
            Number of ticks loaded
        """
        now = now or _utcnow()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        self.ticks_since_last_save = 0
        self.tick_storage = self._new_storage()

        try:
            data = self.store.get_string(self.storage_key)
        except Exception as e:
            self.logger.error(f"[TickPersistence] Error loading {self.storage_key}: {e}")
            return 0

        if not data:
            self.logger.info(f"[TickPersistence] No stored ticks for {self.symbol}")
            return 0

        loaded = FootprintTickStorage.deserialize(
            data,
            now=now,
            max_ticks=self.settings.max_ticks,
            max_tick_age=self.settings.max_tick_age,
            cleanup_interval=self.settings.cleanup_interval
        )

        if loaded is None or loaded.count == 0:
            self.logger.warning(f"[TickPersistence] Stored data for {self.symbol} was empty or unreadable")
            return 0

        gap = now - loaded.last_tick_time
        if gap > self.settings.max_tick_gap:
            self.logger.info(
                f"[TickPersistence] Gap of {gap.total_seconds() / 3600:.1f} hours - discarding {loaded.count} stale ticks"
            )
            return 0

        self.tick_storage = loaded
        self.logger.info(
            f"[TickPersistence] Loaded {loaded.count} ticks for {self.symbol} "
            f"(last tick: {loaded.last_tick_time:%Y-%m-%d %H:%M:%S} UTC)"
        )
        return loaded.count

    # ------------------------------------------------------------------
    # SAVE
    # ------------------------------------------------------------------
    def save(self) -> bool:
        """Serialize, write and flush. Skipped when the log is empty."""
        if self.tick_storage.count == 0:
            return False

        try:
            data = self.tick_storage.serialize()
            self.store.set_string(self.storage_key, data)
            self.store.flush()
        except Exception as e:
            self.logger.error(f"[TickPersistence] Error saving {self.storage_key}: {e}")
            return False

        self.logger.debug(f"[TickPersistence] Saved {self.tick_storage.count} ticks ({len(data)} chars)")
        return True

    def store_processed_tick(self, timestamp: datetime, price: float, tick_type: TickType) -> None:
        """Record a live classified tick; saves every `save_interval_ticks` calls."""
        self.tick_storage.add_tick(timestamp, price, TickClassification.from_tick_type(tick_type))

        self.ticks_since_last_save += 1
        if self.ticks_since_last_save >= self.settings.save_interval_ticks:
            self.save()
            self.ticks_since_last_save = 0

    # ------------------------------------------------------------------
    # REPLAY
    # ------------------------------------------------------------------
    def are_stored_ticks_valid(
        self,
        bar_open: datetime,
        stored_ticks: Optional[Iterable[FootprintTickData]]
    ) -> bool:
        """False when the newest tick is more than `max_bar_tick_gap` from `bar_open` (either side)."""
        if stored_ticks is None:
            return True

        most_recent = max(stored_ticks, key=lambda t: t.timestamp, default=None)
        if most_recent is None:
            return True

        if bar_open.tzinfo is None:
            bar_open = bar_open.replace(tzinfo=timezone.utc)

        tick_gap = abs(bar_open - most_recent.timestamp)
        if tick_gap > self.settings.max_bar_tick_gap:
            self.logger.debug(
                f"[TickPersistence] Bar gap of {tick_gap.total_seconds() / 60:.1f} minutes - "
                f"discarding ticks for bar {bar_open:%Y-%m-%d %H:%M:%S}"
            )
            return False
        return True

    def get_ticks_for_bar(self, bar_open: datetime, bar_close: datetime) -> Optional[List[FootprintTickData]]:
        """Stored ticks for the bar window, or None when there are none or they are stale."""
        ticks = list(self.tick_storage.get_ticks_for_bar(bar_open, bar_close))
        if not ticks or not self.are_stored_ticks_valid(bar_open, ticks):
            return None
        return ticks


__all__ = ["TickPersistence"]
