from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Set

from footprints.domain.models import FootprintBar


class FootprintCache:
    """
    Bounded footprint store keyed by bar open time.

    Responsibilities:
    -----------------
    • Keep at most `max_size` footprints, evicting the oldest bar_time first
    • Track which historical bars were already processed (built once)
    • Forget the processed flag of evicted bars so they can be rebuilt
    """

    def __init__(self, max_size: int = 200):
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")

        self.max_size = max_size
        self._bars: Dict[datetime, FootprintBar] = {}
        self._processed: Set[datetime] = set()

    # ------------------------------------------------------------------
    # INTROSPECTION
    # ------------------------------------------------------------------
    def size(self) -> int:
        return len(self._bars)

    def __len__(self) -> int:
        return len(self._bars)

    def __contains__(self, bar_time: datetime) -> bool:
        return bar_time in self._bars

    def get(self, bar_time: datetime) -> Optional[FootprintBar]:
        return self._bars.get(bar_time)

    def bar_times(self) -> List[datetime]:
        """Cached bar times, oldest first."""
        return sorted(self._bars)

    def visible_bars(self, bar_times: Iterable[datetime]) -> List[FootprintBar]:
        """Cached, renderable footprints for the given bar times (in the given order)."""
        result = []
        for bar_time in bar_times:
            bar = self._bars.get(bar_time)
            if bar is not None and bar.has_data:
                result.append(bar)
        return result

    # ------------------------------------------------------------------
    # PROCESSED TRACKING
    # ------------------------------------------------------------------
    def is_processed(self, bar_time: datetime) -> bool:
        return bar_time in self._processed

    def mark_processed(self, bar_time: datetime) -> None:
        self._processed.add(bar_time)

    # ------------------------------------------------------------------
    # ADD / PRUNE
    # ------------------------------------------------------------------
    def add(self, bar: FootprintBar) -> int:
        """
        Insert or replace the footprint for `bar.bar_time`, then prune.

        Returns:
            Number of evicted entries
        """
        if not isinstance(bar.bar_time, datetime):
            raise TypeError(f"[FootprintCache] bar_time must be a datetime, got {type(bar.bar_time).__name__}")

        self._bars[bar.bar_time] = bar
        return self.prune()

    def prune(self) -> int:
        """Evict oldest bar_time entries until the cache is within `max_size`."""
        excess = len(self._bars) - self.max_size
        if excess <= 0:
            return 0

        for bar_time in sorted(self._bars)[:excess]:
            del self._bars[bar_time]
            self._processed.discard(bar_time)

        return excess

    def clear(self) -> None:
        self._bars.clear()
        self._processed.clear()


__all__ = ["FootprintCache"]
