"""
Footprint Tick Storage

Bounded in-memory log of classified ticks for one symbol, with a compact
text format so it can be written to a key-value store and replayed after a
restart.

FP1 format (newline separated):
    FP1|<symbol>|<last_tick_time>|<count>
    <timestamp>|<price:.8f>|<classification>

Timestamps are integer 100ns ticks since 0001-01-01 UTC.
"""

from datetime import datetime, timedelta, timezone
from typing import Iterator, List, Optional

from footprints.domain.enums import TickClassification
from footprints.domain.models import FootprintTickData

FORMAT_VERSION = "FP1"
STORAGE_KEY_PREFIX = "Footprint"

MAX_TICKS = 100000
MAX_TICK_AGE = timedelta(days=7)
CLEANUP_INTERVAL = 1000

EPOCH = datetime(1, 1, 1, tzinfo=timezone.utc)


# ------------------------------------------------------------------
# TIMESTAMP CODEC
# ------------------------------------------------------------------
def to_ticks(dt: datetime) -> int:
    """UTC datetime -> 100ns ticks since 0001-01-01. Naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - EPOCH) // timedelta(microseconds=1) * 10


def from_ticks(ticks: int) -> datetime:
    """100ns ticks -> aware UTC datetime (sub-microsecond precision is dropped)."""
    return EPOCH + timedelta(microseconds=ticks // 10)


def _as_utc(dt: datetime) -> datetime:
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt


class BarTickView:
    """
    Ticks of one bar window, bar_open <= timestamp < bar_close.

    Each iteration re-filters the owning log, so a view can be walked any
    number of times and reflects ticks added after it was created.
    """

    def __init__(self, storage: "FootprintTickStorage", bar_open: datetime, bar_close: datetime):
        self._storage = storage
        self.bar_open = _as_utc(bar_open)
        self.bar_close = _as_utc(bar_close)

    def __iter__(self) -> Iterator[FootprintTickData]:
        return (t for t in self._storage if self.bar_open <= t.timestamp < self.bar_close)

    def __repr__(self) -> str:
        return f"BarTickView(bar_open={self.bar_open.isoformat()}, bar_close={self.bar_close.isoformat()})"


class FootprintTickStorage:
    """
    Classified tick log for one symbol.

    Ticks are kept in insertion order. Unknown classifications are never
    stored. Every `cleanup_interval` additions the log is trimmed by age,
    then by count (oldest first).

    Not thread-safe: a single owner serializes add/serialize/deserialize.
    """

    def __init__(
        self,
        symbol: str,
        max_ticks: int = MAX_TICKS,
        max_tick_age: timedelta = MAX_TICK_AGE,
        cleanup_interval: int = CLEANUP_INTERVAL
    ):
        self._symbol = symbol
        self._ticks: List[FootprintTickData] = []
        self._last_tick_time: datetime = EPOCH
        self.max_ticks = max_ticks
        self.max_tick_age = max_tick_age
        self.cleanup_interval = cleanup_interval

    # ------------------------------------------------------------------
    # PROPERTIES
    # ------------------------------------------------------------------
    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def count(self) -> int:
        return len(self._ticks)

    @property
    def last_tick_time(self) -> datetime:
        """Timestamp of the most recent added tick; EPOCH when nothing was added."""
        return self._last_tick_time

    def __len__(self) -> int:
        return len(self._ticks)

    def __iter__(self) -> Iterator[FootprintTickData]:
        return iter(list(self._ticks))

    # ------------------------------------------------------------------
    # MUTATION
    # ------------------------------------------------------------------
    def add_tick(self, timestamp: datetime, price: float, classification: TickClassification) -> None:
        """Append a classified tick. Unknown ticks are dropped silently."""
        if classification == TickClassification.UNKNOWN:
            return

        timestamp = _as_utc(timestamp)
        self._ticks.append(FootprintTickData(timestamp, price, TickClassification(classification)))
        self._last_tick_time = timestamp

        if len(self._ticks) % self.cleanup_interval == 0:
            self.cleanup()

    def cleanup(self, now: Optional[datetime] = None) -> int:
        """
        Drop ticks older than `max_tick_age`, then the oldest ticks above `max_ticks`.

        Args:
            now: Reference time (default: current UTC time)

        Returns:
            Number of removed ticks
        """
        now = _as_utc(now) if now is not None else datetime.now(timezone.utc)
        before = len(self._ticks)

        cutoff = now - self.max_tick_age
        self._ticks = [t for t in self._ticks if t.timestamp >= cutoff]

        excess = len(self._ticks) - self.max_ticks
        if excess > 0:
            self._ticks.sort(key=lambda t: t.timestamp)
            del self._ticks[:excess]

        return before - len(self._ticks)

    def clear(self) -> None:
        self._ticks.clear()
        self._last_tick_time = EPOCH

    # ------------------------------------------------------------------
    # QUERIES
    # ------------------------------------------------------------------
    def get_ticks_for_bar(self, bar_open: datetime, bar_close: datetime) -> BarTickView:
        """Restartable view of ticks with bar_open <= timestamp < bar_close, in storage order."""
        return BarTickView(self, bar_open, bar_close)

    def get_earliest_tick_time(self) -> Optional[datetime]:
        if not self._ticks:
            return None
        return min(t.timestamp for t in self._ticks)

    # ------------------------------------------------------------------
    # FP1 CODEC
    # ------------------------------------------------------------------
    def serialize(self) -> str:
        """Run cleanup, then emit the FP1 text blob."""
        self.cleanup()

        lines = [f"{FORMAT_VERSION}|{self._symbol}|{to_ticks(self._last_tick_time)}|{len(self._ticks)}"]
        for t in self._ticks:
            lines.append(f"{to_ticks(t.timestamp)}|{t.price:.8f}|{int(t.classification)}")
        return "\n".join(lines)

    @classmethod
    def deserialize(
        cls,
        data: Optional[str],
        now: Optional[datetime] = None,
        **kwargs
    ) -> Optional["FootprintTickStorage"]:
        """
        Parse an FP1 blob.

        Returns None for empty input or a bad header (wrong version tag, fewer
        than four fields, unparsable time or count). Malformed records are
        skipped. Extra keyword arguments go to the constructor.
        """
        if not data:
            return None

        lines = data.split("\n")
        header = lines[0].strip().split("|")
        if len(header) < 4 or header[0] != FORMAT_VERSION:
            return None

        try:
            last_tick_time = from_ticks(int(header[2]))
            int(header[3])
        except (ValueError, OverflowError):
            return None

        storage = cls(header[1], **kwargs)
        storage._last_tick_time = last_tick_time

        for line in lines[1:]:
            tick = _parse_record(line)
            if tick is not None:
                storage._ticks.append(tick)

        storage.cleanup(now)
        return storage

    @staticmethod
    def generate_storage_key(symbol_name: str) -> str:
        """Key-value stores reject punctuation in keys: keep letters and digits only."""
        return f"{STORAGE_KEY_PREFIX} " + "".join(c for c in symbol_name if c.isalnum())

    def __repr__(self) -> str:
        return f"FootprintTickStorage(symbol={self._symbol!r}, count={len(self._ticks)})"


def _parse_record(line: str) -> Optional[FootprintTickData]:
    parts = line.strip().split("|")
    if len(parts) != 3:
        return None

    try:
        timestamp = from_ticks(int(parts[0]))
        price = float(parts[1])
        classification = TickClassification(int(parts[2]))
    except (ValueError, OverflowError):
        return None

    return FootprintTickData(timestamp, price, classification)


__all__ = [
    "BarTickView",
    "FootprintTickStorage",
    "FORMAT_VERSION",
    "EPOCH",
    "to_ticks",
    "from_ticks",
]
