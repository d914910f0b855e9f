"""
Tick records: live market ticks and persisted classified ticks.
"""

from dataclasses import dataclass
from datetime import datetime

from ..enums import TickClassification


@dataclass(frozen=True)
class MarketTick:
    """A raw quote from the live feed."""
    time: datetime
    bid: float
    ask: float

    @property
    def mid_price(self) -> float:
        return (self.bid + self.ask) / 2.0


@dataclass(frozen=True)
class FootprintTickData:
    """A classified tick as stored by the tick persistence layer (UTC timestamp, mid price)."""
    timestamp: datetime
    price: float
    classification: TickClassification

    @property
    def is_directional(self) -> bool:
        """Only upticks and downticks carry volume on replay."""
        return self.classification in (TickClassification.UPTICK, TickClassification.DOWNTICK)
