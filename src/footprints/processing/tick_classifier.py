"""
Tick Classifier - Uptick/downtick rule for buy/sell attribution.
"""

from typing import Optional

from footprints.domain.enums import TickType


class TickClassifier:
    """
    Stateful classifier turning a price sequence into Buy/Sell/Unknown.

    - Uptick (price > previous): Buy
    - Downtick (price < previous): Sell
    - Zero tick (price == previous): repeats the previous classification
    - First tick since construction or reset: Unknown

    A zero tick right after the first tick repeats Unknown, since there is no
    direction to inherit yet.
    """

    def __init__(self):
        self._previous_price: float = 0.0
        self._previous_type: TickType = TickType.UNKNOWN
        self._is_first_tick: bool = True

    def reset(self) -> None:
        """Forget the reference price (call once per new bar)."""
        self._previous_price = 0.0
        self._previous_type = TickType.UNKNOWN
        self._is_first_tick = True

    def classify(self, price: float) -> TickType:
        """
        Classify `price` against the previous one and make it the new reference.

        Args:
            price: Current tick price

        Returns:
            TickType.BUY, TickType.SELL or TickType.UNKNOWN
        """
        if self._is_first_tick:
            self._previous_price = price
            self._previous_type = TickType.UNKNOWN
            self._is_first_tick = False
            return TickType.UNKNOWN

        if price > self._previous_price:
            current = TickType.BUY
        elif price < self._previous_price:
            current = TickType.SELL
        else:
            current = self._previous_type

        self._previous_price = price
        self._previous_type = current
        return current

    @property
    def is_fresh(self) -> bool:
        """True until the first tick after construction or reset."""
        return self._is_first_tick

    @property
    def last_type(self) -> TickType:
        return self._previous_type

    @property
    def last_price(self) -> Optional[float]:
        """Reference price, or None when no tick has been seen."""
        return None if self._is_first_tick else self._previous_price


__all__ = ["TickClassifier"]
