"""Trend classification over one or two moving averages."""
from typing import Optional, Sequence
from config.settings import TREND_WINDOWS

BULLISH = "Bullish"
BEARISH = "Bearish"
SIDEWAYS = "Sideways"
INSUFFICIENT = "Insufficient data"


class TrendRule:
    """
    Classifies price against its moving averages.

    windows=(20,)    → price vs SMA20 only.
    windows=(20, 50) → price > SMA20 > SMA50 is Bullish, price < SMA20 < SMA50
                       is Bearish, anything else Sideways; a missing SMA50
                       means Insufficient data.
    """

    def __init__(self, windows: Sequence[int] = TREND_WINDOWS):
        windows = tuple(windows)
        if len(windows) not in (1, 2):
            raise ValueError(f"TrendRule takes 1 or 2 windows, got {windows}")
        if list(windows) != sorted(windows):
            raise ValueError(f"Windows must be ascending, got {windows}")
        self.windows = windows

    def classify(self, price: float, averages: dict[int, Optional[float]]) -> str:
        values = [averages.get(w) for w in self.windows]
        if any(v is None for v in values):
            return INSUFFICIENT
        chain = [price, *values]
        if all(a > b for a, b in zip(chain, chain[1:])):
            return BULLISH
        if all(a < b for a, b in zip(chain, chain[1:])):
            return BEARISH
        return SIDEWAYS

    def __repr__(self) -> str:
        return f"TrendRule(windows={self.windows})"
