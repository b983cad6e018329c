"""Data types shared by the aggregator, trend analyzer and valuator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class PriceSample:
    date: str  # opaque chart label, never parsed
    price: float


PriceSeries = Tuple[PriceSample, ...]
SeriesMap = Dict[str, PriceSeries]
Holdings = Dict[str, float]

BULLISH = "bullish"
BEARISH = "bearish"
SIDEWAYS = "sideways"


@dataclass(frozen=True)
class TrendResult:
    coin: str
    window: int
    percent_change: Optional[float] = None
    classification: Optional[str] = None
    summary: Optional[str] = None
    percent_display: Optional[str] = None

    @property
    def headline(self) -> str:
        return f"{self.coin.upper()} {self.window}-Day Trend"

    def as_dict(self) -> Dict[str, object]:
        return {
            "coin": self.coin,
            "window": self.window,
            "headline": self.headline,
            "percent_change": None if self.percent_change is None else round(self.percent_change, 2),
            "percent_display": self.percent_display,
            "classification": self.classification,
            "summary": self.summary,
        }


@dataclass(frozen=True)
class CycleResult:
    """The series map of one completed aggregation cycle.

    The map is always stored with the coin set, window and version of
    the cycle that produced it, so readers never combine data from two
    cycles.
    """
    version: int
    coins: Tuple[str, ...]
    window: int
    series: SeriesMap
