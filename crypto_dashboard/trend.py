"""Trend analysis for a single price series.

The trend compares the first and the last sample of a series. It is
deliberately coarse: there is no smoothing and no tolerance band, so a
series counts as sideways only when both prices are exactly equal.
"""

from __future__ import annotations

from typing import Optional, Sequence

from .models import BEARISH, BULLISH, SIDEWAYS, PriceSample, TrendResult

_VERB_PHRASES = {
    BULLISH: "shows bullish momentum",
    BEARISH: "shows bearish pressure",
    SIDEWAYS: "is moving sideways",
}

UNDEFINED_PERCENT = "N/A"


def percent_change(first: float, last: float) -> Optional[float]:
    """Return the first-to-last change in percent, ``None`` when ``first`` is 0."""
    if first == 0:
        return None
    return (last - first) / first * 100


def classify(first: float, last: float) -> str:
    # exact comparison, no epsilon
    if last > first:
        return BULLISH
    if last < first:
        return BEARISH
    return SIDEWAYS


def format_percent(change: Optional[float]) -> str:
    """Render a percentage for the headline: ``↑ +10.00%``, ``↓ -10.00%`` or ``0%``."""
    if change is None:
        return UNDEFINED_PERCENT
    # sign of the two-decimal figure, so tiny moves show as 0%
    shown = round(change, 2)
    if shown > 0:
        return f"↑ +{shown:.2f}%"
    if shown < 0:
        return f"↓ {shown:.2f}%"
    return "0%"


def summarize(coin: str, classification: str, window: int) -> str:
    return f"{coin.upper()} {_VERB_PHRASES[classification]} over the selected {window} days."


def analyze(series: Sequence[PriceSample], coin: str, window: int) -> TrendResult:
    """Compute the trend of ``series``.

    Series with fewer than two samples have no trend: every derived
    field of the result is ``None``. A zero first price yields no
    percentage (displayed as ``N/A``) but still a classification.
    """
    if len(series) < 2:
        return TrendResult(coin=coin, window=window)
    first = series[0].price
    last = series[-1].price
    change = percent_change(first, last)
    label = classify(first, last)
    return TrendResult(
        coin=coin,
        window=window,
        percent_change=change,
        classification=label,
        summary=summarize(coin, label, window),
        percent_display=format_percent(change),
    )
