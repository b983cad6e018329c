"""Aggregation of per-coin price series into one cycle result.

``SeriesAggregator`` fetches every selected coin concurrently for a
single shared window and only hands back a series map once all fetches
have settled. A cycle is all-or-nothing: if one coin fails, the caller
gets an ``AggregationError`` naming every failed coin instead of a map
with holes in it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Iterable, List

import pandas as pd

from .errors import AggregationError, FetchError
from .models import PriceSeries, SeriesMap
from .providers.base import PriceProvider
from .registry import require_coins, require_window

log = logging.getLogger(__name__)


class SeriesAggregator:
    def __init__(self, provider: PriceProvider, timeout_s: float = 10.0) -> None:
        self._provider = provider
        self._timeout_s = timeout_s

    async def _fetch(self, coin: str, window: int) -> PriceSeries:
        try:
            samples = await asyncio.wait_for(
                asyncio.to_thread(self._provider.price_history, coin, window),
                timeout=self._timeout_s,
            )
        except asyncio.TimeoutError as e:
            raise FetchError(coin, f"timed out after {self._timeout_s}s") from e
        return tuple(samples)

    async def aggregate(self, coins: Iterable[str], window: int) -> SeriesMap:
        """Fetch ``coins`` over ``window`` days and return the series map.

        Raises ``InvalidSelection`` for unknown coins or windows and
        ``AggregationError`` when any fetch fails.
        """
        selected = require_coins(coins)
        window = require_window(window)
        outcomes = await asyncio.gather(
            *(self._fetch(coin, window) for coin in selected),
            return_exceptions=True,
        )
        series: SeriesMap = {}
        failures: Dict[str, str] = {}
        for coin, outcome in zip(selected, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                reason = outcome.reason if isinstance(outcome, FetchError) else repr(outcome)
                log.warning("Fetch failed coin=%s days=%s: %s", coin, window, reason)
                failures[coin] = reason
            else:
                series[coin] = outcome
        if failures:
            raise AggregationError(failures)
        return series


def chart_rows(series_map: SeriesMap) -> List[Dict[str, Any]]:
    """Merge per-coin series into chart rows keyed by date label.

    Each row is ``{"date": label, "<coin>": price or None, ...}``. Labels
    keep first-appearance order across coins; a label repeated inside
    one series keeps its last price.
    """
    columns = []
    for coin, series in series_map.items():
        col = pd.Series(
            [s.price for s in series],
            index=pd.Index([s.date for s in series], name="date", dtype=object),
            name=coin,
            dtype=float,
        )
        columns.append(col[~col.index.duplicated(keep="last")])
    if not columns:
        return []
    frame = pd.concat(columns, axis=1, sort=False)
    frame.index.name = "date"
    frame = frame.reset_index()
    frame = frame.astype(object).where(frame.notna(), None)
    return frame.to_dict(orient="records")
