"""Yahoo Finance price provider.

This provider uses the ``yfinance`` library to fetch daily closes for
the registry coins (``BTC-USD``, ``ETH-USD``, ``SOL-USD``). It
implements the ``PriceProvider`` protocol defined in
``providers/base.py`` and is selected with ``PRICE_PROVIDER=yahoo``
when no price API is available.
"""

from __future__ import annotations

from typing import List

import pandas as pd
import yfinance as yf

from ..errors import FetchError
from ..models import PriceSample
from ..registry import COIN_REGISTRY


def frame_to_samples(df: pd.DataFrame) -> List[PriceSample]:
    """Convert a Yahoo history frame into samples labelled ``YYYY-MM-DD``."""
    close = df["Close"].dropna()
    return [
        PriceSample(date=pd.Timestamp(ts).strftime("%Y-%m-%d"), price=float(value))
        for ts, value in close.items()
    ]


class YahooPriceProvider:
    """Fetches daily closes from Yahoo Finance."""

    def price_history(self, coin: str, days: int) -> List[PriceSample]:
        meta = COIN_REGISTRY.get(coin)
        if meta is None:
            raise FetchError(coin, "not in the coin registry")
        try:
            ticker = yf.Ticker(meta.yahoo_symbol)
            df = ticker.history(period=f"{days}d", interval="1d", auto_adjust=True)
        except Exception as e:
            raise FetchError(coin, f"yfinance error: {e}") from e
        if df is None or df.empty:
            raise FetchError(coin, f"no data for {meta.yahoo_symbol}")
        # Standardise column names capitalisation
        df = df.rename(columns=str.capitalize)
        return frame_to_samples(df)
