"""Portfolio valuation at the latest fetched prices."""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from .models import PriceSeries

log = logging.getLogger(__name__)


def latest_price(series_map: Mapping[str, PriceSeries], coin: str) -> float:
    """Price of the last sample for ``coin``, or 0 when nothing was fetched."""
    series = series_map.get(coin)
    if not series:
        return 0.0
    return series[-1].price


def valuate(series_map: Mapping[str, PriceSeries], holdings: Mapping[str, float]) -> float:
    """Total value of ``holdings`` at the latest prices in ``series_map``.

    The sum runs over the held coins. A held coin without a series
    contributes 0 instead of failing the valuation.
    """
    return sum(qty * latest_price(series_map, coin) for coin, qty in holdings.items())


def format_valuation(value: float) -> str:
    return f"${value:,.2f}"


def parse_quantity(raw: Any) -> float:
    """Turn a user-entered quantity into a finite, non-negative float.

    Empty, non-numeric, NaN and infinite entries count as 0. Negative
    quantities are clamped to 0.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0
    try:
        qty = float(str(raw).strip() or 0)
    except ValueError:
        log.warning("Ignoring non-numeric quantity %r", raw)
        return 0.0
    if not math.isfinite(qty):
        log.warning("Ignoring non-finite quantity %r", raw)
        return 0.0
    if qty < 0:
        log.warning("Clamping negative quantity %r to 0", raw)
        return 0.0
    return qty
