"""Price provider backed by the dashboard's price API.

The API serves ``GET <base-url>/api/crypto/{coin}?days={window}`` and
answers with a JSON array of ``{"date": str, "price": number}`` objects
in ascending date order.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Optional

import requests

from ..errors import FetchError
from ..models import PriceSample

log = logging.getLogger(__name__)


def _parse_sample(coin: str, item: Any) -> PriceSample:
    if not isinstance(item, dict):
        raise FetchError(coin, f"malformed sample: {item!r}")
    date = item.get("date")
    price = item.get("price")
    if date is None:
        raise FetchError(coin, f"sample without date: {item!r}")
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        raise FetchError(coin, f"sample without numeric price: {item!r}")
    price = float(price)
    if not math.isfinite(price) or price < 0:
        raise FetchError(coin, f"invalid price {price!r} on {date}")
    return PriceSample(date=str(date), price=price)


class HttpPriceProvider:
    """Fetches price history from the price API with ``requests``."""

    def __init__(self, base_url: str, timeout_s: float = 10.0, session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    def price_history(self, coin: str, days: int) -> List[PriceSample]:
        url = f"{self.base_url}/api/crypto/{coin}"
        log.info("Price GET coin=%s days=%s", coin, days)
        try:
            r = self._session.get(url, params={"days": days}, timeout=self.timeout_s)
        except requests.RequestException as e:
            raise FetchError(coin, str(e)) from e
        if not 200 <= r.status_code < 300:
            raise FetchError(coin, f"HTTP {r.status_code}: {r.text[:200]}")
        try:
            data = r.json()
        except ValueError as e:
            raise FetchError(coin, "response is not JSON") from e
        if not isinstance(data, list):
            raise FetchError(coin, f"expected a JSON array, got {type(data).__name__}")
        samples = [_parse_sample(coin, item) for item in data]
        log.info("Price GET OK coin=%s days=%s samples=%d", coin, days, len(samples))
        return samples
