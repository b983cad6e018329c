"""Provider interface definitions.

This protocol describes the minimal API expected from any price
provider used by the dashboard. You can plug in an alternative source
by implementing the same method on your provider class. See
``http_prices.py`` and ``yahoo_prices.py`` for reference implementations.
"""

from __future__ import annotations

from typing import List, Protocol

from ..models import PriceSample


class PriceProvider(Protocol):
    """A price provider supplies the trailing price history of one coin."""

    def price_history(self, coin: str, days: int) -> List[PriceSample]:
        """Return the samples for ``coin`` over the last ``days`` days.

        Samples must be in ascending chronological order; callers do not
        re-sort them. Any failure (transport error, non-2xx status,
        malformed payload) must raise ``FetchError`` rather than return
        an empty or partial list.
        """
