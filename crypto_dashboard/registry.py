"""Coin registry and window enumeration.

The dashboard only knows a small fixed set of coins. This module maps
the identifiers and ticker aliases users may type (``BTC``, ``eth``,
``Solana``) onto the canonical coin ids used by the price API, and
holds the display metadata the page shows next to each coin.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from .errors import InvalidSelection


@dataclass(frozen=True)
class CoinMeta:
    id: str
    label: str
    icon: str
    ticker: str
    yahoo_symbol: str


COIN_REGISTRY: Dict[str, CoinMeta] = {
    "bitcoin": CoinMeta(id="bitcoin", label="Bitcoin", icon="₿", ticker="BTC", yahoo_symbol="BTC-USD"),
    "ethereum": CoinMeta(id="ethereum", label="Ethereum", icon="Ξ", ticker="ETH", yahoo_symbol="ETH-USD"),
    "solana": CoinMeta(id="solana", label="Solana", icon="◎", ticker="SOL", yahoo_symbol="SOL-USD"),
}

# Extra aliases beyond the ticker symbols. Keys are uppercase.
TICKER_ALIASES = {
    "XBT": "bitcoin",
}

WINDOWS: Tuple[int, ...] = (7, 30, 90)


def resolve_coin(code: str) -> Optional[str]:
    """Resolve a coin id, label or ticker into a canonical coin id.

    ``None`` indicates an unknown coin.
    """
    if not code:
        return None
    s = code.strip()
    if s.lower() in COIN_REGISTRY:
        return s.lower()
    upper = s.upper()
    for meta in COIN_REGISTRY.values():
        if upper == meta.ticker:
            return meta.id
    return TICKER_ALIASES.get(upper)


def require_coin(code: str) -> str:
    resolved = resolve_coin(code)
    if resolved is None:
        raise InvalidSelection(f"Unknown coin: {code}")
    return resolved


def require_coins(codes: Iterable[str]) -> Tuple[str, ...]:
    """Resolve every code, dropping duplicates while keeping first-seen order."""
    out = []
    for code in codes:
        coin = require_coin(code)
        if coin not in out:
            out.append(coin)
    return tuple(out)


def require_window(days: int) -> int:
    # bool is an int subclass; True must not pass as a 1-day window
    if isinstance(days, bool) or days not in WINDOWS:
        raise InvalidSelection(f"Unsupported window: {days!r} (expected one of {list(WINDOWS)})")
    return int(days)
