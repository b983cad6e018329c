"""Dashboard application state and its transitions.

The state is an immutable snapshot. Every user action or fetch outcome
is a pure function from the old snapshot to a new one, so readers
always see a consistent view and never a half-applied update.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .models import CycleResult, Holdings, SeriesMap
from .portfolio import parse_quantity
from .registry import require_coin, require_coins, require_window

FETCH_FAILED_MESSAGE = "⚠️ Failed to load crypto data. Please try again later."


@dataclass(frozen=True)
class DashboardState:
    coins: Tuple[str, ...] = ("bitcoin",)
    window: int = 7
    holdings: Holdings = field(default_factory=dict)
    # version of the most recently started cycle
    version: int = 0
    loading: bool = False
    error: Optional[str] = None
    result: Optional[CycleResult] = None

    @property
    def series(self) -> SeriesMap:
        """Series map of the latest completed cycle, empty when there is none."""
        return self.result.series if self.result is not None else {}


def select_coins(state: DashboardState, coins: Iterable[str]) -> DashboardState:
    return replace(state, coins=require_coins(coins))


def change_window(state: DashboardState, window: int) -> DashboardState:
    return replace(state, window=require_window(window))


def edit_holdings(state: DashboardState, updates: Mapping[str, Any], replace_all: bool = False) -> DashboardState:
    """Apply user-entered quantities.

    ``updates`` maps coins to raw user input. A quantity that parses to
    0 removes the coin from the holdings. With ``replace_all`` the
    existing holdings are dropped first.
    """
    parsed = {require_coin(coin): parse_quantity(raw) for coin, raw in updates.items()}
    holdings: Dict[str, float] = {} if replace_all else dict(state.holdings)
    for coin, qty in parsed.items():
        if qty:
            holdings[coin] = qty
        else:
            holdings.pop(coin, None)
    return replace(state, holdings=holdings)


def start_cycle(state: DashboardState) -> DashboardState:
    return replace(state, version=state.version + 1, loading=True, error=None)


def is_stale(state: DashboardState, version: int) -> bool:
    return version != state.version


def complete_cycle(state: DashboardState, result: CycleResult) -> DashboardState:
    """Publish a finished cycle unless a newer cycle has started since."""
    if is_stale(state, result.version):
        return state
    return replace(state, loading=False, error=None, result=result)


def fail_cycle(state: DashboardState, version: int, message: str = FETCH_FAILED_MESSAGE) -> DashboardState:
    """Record a failed cycle, dropping the previous data so nothing stale is shown."""
    if is_stale(state, version):
        return state
    return replace(state, loading=False, error=message, result=None)
