"""Central controller for the dashboard.

This module defines the DashboardController, the single owner of the
dashboard state. User actions (coin selection, window, holdings) go
through it; it starts aggregation cycles, publishes their results and
renders the view the page consumes. Trends and the portfolio value are
derived from the state on every read and are never stored.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .aggregator import SeriesAggregator, chart_rows
from .config import Settings, build_provider, load_settings
from .errors import AggregationError
from .models import CycleResult, TrendResult
from .portfolio import format_valuation, valuate
from .registry import COIN_REGISTRY
from .state import (
    DashboardState,
    change_window,
    complete_cycle,
    edit_holdings,
    fail_cycle,
    is_stale,
    select_coins,
    start_cycle,
)
from .trend import analyze

log = logging.getLogger(__name__)


def trends(state: DashboardState) -> List[TrendResult]:
    """Trend of every coin of the latest completed cycle, in selection order."""
    result = state.result
    if result is None:
        return []
    return [analyze(result.series.get(coin, ()), coin, result.window) for coin in result.coins]


def render(state: DashboardState) -> Dict[str, Any]:
    """Build the payload the page renders.

    Chart rows and trends are only included when the latest cycle
    completed and no newer cycle is in flight, so the page never draws
    a partial or outdated comparison.
    """
    result = state.result
    show = result is not None and not state.loading and state.error is None
    value = valuate(state.series, state.holdings)
    return {
        "coins": list(state.coins),
        "window": state.window,
        "version": state.version,
        "loading": state.loading,
        "error": state.error,
        "cycle": None if result is None else {
            "version": result.version,
            "coins": list(result.coins),
            "window": result.window,
        },
        "chart": chart_rows(result.series) if show else [],
        "trends": [t.as_dict() for t in trends(state)] if show else [],
        "holdings": dict(state.holdings),
        "valuation": round(value, 2),
        "valuation_display": format_valuation(value),
    }


def coin_catalog() -> List[Dict[str, str]]:
    return [
        {"id": meta.id, "label": meta.label, "icon": meta.icon, "ticker": meta.ticker}
        for meta in COIN_REGISTRY.values()
    ]


class DashboardController:
    """Owns the dashboard state and runs aggregation cycles.

    Every cycle gets a version when it starts. A cycle's outcome is
    only applied if no newer cycle has started in the meantime; slower
    superseded fetches are dropped when they arrive. Fetches are not
    aborted.
    """

    def __init__(self, aggregator: SeriesAggregator, state: Optional[DashboardState] = None) -> None:
        self._aggregator = aggregator
        self._state = state or DashboardState()

    @classmethod
    def from_settings(cls, settings: Settings) -> "DashboardController":
        aggregator = SeriesAggregator(build_provider(settings), timeout_s=settings.fetch_timeout_sec)
        state = DashboardState(coins=settings.default_coins, window=settings.default_days)
        return cls(aggregator, state)

    @property
    def state(self) -> DashboardState:
        return self._state

    def snapshot(self) -> Dict[str, Any]:
        return render(self._state)

    # ----- User actions -----
    async def select_coins(self, coins: Iterable[str]) -> DashboardState:
        new = select_coins(self._state, coins)
        if new.coins == self._state.coins:
            return self._state
        self._state = new
        return await self.refresh()

    async def change_window(self, window: int) -> DashboardState:
        new = change_window(self._state, window)
        if new.window == self._state.window:
            return self._state
        self._state = new
        return await self.refresh()

    def edit_holdings(self, updates: Mapping[str, Any], replace_all: bool = False) -> DashboardState:
        self._state = edit_holdings(self._state, updates, replace_all=replace_all)
        return self._state

    # ----- Cycles -----
    async def refresh(self) -> DashboardState:
        """Run one aggregation cycle for the current selection and window."""
        self._state = start_cycle(self._state)
        version, coins, window = self._state.version, self._state.coins, self._state.window
        log.info("Cycle %d started coins=%s days=%s", version, ",".join(coins), window)
        try:
            series = await self._aggregator.aggregate(coins, window)
        except AggregationError as e:
            if is_stale(self._state, version):
                log.info("Cycle %d failed after being superseded; ignoring", version)
            else:
                log.error("Cycle %d failed: %s", version, e)
            self._state = fail_cycle(self._state, version)
            return self._state
        if is_stale(self._state, version):
            log.info("Cycle %d superseded by %d; discarding its results", version, self._state.version)
            return self._state
        self._state = complete_cycle(self._state, CycleResult(version=version, coins=coins, window=window, series=series))
        log.info("Cycle %d completed with %d series", version, len(series))
        return self._state


# Singleton instance used by the FastAPI app
CONTROLLER = DashboardController.from_settings(load_settings())
