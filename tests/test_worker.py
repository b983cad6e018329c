#!/usr/bin/env python3
"""
Tests for the snapshot worker
"""
import json
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from crypto_dashboard.aggregator import SeriesAggregator
from crypto_dashboard.dashboard import DashboardController
from crypto_dashboard.errors import FetchError
from crypto_dashboard.models import PriceSample
from crypto_dashboard.state import FETCH_FAILED_MESSAGE, DashboardState
from crypto_dashboard.worker import refresh_logged, refresh_once


class FakeProvider:
    def __init__(self, failing=()):
        self.failing = set(failing)

    def price_history(self, coin, days):
        if coin in self.failing:
            raise FetchError(coin, "HTTP 500")
        return [PriceSample("d1", 10.0), PriceSample("d2", 12.0)]


def test_snapshot_written_without_holdings(tmp_path):
    controller = DashboardController(SeriesAggregator(FakeProvider()), DashboardState(coins=("bitcoin", "solana")))
    controller.edit_holdings({"bitcoin": 3})
    target = tmp_path / "out" / "snapshot.json"

    refresh_once(controller, target)
    data = json.loads(target.read_text(encoding="utf-8"))

    assert "as_of" in data
    assert [t["coin"] for t in data["trends"]] == ["bitcoin", "solana"]
    assert data["trends"][0]["percent_display"] == "↑ +20.00%"
    assert "holdings" not in data
    assert "valuation" not in data
    assert not target.with_suffix(".tmp").exists()


def test_failed_refresh_writes_error(tmp_path):
    controller = DashboardController(SeriesAggregator(FakeProvider(failing={"bitcoin"})))
    target = tmp_path / "snapshot.json"

    payload = refresh_once(controller, target)

    assert payload["error"] == FETCH_FAILED_MESSAGE
    assert json.loads(target.read_text(encoding="utf-8"))["chart"] == []


def test_unexpected_error_keeps_worker_alive(tmp_path):
    class Exploding:
        async def aggregate(self, coins, window):
            raise RuntimeError("event loop hiccup")

    controller = DashboardController(Exploding())

    assert refresh_logged(controller, tmp_path / "snapshot.json") is None
    assert not (tmp_path / "snapshot.json").exists()
