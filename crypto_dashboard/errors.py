"""Errors raised by the price-series engine."""

from __future__ import annotations

from typing import Dict


class InvalidSelection(ValueError):
    """An unknown coin or an unsupported day-window was requested."""


class FetchError(Exception):
    """Fetching the price series of one coin failed."""

    def __init__(self, coin: str, reason: str) -> None:
        super().__init__(f"{coin}: {reason}")
        self.coin = coin
        self.reason = reason


class AggregationError(Exception):
    """At least one fetch of an aggregation cycle failed.

    ``failures`` maps every failed coin to the reason it failed. A cycle
    that raises this never yields a partial series map.
    """

    def __init__(self, failures: Dict[str, str]) -> None:
        detail = ", ".join(f"{coin} ({reason})" for coin, reason in failures.items())
        super().__init__(f"Failed to fetch {len(failures)} coin(s): {detail}")
        self.failures = dict(failures)
