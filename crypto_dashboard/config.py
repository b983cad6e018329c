"""Environment-driven settings for the dashboard and the snapshot worker."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from .providers.base import PriceProvider
from .registry import require_coins, require_window


@dataclass(frozen=True)
class Settings:
    price_api_url: str = "http://localhost:8000"
    price_provider: str = "http"  # or 'yahoo'
    fetch_timeout_sec: float = 10.0
    default_coins: Tuple[str, ...] = ("bitcoin",)
    default_days: int = 7
    refresh_sec: int = 600
    log_level: str = "INFO"


def load_settings(env: Optional[dict] = None) -> Settings:
    """Read settings from ``env`` (``os.environ`` by default).

    Unknown coins or windows in the defaults raise ``InvalidSelection``
    so a misconfigured deployment fails at startup.
    """
    env = os.environ if env is None else env
    coins = [c for c in env.get("DEFAULT_COINS", "bitcoin").split(",") if c.strip()]
    return Settings(
        price_api_url=env.get("PRICE_API_URL", "http://localhost:8000"),
        price_provider=env.get("PRICE_PROVIDER", "http").strip().lower(),
        fetch_timeout_sec=float(env.get("FETCH_TIMEOUT_SEC", "10")),
        default_coins=require_coins(coins),
        default_days=require_window(int(env.get("DEFAULT_DAYS", "7"))),
        refresh_sec=int(env.get("REFRESH_SEC", "600")),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def build_provider(settings: Settings) -> PriceProvider:
    if settings.price_provider == "yahoo":
        from .providers.yahoo_prices import YahooPriceProvider
        return YahooPriceProvider()
    if settings.price_provider == "http":
        from .providers.http_prices import HttpPriceProvider
        return HttpPriceProvider(settings.price_api_url, timeout_s=settings.fetch_timeout_sec)
    raise ValueError(f"Unknown PRICE_PROVIDER: {settings.price_provider}")
