"""FastAPI entry point for the crypto trend dashboard.

This module exposes the page and a set of REST endpoints for changing
the coin selection, the day-window and the holdings, and for reading
the rendered dashboard state. The routes defined here interact with a
singleton ``CONTROLLER`` provided by ``dashboard.py``.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from . import dashboard
from .config import build_provider, configure_logging, load_settings
from .errors import FetchError, InvalidSelection
from .registry import WINDOWS, require_coin, require_window

configure_logging(load_settings())

app = FastAPI(title="Crypto Trend Dashboard", version="1.0")


@app.get("/healthz")
def healthz():
    return {"ok": True, "app": app.title, "version": app.version}


@app.get("/routes")
def list_routes():
    paths = []
    for r in app.router.routes:
        if hasattr(r, "methods") and hasattr(r, "path"):
            paths.append({"path": r.path, "methods": sorted(list(r.methods))})
    return {"routes": sorted(paths, key=lambda x: x["path"])}


BASE_DIR = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


class SelectionBody(BaseModel):
    coins: List[str]


class WindowBody(BaseModel):
    days: int


class HoldingsBody(BaseModel):
    # raw user input; non-numeric entries count as 0
    holdings: Dict[str, Any]
    replace: bool = False


@app.get("/", response_class=HTMLResponse)
def index(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "index.html",
        {"coins": dashboard.coin_catalog(), "windows": list(WINDOWS)},
    )


@app.get("/coins")
def coins() -> Dict[str, Any]:
    return {"coins": dashboard.coin_catalog()}


@app.get("/windows")
def windows() -> Dict[str, Any]:
    return {"windows": list(WINDOWS)}


@app.get("/state")
def state() -> Dict[str, Any]:
    return dashboard.CONTROLLER.snapshot()


@app.post("/selection")
async def select(body: SelectionBody) -> Dict[str, Any]:
    try:
        await dashboard.CONTROLLER.select_coins(body.coins)
    except InvalidSelection as e:
        raise HTTPException(400, str(e))
    return dashboard.CONTROLLER.snapshot()


@app.post("/window")
async def window(body: WindowBody) -> Dict[str, Any]:
    try:
        await dashboard.CONTROLLER.change_window(body.days)
    except InvalidSelection as e:
        raise HTTPException(400, str(e))
    return dashboard.CONTROLLER.snapshot()


@app.post("/holdings")
async def holdings(body: HoldingsBody) -> Dict[str, Any]:
    try:
        dashboard.CONTROLLER.edit_holdings(body.holdings, replace_all=body.replace)
    except InvalidSelection as e:
        raise HTTPException(400, str(e))
    return dashboard.CONTROLLER.snapshot()


@app.post("/refresh")
async def refresh() -> Dict[str, Any]:
    """Re-run the current cycle, e.g. after a failed fetch."""
    await dashboard.CONTROLLER.refresh()
    return dashboard.CONTROLLER.snapshot()


@app.get("/debug/prices")
async def debug_prices(coin: str, days: int = 7, provider: Optional[str] = None) -> Dict[str, Any]:
    """
    Fetch the raw series for one coin straight from the configured provider,
    bypassing the dashboard state, to troubleshoot data availability.
    """
    try:
        coin_id = require_coin(coin)
        require_window(days)
    except InvalidSelection as e:
        raise HTTPException(400, str(e))
    settings = load_settings()
    if provider:
        settings = dataclasses.replace(settings, price_provider=provider.strip().lower())
    try:
        source = build_provider(settings)
    except ValueError as e:
        raise HTTPException(400, str(e))
    try:
        samples = await run_in_threadpool(source.price_history, coin_id, days)
    except FetchError as e:
        return {"coin": coin_id, "days": days, "error": e.reason}
    return {
        "coin": coin_id,
        "days": days,
        "rows": len(samples),
        "first": vars(samples[0]) if samples else None,
        "last": vars(samples[-1]) if samples else None,
        "tail": [vars(s) for s in samples[-40:]],
    }
