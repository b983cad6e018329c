import asyncio, json, logging, time
from datetime import datetime, timezone
from pathlib import Path
from .config import configure_logging, load_settings
from .dashboard import DashboardController, render

DATA_DIR = Path(__file__).resolve().parent / "data"
SNAPSHOT_FILE = DATA_DIR / "snapshot.json"


def refresh_once(controller: DashboardController, target: Path = SNAPSHOT_FILE) -> dict:
    state = asyncio.run(controller.refresh())
    view = render(state)
    # holdings are session-only and never written
    view.pop("holdings", None)
    view.pop("valuation", None)
    view.pop("valuation_display", None)
    payload = {"as_of": datetime.now(timezone.utc).isoformat(), **view}
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_suffix(".tmp")
    tmp.write_text(json.dumps(payload), encoding="utf-8")
    tmp.replace(target)
    return payload


def refresh_logged(controller: DashboardController, target: Path = SNAPSHOT_FILE):
    try:
        payload = refresh_once(controller, target)
    except Exception as e:
        logging.exception("Refresh failed: %s", e)
        return None
    if payload["error"]:
        logging.error("Snapshot refresh failed: %s", payload["error"])
    else:
        logging.info("Snapshot refreshed.")
    return payload


def main():
    settings = load_settings()
    configure_logging(settings)
    controller = DashboardController.from_settings(settings)
    while True:
        refresh_logged(controller)
        time.sleep(settings.refresh_sec)

if __name__ == "__main__":
    main()
