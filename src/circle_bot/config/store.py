import os
from pathlib import Path

_DEFAULT_DB_PATH = Path(__file__).resolve().parents[3] / "data" / "circles.db"


class Store:
    def __init__(self, config: dict | None = None) -> None:
        store_cfg = (config or {}).get("circlebot", {}).get("store", {})
        self.DB_PATH: str = str(store_cfg.get("db_path", os.getenv("CIRCLES_DB_PATH", str(_DEFAULT_DB_PATH))))
