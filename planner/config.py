"""Environment-variable-based configuration for the session planner CLI."""

from __future__ import annotations

import os
from pathlib import Path

DATABASE_URL: str = os.environ.get("POACHED_DATABASE_URL", "sqlite:///poached.db")
CATALOG_PATH: Path = Path(
    os.environ.get("POACHED_CATALOG_PATH", str(Path(__file__).parent / "data" / "drills.json"))
)
USER_ID: str = os.environ.get("POACHED_USER_ID", "local-player")
LOG_LEVEL: str = os.environ.get("POACHED_LOG_LEVEL", "INFO").upper()
SEED: int | None = (
    int(os.environ["POACHED_SEED"]) if os.environ.get("POACHED_SEED") else None
)
