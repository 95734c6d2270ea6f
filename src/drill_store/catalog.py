"""Load drill catalogs from JSON files."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from session_engine.exceptions import InvalidRecordError
from session_engine.mapping import drill_from_row
from session_engine.models.drill import Drill

logger = logging.getLogger(__name__)


def load_catalog(path: Path | str) -> tuple[Drill, ...]:
    """Read a JSON list of drill rows and map each to a Drill.

    Raises:
        InvalidRecordError: If the file is not a list or a row is malformed.
    """
    path = Path(path)
    with open(path) as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise InvalidRecordError(f"{path}: expected a list of drills")

    drills = tuple(drill_from_row(row) for row in raw)
    ids = [d.id for d in drills]
    if len(set(ids)) != len(ids):
        raise InvalidRecordError(f"{path}: duplicate drill ids")
    logger.info("Loaded %d drills from %s", len(drills), path)
    return drills
