"""Tests for loading drill catalogs from JSON."""

from __future__ import annotations

import json

import pytest

from drill_store import load_catalog
from planner import config
from session_engine.exceptions import InvalidRecordError
from session_engine.models.enums import Category, IntensityTier


class TestBundledCatalog:
    def test_covers_every_category(self) -> None:
        drills = load_catalog(config.CATALOG_PATH)
        assert {d.category for d in drills} == set(Category)

    def test_ids_unique(self) -> None:
        drills = load_catalog(config.CATALOG_PATH)
        ids = [d.id for d in drills]
        assert len(ids) == len(set(ids))

    def test_every_tier_present(self) -> None:
        drills = load_catalog(config.CATALOG_PATH)
        assert {d.intensity for d in drills} == set(IntensityTier)


class TestMalformedFiles:
    def test_top_level_must_be_list(self, tmp_path) -> None:
        path = tmp_path / "drills.json"
        path.write_text(json.dumps({"drills": []}))
        with pytest.raises(InvalidRecordError, match="list"):
            load_catalog(path)

    def test_duplicate_ids_rejected(self, tmp_path) -> None:
        row = {
            "id": "dup", "name": "Dup", "category": "serve",
            "min_utr": 1.0, "max_utr": 5.0, "intensity_level": "light",
            "default_duration_minutes": 10,
        }
        path = tmp_path / "drills.json"
        path.write_text(json.dumps([row, row]))
        with pytest.raises(InvalidRecordError, match="duplicate"):
            load_catalog(path)

    def test_bad_row_rejected(self, tmp_path) -> None:
        path = tmp_path / "drills.json"
        path.write_text(json.dumps([{"id": "x", "category": "serve"}]))
        with pytest.raises(InvalidRecordError):
            load_catalog(path)
