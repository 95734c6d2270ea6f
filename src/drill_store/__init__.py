"""Drill store — all database I/O for the catalog and sessions lives here."""

from drill_store.catalog import load_catalog
from drill_store.client import DrillStore
from drill_store.database import init_db, make_engine, make_session_factory
from drill_store.exceptions import DrillStoreError, StoreUnavailableError

__all__ = [
    "DrillStore",
    "DrillStoreError",
    "StoreUnavailableError",
    "init_db",
    "load_catalog",
    "make_engine",
    "make_session_factory",
]
