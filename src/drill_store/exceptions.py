"""Custom exception hierarchy for the drill store."""

from __future__ import annotations


class DrillStoreError(Exception):
    """Base exception for drill_store infrastructure errors."""


class StoreUnavailableError(DrillStoreError):
    """The database could not be reached. Treated as fatal by callers."""
