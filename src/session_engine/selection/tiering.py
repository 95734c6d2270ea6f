"""Drill-count tiers and the per-category diversity cap."""

from __future__ import annotations

import math

from session_engine.models.enums import DRILL_COUNT_TIERS, LONG_SESSION_DRILL_COUNT


def target_drill_count(total_minutes: int) -> int:
    """Number of drills a session of *total_minutes* should hold.

    <= 30 min -> 3, 31-60 min -> 5, > 60 min -> 7.
    """
    for upper_bound, count in DRILL_COUNT_TIERS:
        if total_minutes <= upper_bound:
            return count
    return LONG_SESSION_DRILL_COUNT


def max_per_category(target_count: int, category_count: int) -> int:
    """Most drills any single focus category may contribute.

    Args:
        target_count: Tier target N.
        category_count: Number of requested focus categories (>= 1).

    Raises:
        ValueError: If *category_count* is not positive.
    """
    if category_count <= 0:
        raise ValueError("category_count must be positive")
    return math.ceil(target_count / category_count)
