"""Candidate sampler — diverse, size-bounded, randomized drill selection."""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from session_engine.models.drill import Drill
from session_engine.models.enums import Category
from session_engine.models.selection import SelectionResult
from session_engine.selection.permutation import permute
from session_engine.selection.tiering import max_per_category, target_drill_count

logger = logging.getLogger(__name__)


def sample_candidates(
    pool: Iterable[Drill],
    focus_areas: tuple[Category, ...],
    total_minutes: int,
    rng: np.random.Generator,
) -> SelectionResult:
    """Pick up to N drills from *pool* with at most a per-category cap each.

    Algorithm:
    1. N = target_drill_count(total_minutes)
    2. cap = ceil(N / len(focus_areas))
    3. Sort the pool by drill id, then permute it with *rng*
    4. Drop drills whose category is not a focus area
    5. Walk the permutation once; accept a drill while fewer than N are
       accepted and its category is still under the cap

    The walk never backtracks, so the result can hold fewer than N drills
    even when the pool is larger. See ``fill_selection``.

    Args:
        pool: Candidate drills returned by the catalog.
        focus_areas: Requested focus categories (non-empty).
        total_minutes: Requested session length.
        rng: Random source for the permutation.

    Returns:
        A SelectionResult with accepted and residual drills in permuted order.
    """
    target = target_drill_count(total_minutes)
    cap = max_per_category(target, len(focus_areas))

    # Canonical order first so the seed alone determines the permutation
    canonical = sorted(pool, key=lambda d: d.id)
    ordering: list[Drill] = []
    for drill in permute(canonical, rng):
        if drill.category in focus_areas:
            ordering.append(drill)
        else:
            logger.warning(
                "Discarding drill %s: category %s not in focus areas",
                drill.id,
                drill.category.value,
            )

    counts = {area: 0 for area in focus_areas}
    selected: list[Drill] = []
    residual: list[Drill] = []
    for drill in ordering:
        if len(selected) < target and counts[drill.category] < cap:
            selected.append(drill)
            counts[drill.category] += 1
        else:
            residual.append(drill)

    logger.debug(
        "Sampled %d/%d drills (cap %d per category) from %d candidates",
        len(selected),
        target,
        cap,
        len(ordering),
    )
    return SelectionResult(
        selected=tuple(selected),
        residual=tuple(residual),
        ordering=tuple(ordering),
        target_count=target,
        max_per_category=cap,
    )
