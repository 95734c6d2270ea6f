"""Completion filler — tops a capped selection up to the tier target."""

from __future__ import annotations

from session_engine.models.drill import Drill
from session_engine.models.selection import SelectionResult


def fill_selection(result: SelectionResult) -> SelectionResult:
    """Fill empty slots from the residual pool, ignoring the category cap.

    One pass over ``result.ordering`` with an exclusion set of already
    selected ids; each unselected drill is appended until the target is
    reached. The pass is bounded by the pool size.

    Fewer than ``target_count`` drills remain only when the whole pool is
    smaller than the target; ``result.underfilled`` then stays True.
    """
    if not result.underfilled or not result.residual:
        return result

    selected: list[Drill] = list(result.selected)
    taken = {d.id for d in selected}
    for drill in result.ordering:
        if len(selected) >= result.target_count:
            break
        if drill.id in taken:
            continue
        selected.append(drill)
        taken.add(drill.id)

    return SelectionResult(
        selected=tuple(selected),
        residual=tuple(d for d in result.ordering if d.id not in taken),
        ordering=result.ordering,
        target_count=result.target_count,
        max_per_category=result.max_per_category,
    )
