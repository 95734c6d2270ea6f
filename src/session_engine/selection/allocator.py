"""Duration allocator — splits the session length across drills exactly."""

from __future__ import annotations

from typing import Sequence

from session_engine.models.drill import Drill
from session_engine.models.selection import AllocationPlan, DrillAllocation


def allocate_durations(
    drills: Sequence[Drill], total_minutes: int
) -> AllocationPlan:
    """Assign whole minutes to each drill, summing to *total_minutes*.

    Every drill gets ``total_minutes // k``; the last one also absorbs the
    remainder. ``order_index`` is the 1-based position in *drills*.

    Raises:
        ValueError: If *drills* is empty or *total_minutes* cannot give
            every drill at least one minute.
    """
    k = len(drills)
    if k == 0:
        raise ValueError("Cannot allocate durations to an empty drill list")
    if total_minutes < k:
        raise ValueError(
            f"{total_minutes} min is too short for {k} drills"
        )

    base = total_minutes // k
    last = total_minutes - base * (k - 1)
    allocations = tuple(
        DrillAllocation(
            drill=drill,
            order_index=i,
            duration_minutes=last if i == k else base,
        )
        for i, drill in enumerate(drills, start=1)
    )
    return AllocationPlan(allocations=allocations, total_minutes=total_minutes)
