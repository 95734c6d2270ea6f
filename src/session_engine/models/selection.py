"""Intermediate results of the selection pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field

from session_engine.models.drill import Drill


@dataclass(frozen=True)
class SelectionResult:
    """Drills picked for a session, before durations are assigned.

    ``ordering`` is the full permuted in-focus pool. ``selected`` and
    ``residual`` partition it; both keep the permuted order.
    """

    selected: tuple[Drill, ...]
    residual: tuple[Drill, ...]
    ordering: tuple[Drill, ...]
    target_count: int
    max_per_category: int

    @property
    def shortfall(self) -> int:
        return max(self.target_count - len(self.selected), 0)

    @property
    def underfilled(self) -> bool:
        return len(self.selected) < self.target_count


@dataclass(frozen=True)
class DrillAllocation:
    """A drill with its 1-based slot and allocated minutes."""

    drill: Drill
    order_index: int
    duration_minutes: int


@dataclass(frozen=True)
class AllocationPlan:
    """Ordered allocations for a session of ``total_minutes``."""

    allocations: tuple[DrillAllocation, ...] = field(default_factory=tuple)
    total_minutes: int = 0

    @property
    def drills(self) -> tuple[Drill, ...]:
        return tuple(a.drill for a in self.allocations)
