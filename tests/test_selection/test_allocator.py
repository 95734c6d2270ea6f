"""Tests for the duration allocator."""

from __future__ import annotations

import pytest

from session_engine.models.enums import Category
from session_engine.selection.allocator import allocate_durations


def _durations(plan) -> list[int]:
    return [a.duration_minutes for a in plan.allocations]


class TestAllocateDurations:
    def test_remainder_goes_to_last_drill(self, pool_factory) -> None:
        drills = pool_factory({Category.SERVE: 7})
        plan = allocate_durations(drills, 62)
        assert _durations(plan) == [8, 8, 8, 8, 8, 8, 14]

    def test_even_split(self, pool_factory) -> None:
        drills = pool_factory({Category.SERVE: 5})
        plan = allocate_durations(drills, 50)
        assert _durations(plan) == [10, 10, 10, 10, 10]

    def test_two_drills_odd_total(self, pool_factory) -> None:
        drills = pool_factory({Category.SERVE: 2})
        plan = allocate_durations(drills, 45)
        assert _durations(plan) == [22, 23]

    def test_single_drill_takes_everything(self, pool_factory) -> None:
        drills = pool_factory({Category.SERVE: 1})
        assert _durations(allocate_durations(drills, 37)) == [37]

    def test_order_index_follows_list_position(self, pool_factory) -> None:
        drills = pool_factory({Category.SERVE: 3, Category.FOREHAND: 2})
        plan = allocate_durations(drills, 40)
        assert [a.order_index for a in plan.allocations] == [1, 2, 3, 4, 5]
        assert plan.drills == tuple(drills)

    def test_conservation_across_lengths(self, pool_factory) -> None:
        """Sum equals the total and all but the last get total // k."""
        drills = pool_factory({Category.SERVE: 7})
        for k in range(1, 8):
            for total in range(15, 121, 7):
                durations = _durations(allocate_durations(drills[:k], total))
                assert sum(durations) == total
                assert all(d == total // k for d in durations[:-1])

    def test_plan_records_total(self, pool_factory) -> None:
        plan = allocate_durations(pool_factory({Category.SERVE: 3}), 30)
        assert plan.total_minutes == 30

    def test_empty_list_rejected(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            allocate_durations([], 30)

    def test_fewer_minutes_than_drills_rejected(self, pool_factory) -> None:
        with pytest.raises(ValueError):
            allocate_durations(pool_factory({Category.SERVE: 5}), 4)
