"""Drill selection: sampling, filling and duration allocation."""

from session_engine.selection.allocator import allocate_durations
from session_engine.selection.filler import fill_selection
from session_engine.selection.permutation import make_rng, permute
from session_engine.selection.sampler import sample_candidates
from session_engine.selection.tiering import max_per_category, target_drill_count

__all__ = [
    "allocate_durations",
    "fill_selection",
    "make_rng",
    "max_per_category",
    "permute",
    "sample_candidates",
    "target_drill_count",
]
