"""Seedable uniform permutations for candidate sampling.

All randomness in the pipeline flows through a ``numpy.random.Generator``
so a fixed seed reproduces a session exactly.
"""

from __future__ import annotations

from typing import Sequence, TypeVar

import numpy as np

T = TypeVar("T")


def make_rng(seed: int | np.random.Generator | None = None) -> np.random.Generator:
    """Return a Generator for *seed*. An existing Generator is passed through."""
    return np.random.default_rng(seed)


def permute(items: Sequence[T], rng: np.random.Generator) -> list[T]:
    """Return a uniformly random permutation of *items*.

    The input is not modified. The result depends only on the order of
    *items* and the state of *rng*.
    """
    order = rng.permutation(len(items))
    return [items[int(i)] for i in order]
