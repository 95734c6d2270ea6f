"""Drill: a read-only catalog entry."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from session_engine.models.enums import Category, IntensityTier


@dataclass(frozen=True)
class Drill:
    """A single drill from the catalog.

    The rating range is inclusive on both ends. Instructions and coaching
    cues keep their catalog order.
    """

    id: str
    name: str
    description: str
    category: Category
    min_rating: float
    max_rating: float
    intensity: IntensityTier
    default_duration_minutes: int
    instructions: tuple[str, ...] = field(default_factory=tuple)
    coaching_cues: tuple[str, ...] = field(default_factory=tuple)
    created_at: datetime | None = None

    def accepts_rating(self, rating: float) -> bool:
        """True if *rating* falls inside ``[min_rating, max_rating]``."""
        return self.min_rating <= rating <= self.max_rating
