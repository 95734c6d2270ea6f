"""Shared test fixtures: drill factories, fake collaborators, in-memory store."""

from __future__ import annotations

import dataclasses
import itertools
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, Sequence

import pytest

from drill_store import DrillStore
from session_engine.exceptions import AuthorizationError, PersistenceError
from session_engine.models.drill import Drill
from session_engine.models.enums import Category, IntensityTier
from session_engine.models.session import Session, SessionDrill
from session_engine.ports import CatalogQuery, SessionWriter


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeCatalog(CatalogQuery):
    """In-memory catalog applying the same filter contract as the store."""

    def __init__(self, drills: Iterable[Drill] = ()) -> None:
        self.drills = list(drills)
        self.calls: list[tuple] = []

    def query_candidates(self, rating, categories, intensity):
        categories = tuple(categories)
        self.calls.append((rating, categories, intensity))
        return tuple(
            d for d in self.drills
            if d.category in categories
            and d.accepts_rating(rating)
            and d.intensity == intensity
        )


class FakeWriter(SessionWriter):
    """In-memory writer using the default two-step ``write_session``.

    Set ``fail_session`` or ``fail_drills`` to make the matching insert
    raise PersistenceError.
    """

    def __init__(self) -> None:
        self.sessions: dict[str, Session] = {}
        self.slots: dict[str, tuple[SessionDrill, ...]] = {}
        self.fail_session = False
        self.fail_drills = False
        self._ids = itertools.count(1)

    def insert_session(self, session: Session) -> Session:
        if self.fail_session:
            raise PersistenceError("session insert refused")
        saved = dataclasses.replace(
            session,
            id=f"s{next(self._ids)}",
            created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )
        self.sessions[saved.id] = saved
        return saved

    def insert_session_drills(self, session_id: str, drills: Sequence[SessionDrill]):
        if self.fail_drills:
            raise PersistenceError("drill insert refused")
        saved = tuple(
            dataclasses.replace(d, session_id=session_id, id=f"{session_id}-{d.order_index}")
            for d in drills
        )
        self.slots[session_id] = saved
        return saved

    def delete_session(self, session_id: str, owner_id: str) -> None:
        session = self.sessions.get(session_id)
        if session is None or session.user_id != owner_id:
            raise AuthorizationError(session_id)
        del self.sessions[session_id]
        self.slots.pop(session_id, None)


# ---------------------------------------------------------------------------
# Drill fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def drill_factory() -> Callable[..., Drill]:
    """Factory fixture for creating Drill instances.

    Usage:
        drill = drill_factory("fh-1", Category.FOREHAND)
    """

    def factory(
        drill_id: str,
        category: Category = Category.FOREHAND,
        intensity: IntensityTier = IntensityTier.MEDIUM,
        min_rating: float = 1.0,
        max_rating: float = 16.5,
        **overrides,
    ) -> Drill:
        fields = dict(
            id=drill_id,
            name=f"Drill {drill_id}",
            description=f"Practice for {category.value}",
            category=category,
            min_rating=min_rating,
            max_rating=max_rating,
            intensity=intensity,
            default_duration_minutes=10,
            instructions=("Set up", "Hit", "Recover"),
            coaching_cues=("Watch the ball",),
        )
        fields.update(overrides)
        return Drill(**fields)

    return factory


@pytest.fixture
def pool_factory(drill_factory) -> Callable[..., list[Drill]]:
    """Build a pool with *per_category* drills for each given category.

    Usage:
        pool = pool_factory({Category.SERVE: 4, Category.FOREHAND: 1})
    """

    def factory(
        counts: dict[Category, int],
        intensity: IntensityTier = IntensityTier.MEDIUM,
    ) -> list[Drill]:
        pool: list[Drill] = []
        for category, count in counts.items():
            for i in range(count):
                pool.append(
                    drill_factory(f"{category.value}-{i:02d}", category, intensity)
                )
        return pool

    return factory


@pytest.fixture
def balanced_pool(pool_factory) -> list[Drill]:
    """Four medium drills in each of forehand, backhand and serve."""
    return pool_factory({
        Category.FOREHAND: 4,
        Category.BACKHAND: 4,
        Category.SERVE: 4,
    })


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_writer() -> FakeWriter:
    return FakeWriter()


@pytest.fixture
def catalog_factory() -> Callable[[Iterable[Drill]], FakeCatalog]:
    return FakeCatalog


@pytest.fixture
def ticking_clock() -> Callable[[], datetime]:
    """Clock advancing one minute per call so row order is deterministic."""
    start = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
    counter = itertools.count()
    return lambda: start + timedelta(minutes=next(counter))


@pytest.fixture
def store(ticking_clock) -> DrillStore:
    """DrillStore over a fresh in-memory SQLite database."""
    return DrillStore.from_url("sqlite://", clock=ticking_clock)


@pytest.fixture
def seeded_store(store, balanced_pool) -> DrillStore:
    store.add_drills(balanced_pool)
    return store
