"""Session request, persisted session records, and generation results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from session_engine.exceptions import InvalidRequestError
from session_engine.models.drill import Drill
from session_engine.models.enums import (
    MAX_RATING,
    MAX_SESSION_MINUTES,
    MIN_RATING,
    MIN_SESSION_MINUTES,
    Category,
    Environment,
    IntensityTier,
    Surface,
)


def _coerce(enum_cls, value, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidRequestError(
            f"Unknown {field_name} {value!r}; expected one of: {allowed}"
        ) from None


@dataclass(frozen=True)
class SessionRequest:
    """Ephemeral input to a generation run. Never persisted itself.

    Use ``SessionRequest.create()`` to build one from raw form values;
    it coerces strings to enums and drops repeated focus areas while
    keeping their first-seen order.
    """

    rating: float
    focus_areas: tuple[Category, ...]
    intensity: IntensityTier
    total_minutes: int
    environment: Environment = Environment.ALONE
    surface: Surface | None = None

    def __post_init__(self) -> None:
        if not self.focus_areas:
            raise InvalidRequestError("Select at least one focus area")
        if not all(isinstance(a, Category) for a in self.focus_areas):
            raise InvalidRequestError(
                f"Focus areas must be Category members, got {self.focus_areas!r}"
            )
        if len(set(self.focus_areas)) != len(self.focus_areas):
            raise InvalidRequestError(
                f"Repeated focus area in {[a.value for a in self.focus_areas]}"
            )
        if not isinstance(self.intensity, IntensityTier):
            raise InvalidRequestError(f"Unknown intensity {self.intensity!r}")
        if not isinstance(self.environment, Environment):
            raise InvalidRequestError(f"Unknown environment {self.environment!r}")
        if self.surface is not None and not isinstance(self.surface, Surface):
            raise InvalidRequestError(f"Unknown surface {self.surface!r}")
        if not MIN_RATING <= self.rating <= MAX_RATING:
            raise InvalidRequestError(
                f"Rating {self.rating} outside {MIN_RATING}-{MAX_RATING}"
            )
        if isinstance(self.total_minutes, bool) or not isinstance(self.total_minutes, int):
            raise InvalidRequestError(
                f"Session length must be whole minutes, got {self.total_minutes!r}"
            )
        if not MIN_SESSION_MINUTES <= self.total_minutes <= MAX_SESSION_MINUTES:
            raise InvalidRequestError(
                f"Session length {self.total_minutes} outside "
                f"{MIN_SESSION_MINUTES}-{MAX_SESSION_MINUTES} minutes"
            )

    @classmethod
    def create(
        cls,
        rating: float,
        focus_areas: Iterable[str | Category],
        intensity: str | IntensityTier,
        total_minutes: int,
        environment: str | Environment = Environment.ALONE,
        surface: str | Surface | None = None,
    ) -> SessionRequest:
        """Build a validated request from raw values."""
        areas: list[Category] = []
        for raw in focus_areas:
            area = _coerce(Category, raw, "focus area")
            if area not in areas:
                areas.append(area)
        return cls(
            rating=float(rating),
            focus_areas=tuple(areas),
            intensity=_coerce(IntensityTier, intensity, "intensity"),
            total_minutes=total_minutes,
            environment=_coerce(Environment, environment, "environment"),
            surface=_coerce(Surface, surface, "surface") if surface else None,
        )


@dataclass(frozen=True)
class Session:
    """A persisted training session.

    ``id`` and ``created_at`` are None until the writer stores the row.
    ``total_minutes`` is fixed at creation and never recomputed.
    """

    user_id: str
    name: str
    intensity: IntensityTier
    total_minutes: int
    focus_areas: tuple[Category, ...]
    environment: Environment
    surface: Surface | None = None
    id: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class SessionDrill:
    """One drill placed in a session, with its slot and allocated minutes."""

    drill_id: str
    order_index: int                   # 1-based
    duration_minutes: int
    notes: str = ""
    session_id: str | None = None
    id: str | None = None


@dataclass(frozen=True)
class PlannedDrill:
    """A session slot joined with the catalog drill it points to."""

    slot: SessionDrill
    drill: Drill


@dataclass(frozen=True)
class SessionDetail:
    """A session with its drills in ``order_index`` order."""

    session: Session
    drills: tuple[PlannedDrill, ...] = field(default_factory=tuple)

    @property
    def allocated_minutes(self) -> int:
        return sum(p.slot.duration_minutes for p in self.drills)


@dataclass(frozen=True)
class GeneratedSession:
    """Outcome of ``SessionGenerator.generate()``.

    ``underfilled`` is True when the catalog held fewer usable drills than
    ``target_count``; the session is still valid and persisted.
    """

    session: Session
    session_drills: tuple[SessionDrill, ...]
    drills: tuple[Drill, ...]
    target_count: int
    underfilled: bool = False

    @property
    def detail(self) -> SessionDetail:
        return SessionDetail(
            session=self.session,
            drills=tuple(
                PlannedDrill(slot=slot, drill=drill)
                for slot, drill in zip(self.session_drills, self.drills)
            ),
        )
