"""Session assembler — turns an allocation plan into unsaved records."""

from __future__ import annotations

from typing import Iterable

from session_engine.models.enums import Category, IntensityTier
from session_engine.models.selection import AllocationPlan
from session_engine.models.session import Session, SessionDrill, SessionRequest


def build_session_name(
    intensity: IntensityTier, focus_areas: Iterable[Category]
) -> str:
    """Display name, e.g. ``"Medium forehand, serve Session"``."""
    areas = ", ".join(area.value for area in focus_areas)
    return f"{intensity.value.capitalize()} {areas} Session"


class SessionAssembler:
    """Builds the Session row and its SessionDrill rows for the writer.

    Usage::

        assembler = SessionAssembler()
        session, slots = assembler.assemble(request, user_id, plan)
    """

    def assemble(
        self,
        request: SessionRequest,
        user_id: str,
        plan: AllocationPlan,
    ) -> tuple[Session, tuple[SessionDrill, ...]]:
        """Build unsaved records. Ids are assigned by the writer.

        Raises:
            ValueError: If the plan does not cover the requested length.
        """
        if plan.total_minutes != request.total_minutes:
            raise ValueError(
                f"Plan covers {plan.total_minutes} min, "
                f"request asked for {request.total_minutes}"
            )

        session = Session(
            user_id=user_id,
            name=build_session_name(request.intensity, request.focus_areas),
            intensity=request.intensity,
            total_minutes=request.total_minutes,
            focus_areas=request.focus_areas,
            environment=request.environment,
            surface=request.surface,
        )
        slots = tuple(
            SessionDrill(
                drill_id=a.drill.id,
                order_index=a.order_index,
                duration_minutes=a.duration_minutes,
                notes="",
            )
            for a in plan.allocations
        )
        return session, slots
