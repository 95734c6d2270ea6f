"""Data models for the session engine."""

from session_engine.models.drill import Drill
from session_engine.models.enums import (
    Category,
    Environment,
    IntensityTier,
    Surface,
)
from session_engine.models.profile import PlayerProfile
from session_engine.models.selection import (
    AllocationPlan,
    DrillAllocation,
    SelectionResult,
)
from session_engine.models.session import (
    GeneratedSession,
    PlannedDrill,
    Session,
    SessionDetail,
    SessionDrill,
    SessionRequest,
)

__all__ = [
    "AllocationPlan",
    "Category",
    "Drill",
    "DrillAllocation",
    "Environment",
    "GeneratedSession",
    "IntensityTier",
    "PlannedDrill",
    "PlayerProfile",
    "SelectionResult",
    "Session",
    "SessionDetail",
    "SessionDrill",
    "SessionRequest",
    "Surface",
]
