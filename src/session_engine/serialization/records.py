"""JSON serialization for SessionDetail objects.

Converts a session and its ordered drills into the nested view a client
renders: session header, a timeline of duration shares, and one card per
drill with instructions and coaching cues.

All functions are pure (no I/O).
"""

from __future__ import annotations

import json
from typing import AbstractSet

from session_engine.models.session import PlannedDrill, SessionDetail

# Timeline segment colors: evenly spaced hues, fixed saturation/lightness.
_TIMELINE_SATURATION = 70
_TIMELINE_LIGHTNESS = 50


def to_session_dict(
    detail: SessionDetail, favorite_ids: AbstractSet[str] = frozenset()
) -> dict:
    """Convert a SessionDetail to a JSON-compatible dict.

    Args:
        detail: Session with its drills in slot order.
        favorite_ids: Drill ids the viewer has starred; each card gets a
            ``favorite`` flag.
    """
    session = detail.session
    count = len(detail.drills)
    return {
        "id": session.id,
        "name": session.name,
        "intensity": session.intensity.value,
        "sessionLength": session.total_minutes,
        "focusAreas": [a.value for a in session.focus_areas],
        "environment": session.environment.value,
        "surface": session.surface.value if session.surface else None,
        "createdAt": session.created_at.isoformat() if session.created_at else None,
        "timeline": [
            _timeline_segment(p, i, count, session.total_minutes)
            for i, p in enumerate(detail.drills)
        ],
        "drills": [_drill_card(p, favorite_ids) for p in detail.drills],
    }


def to_session_json_string(
    detail: SessionDetail,
    indent: int | None = 2,
    favorite_ids: AbstractSet[str] = frozenset(),
) -> str:
    """Convert a SessionDetail to a JSON string."""
    return json.dumps(to_session_dict(detail, favorite_ids), indent=indent)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _timeline_segment(
    planned: PlannedDrill, index: int, count: int, total_minutes: int
) -> dict:
    share = planned.slot.duration_minutes / total_minutes if total_minutes else 0.0
    hue = round(index * 360 / count) if count else 0
    return {
        "drillName": planned.drill.name,
        "durationMinutes": planned.slot.duration_minutes,
        "widthPct": round(share * 100, 1),
        "color": f"hsl({hue}, {_TIMELINE_SATURATION}%, {_TIMELINE_LIGHTNESS}%)",
    }


def _drill_card(planned: PlannedDrill, favorite_ids: AbstractSet[str]) -> dict:
    drill = planned.drill
    return {
        "orderIndex": planned.slot.order_index,
        "drillId": drill.id,
        "name": drill.name,
        "category": drill.category.value,
        "description": drill.description,
        "durationMinutes": planned.slot.duration_minutes,
        "intensity": drill.intensity.value,
        "ratingRange": [drill.min_rating, drill.max_rating],
        "instructions": list(drill.instructions),
        "coachingCues": list(drill.coaching_cues),
        "notes": planned.slot.notes,
        "favorite": drill.id in favorite_ids,
    }
