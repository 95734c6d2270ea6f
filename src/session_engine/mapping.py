"""Pure functions mapping raw storage rows to typed entities.

No I/O. Rows are plain dicts keyed by the stored column names
(``min_utr``, ``intensity_level``, ``session_length`` ...). Every
function validates its input and raises ``InvalidRecordError`` rather than
letting a malformed row reach the selection logic.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from session_engine.exceptions import InvalidRecordError, InvalidRequestError
from session_engine.models.drill import Drill
from session_engine.models.enums import Category, Environment, IntensityTier, Surface
from session_engine.models.profile import PlayerProfile
from session_engine.models.session import Session, SessionDrill


def drill_from_row(row: Mapping[str, Any]) -> Drill:
    """Map a ``drills`` row to a Drill."""
    min_rating = _number(row, "min_utr")
    max_rating = _number(row, "max_utr")
    if min_rating > max_rating:
        raise InvalidRecordError(
            f"Drill {row.get('id')}: min_utr {min_rating} > max_utr {max_rating}"
        )
    duration = _number(row, "default_duration_minutes")
    if duration <= 0:
        raise InvalidRecordError(
            f"Drill {row.get('id')}: default duration must be positive"
        )
    return Drill(
        id=_text(row, "id"),
        name=_text(row, "name"),
        description=str(row.get("description") or ""),
        category=_enum(Category, row, "category"),
        min_rating=min_rating,
        max_rating=max_rating,
        intensity=_enum(IntensityTier, row, "intensity_level"),
        default_duration_minutes=int(duration),
        instructions=_strings(row, "instructions"),
        coaching_cues=_strings(row, "coaching_cues"),
        created_at=_timestamp(row.get("created_at")),
    )


def drill_to_row(drill: Drill) -> dict[str, Any]:
    """Inverse of ``drill_from_row`` (timestamps left to the store)."""
    return {
        "id": drill.id,
        "name": drill.name,
        "description": drill.description,
        "category": drill.category.value,
        "min_utr": drill.min_rating,
        "max_utr": drill.max_rating,
        "intensity_level": drill.intensity.value,
        "default_duration_minutes": drill.default_duration_minutes,
        "instructions": list(drill.instructions),
        "coaching_cues": list(drill.coaching_cues),
    }


def session_from_row(row: Mapping[str, Any]) -> Session:
    """Map a ``sessions`` row to a Session."""
    length = _number(row, "session_length")
    if length != int(length) or length <= 0:
        raise InvalidRecordError(f"Session {row.get('id')}: bad length {length}")
    areas = row.get("focus_areas")
    if not isinstance(areas, (list, tuple)) or not areas:
        raise InvalidRecordError(f"Session {row.get('id')}: focus_areas missing")
    try:
        focus = tuple(Category(a) for a in areas)
    except ValueError as exc:
        raise InvalidRecordError(f"Session {row.get('id')}: {exc}") from exc
    surface = row.get("surface")
    return Session(
        id=_text(row, "id"),
        user_id=_text(row, "user_id"),
        name=_text(row, "name"),
        intensity=_enum(IntensityTier, row, "intensity"),
        total_minutes=int(length),
        focus_areas=focus,
        environment=_enum(Environment, row, "environment"),
        surface=_enum(Surface, row, "surface") if surface else None,
        created_at=_timestamp(row.get("created_at")),
    )


def session_to_row(session: Session) -> dict[str, Any]:
    return {
        "user_id": session.user_id,
        "name": session.name,
        "intensity": session.intensity.value,
        "session_length": session.total_minutes,
        "focus_areas": [a.value for a in session.focus_areas],
        "environment": session.environment.value,
        "surface": session.surface.value if session.surface else None,
    }


def session_drill_from_row(row: Mapping[str, Any]) -> SessionDrill:
    """Map a ``session_drills`` row to a SessionDrill."""
    order_index = _number(row, "order_index")
    duration = _number(row, "duration_minutes")
    if order_index < 1:
        raise InvalidRecordError(f"Slot {row.get('id')}: order_index < 1")
    if duration < 0:
        raise InvalidRecordError(f"Slot {row.get('id')}: negative duration")
    return SessionDrill(
        id=row.get("id"),
        session_id=row.get("session_id"),
        drill_id=_text(row, "drill_id"),
        order_index=int(order_index),
        duration_minutes=int(duration),
        notes=str(row.get("notes") or ""),
    )


def profile_from_row(row: Mapping[str, Any]) -> PlayerProfile:
    try:
        return PlayerProfile(
            user_id=_text(row, "id"),
            rating=_number(row, "utr"),
            handedness=str(row.get("handedness") or "right"),
            playstyle=str(row.get("playstyle") or "baseline"),
            goals=str(row.get("goals") or ""),
            updated_at=_timestamp(row.get("updated_at")),
        )
    except InvalidRequestError as exc:
        raise InvalidRecordError(f"Profile {row.get('id')}: {exc}") from exc


# ---------------------------------------------------------------------------
# Field validators
# ---------------------------------------------------------------------------


def _text(row: Mapping[str, Any], key: str) -> str:
    value = row.get(key)
    if value is None or str(value) == "":
        raise InvalidRecordError(f"Missing required field {key!r}")
    return str(value)


def _number(row: Mapping[str, Any], key: str) -> float:
    value = row.get(key)
    if isinstance(value, bool):
        raise InvalidRecordError(f"Field {key!r} must be numeric, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidRecordError(
            f"Field {key!r} must be numeric, got {value!r}"
        ) from None


def _enum(enum_cls, row: Mapping[str, Any], key: str):
    value = row.get(key)
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidRecordError(f"Unknown {key} {value!r}") from None


def _strings(row: Mapping[str, Any], key: str) -> tuple[str, ...]:
    value = row.get(key)
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise InvalidRecordError(f"Field {key!r} must be a list of strings")
    return tuple(str(v) for v in value)


def _timestamp(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        raise InvalidRecordError(f"Bad timestamp {value!r}") from None
