"""Exception hierarchy for session generation and session records."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from session_engine.models.session import Session, SessionDrill


class SessionEngineError(Exception):
    """Base exception for all session_engine errors."""


class InvalidRequestError(SessionEngineError, ValueError):
    """A session request failed validation. Raised before any I/O."""


class InvalidRecordError(SessionEngineError, ValueError):
    """A raw catalog or session row could not be mapped to an entity."""


class NoCandidatesError(SessionEngineError):
    """The catalog returned no drills for the request."""

    def __init__(self, rating: float, categories, intensity) -> None:
        names = ", ".join(c.value for c in categories)
        super().__init__(
            f"No {intensity.value} drills for rating {rating:.1f} in: {names}"
        )
        self.rating = rating
        self.categories = tuple(categories)
        self.intensity = intensity


class PersistenceError(SessionEngineError):
    """Writing a session failed. Nothing was persisted."""


class PartialWriteError(PersistenceError):
    """The session row was written but its drill rows were not.

    ``session`` is the orphaned, already-persisted session and
    ``pending_drills`` the rows that still need writing. Hand the error to
    ``SessionGenerator.recover_partial_write`` to retry or roll back.
    """

    def __init__(
        self,
        session: Session,
        pending_drills: tuple[SessionDrill, ...],
        message: str | None = None,
    ) -> None:
        super().__init__(
            message or f"Session {session.id} saved without its drills"
        )
        self.session = session
        self.pending_drills = pending_drills

    @property
    def session_id(self) -> str | None:
        return self.session.id


class AuthorizationError(SessionEngineError):
    """The session does not exist for the requesting user.

    Raised for both missing sessions and sessions owned by someone else so
    the caller learns nothing about other users' data.
    """

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id


class UnderfilledSelectionWarning(UserWarning):
    """Fewer drills than the tier target were available.

    The session is still created; this is informational.
    """
