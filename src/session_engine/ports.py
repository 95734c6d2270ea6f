"""Abstract collaborators the engine depends on.

Concrete implementations live outside the core (see ``drill_store``).
Tests substitute in-memory fakes.
"""

from __future__ import annotations

import dataclasses
import logging
from abc import ABC, abstractmethod
from typing import Iterable, Sequence

from session_engine.exceptions import PartialWriteError
from session_engine.models.drill import Drill
from session_engine.models.enums import Category, IntensityTier
from session_engine.models.session import Session, SessionDetail, SessionDrill

logger = logging.getLogger(__name__)


class CatalogQuery(ABC):
    """Read access to the drill catalog."""

    @abstractmethod
    def query_candidates(
        self,
        rating: float,
        categories: Iterable[Category],
        intensity: IntensityTier,
    ) -> tuple[Drill, ...]:
        """Return drills in *categories* that accept *rating* at *intensity*.

        An empty result is valid and must not raise.
        """
        ...


class SessionWriter(ABC):
    """Write access to sessions and their drill slots.

    Subclasses implement the two primitive inserts and ``delete_session``.
    ``write_session`` combines the inserts as one logical unit: writers
    backed by a real transaction should override it.
    """

    @abstractmethod
    def insert_session(self, session: Session) -> Session:
        """Store *session* and return it with ``id`` and ``created_at`` set.

        Raises:
            PersistenceError: If the row could not be written.
        """
        ...

    @abstractmethod
    def insert_session_drills(
        self, session_id: str, drills: Sequence[SessionDrill]
    ) -> tuple[SessionDrill, ...]:
        """Store drill slots for an existing session. All or nothing.

        Raises:
            PersistenceError: If the rows could not be written.
        """
        ...

    @abstractmethod
    def delete_session(self, session_id: str, owner_id: str) -> None:
        """Delete a session and its drill slots.

        Raises:
            AuthorizationError: If *owner_id* does not own the session.
        """
        ...

    def write_session(
        self, session: Session, drills: Sequence[SessionDrill]
    ) -> tuple[Session, tuple[SessionDrill, ...]]:
        """Persist a session and its slots as one logical unit.

        Compensating protocol: if the session row is written but the slots
        are not, ``PartialWriteError`` carries the orphaned session and the
        pending slots so the caller can retry or delete it. Any failure of
        the slot write is reported this way, including infrastructure errors
        (available as ``__cause__``).

        Raises:
            PersistenceError: Session row not written. Nothing persisted.
            PartialWriteError: Session row written, slots not written.
        """
        saved = self.insert_session(session)
        pending = tuple(dataclasses.replace(d, session_id=saved.id) for d in drills)
        try:
            slots = self.insert_session_drills(saved.id, pending)
        except Exception as exc:
            logger.error(
                "Drill rows for session %s failed to write: %s", saved.id, exc
            )
            raise PartialWriteError(saved, pending) from exc
        return saved, slots


class SessionRepository(SessionWriter):
    """Owner-scoped read and record-management operations on sessions.

    Every method filters on the owner id; a session owned by someone else
    is reported exactly like a missing one.
    """

    @abstractmethod
    def get_session(self, session_id: str, owner_id: str) -> SessionDetail:
        """Return a session with its drills in slot order.

        Raises:
            AuthorizationError: If the session is missing or not owned.
        """
        ...

    @abstractmethod
    def list_sessions(self, owner_id: str) -> list[Session]:
        """Return the owner's sessions, newest first."""
        ...

    @abstractmethod
    def duplicate_session(self, session_id: str, owner_id: str) -> SessionDetail:
        """Copy a session and all its slots under new ids.

        Raises:
            AuthorizationError: If the session is missing or not owned.
        """
        ...
