"""SessionGenerator — the main orchestrator that builds training sessions."""

from __future__ import annotations

import logging
import warnings

import numpy as np

from session_engine.assembler import SessionAssembler
from session_engine.exceptions import (
    NoCandidatesError,
    PartialWriteError,
    UnderfilledSelectionWarning,
)
from session_engine.models.drill import Drill
from session_engine.models.selection import AllocationPlan, SelectionResult
from session_engine.models.session import GeneratedSession, Session, SessionRequest
from session_engine.ports import CatalogQuery, SessionWriter
from session_engine.selection.allocator import allocate_durations
from session_engine.selection.filler import fill_selection
from session_engine.selection.permutation import make_rng
from session_engine.selection.sampler import sample_candidates

logger = logging.getLogger(__name__)


class SessionGenerator:
    """Runs catalog query, selection, allocation, assembly and the write.

    Usage:
        generator = SessionGenerator(store, store, seed=42)
        result = generator.generate(request, user_id)

    The catalog and writer are injected; the selection stages are pure and
    can be exercised through ``plan()`` without any backend.
    """

    def __init__(
        self,
        catalog: CatalogQuery,
        writer: SessionWriter,
        seed: int | np.random.Generator | None = None,
        assembler: SessionAssembler | None = None,
    ) -> None:
        self.catalog = catalog
        self.writer = writer
        self.assembler = assembler or SessionAssembler()
        self._rng = make_rng(seed)

    def generate(
        self,
        request: SessionRequest,
        user_id: str,
        seed: int | None = None,
    ) -> GeneratedSession:
        """Generate and persist a session for *user_id*.

        Args:
            request: Validated session request.
            user_id: Owner of the new session.
            seed: Optional per-request seed; overrides the generator's own
                random source for this call only.

        Returns:
            The persisted session, its slots and the chosen drills.

        Raises:
            NoCandidatesError: The catalog had no matching drills.
            PersistenceError: The session could not be written.
            PartialWriteError: The session was written without its drills.
        """
        candidates = self.catalog.query_candidates(
            request.rating, request.focus_areas, request.intensity,
        )
        if not candidates:
            raise NoCandidatesError(
                request.rating, request.focus_areas, request.intensity,
            )

        rng = make_rng(seed) if seed is not None else self._rng
        selection, plan = self.plan(request, candidates, rng)

        session, slots = self.assembler.assemble(request, user_id, plan)
        saved, saved_slots = self.writer.write_session(session, slots)

        if selection.underfilled:
            message = (
                f"Only {len(selection.selected)} of {selection.target_count} "
                f"drills available for session {saved.id}"
            )
            logger.warning("%s", message)
            warnings.warn(message, UnderfilledSelectionWarning, stacklevel=2)

        logger.info(
            "Generated session %s for user %s: %d drills, %d min",
            saved.id,
            user_id,
            len(saved_slots),
            saved.total_minutes,
        )
        return GeneratedSession(
            session=saved,
            session_drills=saved_slots,
            drills=plan.drills,
            target_count=selection.target_count,
            underfilled=selection.underfilled,
        )

    def plan(
        self,
        request: SessionRequest,
        candidates: tuple[Drill, ...] | list[Drill],
        rng: np.random.Generator | None = None,
    ) -> tuple[SelectionResult, AllocationPlan]:
        """Select drills and allocate durations. No I/O.

        Raises:
            NoCandidatesError: No candidate belongs to a focus area.
        """
        rng = rng if rng is not None else self._rng
        selection = fill_selection(
            sample_candidates(
                candidates, request.focus_areas, request.total_minutes, rng,
            )
        )
        if not selection.selected:
            raise NoCandidatesError(
                request.rating, request.focus_areas, request.intensity,
            )
        return selection, allocate_durations(
            selection.selected, request.total_minutes,
        )

    def recover_partial_write(
        self, error: PartialWriteError, retry: bool = True
    ) -> Session | None:
        """Resolve an orphaned session left by a failed drill write.

        Args:
            error: The PartialWriteError raised by ``generate()``.
            retry: True to write the pending slots again, False to delete
                the orphaned session.

        Returns:
            The session when the retry succeeds, None after a rollback.

        Raises:
            PersistenceError: The retry failed again; the session is still
                orphaned and the same choice applies.
        """
        session = error.session
        if retry:
            slots = self.writer.insert_session_drills(session.id, error.pending_drills)
            logger.info(
                "Repaired session %s with %d drills", session.id, len(slots)
            )
            return session

        self.writer.delete_session(session.id, session.user_id)
        logger.warning("Rolled back orphaned session %s", session.id)
        return None
