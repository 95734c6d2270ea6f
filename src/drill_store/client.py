"""High-level store facade over SQLAlchemy.

Implements the engine's catalog and session ports. Every session read,
copy or delete is filtered on the owning user id.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterable, Iterator, Sequence

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session as DbSession
from sqlalchemy.orm import sessionmaker

from drill_store.database import init_db, make_engine, make_session_factory
from drill_store.exceptions import DrillStoreError, StoreUnavailableError
from drill_store.schema import (
    DrillRow,
    FavoriteDrillRow,
    ProfileRow,
    SessionDrillRow,
    SessionRow,
    new_id,
    utcnow,
)
from session_engine.exceptions import AuthorizationError, PersistenceError
from session_engine.mapping import (
    drill_from_row,
    drill_to_row,
    profile_from_row,
    session_drill_from_row,
    session_from_row,
    session_to_row,
)
from session_engine.models.drill import Drill
from session_engine.models.enums import DUPLICATE_NAME_SUFFIX, Category, IntensityTier
from session_engine.models.profile import PlayerProfile
from session_engine.models.session import (
    PlannedDrill,
    Session,
    SessionDetail,
    SessionDrill,
)
from session_engine.ports import CatalogQuery, SessionRepository

logger = logging.getLogger(__name__)


class DrillStore(CatalogQuery, SessionRepository):
    """Facade for catalog, session, favorite and profile operations."""

    def __init__(
        self,
        session_factory: sessionmaker,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._session_factory = session_factory
        self._clock = clock

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "DrillStore":
        """Connect to *url*, create missing tables, and return a store."""
        engine = make_engine(url)
        try:
            init_db(engine)
        except OperationalError as exc:
            raise StoreUnavailableError(f"Cannot initialise {url}: {exc}") from exc
        return cls(make_session_factory(engine), **kwargs)

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def query_candidates(
        self,
        rating: float,
        categories: Iterable[Category],
        intensity: IntensityTier,
    ) -> tuple[Drill, ...]:
        """Drills in *categories* whose UTR range holds *rating* at *intensity*."""
        names = [c.value for c in categories]
        if not names:
            return ()
        with self._transaction("query candidates", write=False) as db:
            rows = (
                db.query(DrillRow)
                .filter(
                    DrillRow.category.in_(names),
                    DrillRow.min_utr <= rating,
                    DrillRow.max_utr >= rating,
                    DrillRow.intensity_level == intensity.value,
                )
                .order_by(DrillRow.id)
                .all()
            )
            drills = tuple(drill_from_row(r.to_dict()) for r in rows)
        logger.debug(
            "Catalog returned %d %s drills for UTR %.1f in %s",
            len(drills), intensity.value, rating, names,
        )
        return drills

    def add_drills(self, drills: Iterable[Drill]) -> int:
        """Insert or replace catalog drills by id. Returns the count written."""
        count = 0
        with self._transaction("add drills") as db:
            for drill in drills:
                db.merge(DrillRow(**drill_to_row(drill)))
                count += 1
        logger.info("Stored %d catalog drills", count)
        return count

    def get_drill(self, drill_id: str) -> Drill | None:
        with self._transaction("get drill", write=False) as db:
            row = db.get(DrillRow, drill_id)
            return drill_from_row(row.to_dict()) if row is not None else None

    # ------------------------------------------------------------------
    # Session writes
    # ------------------------------------------------------------------

    def insert_session(self, session: Session) -> Session:
        with self._transaction("insert session") as db:
            row = self._add_session_row(db, session)
            saved = session_from_row(row.to_dict())
        logger.info("Saved session %s for user %s", saved.id, saved.user_id)
        return saved

    def insert_session_drills(
        self, session_id: str, drills: Sequence[SessionDrill]
    ) -> tuple[SessionDrill, ...]:
        with self._transaction("insert session drills") as db:
            if db.get(SessionRow, session_id) is None:
                raise PersistenceError(f"Session {session_id} does not exist")
            rows = self._add_slot_rows(db, session_id, drills)
            slots = tuple(session_drill_from_row(r.to_dict()) for r in rows)
        logger.info("Saved %d drills for session %s", len(slots), session_id)
        return slots

    def write_session(
        self, session: Session, drills: Sequence[SessionDrill]
    ) -> tuple[Session, tuple[SessionDrill, ...]]:
        """Write the session and its slots in a single transaction.

        Either both are stored or neither is, so this never raises
        PartialWriteError.
        """
        with self._transaction("write session") as db:
            row = self._add_session_row(db, session)
            slot_rows = self._add_slot_rows(db, row.id, drills)
            saved = session_from_row(row.to_dict())
            slots = tuple(session_drill_from_row(r.to_dict()) for r in slot_rows)
        logger.info(
            "Saved session %s for user %s with %d drills",
            saved.id, saved.user_id, len(slots),
        )
        return saved, slots

    # ------------------------------------------------------------------
    # Owner-scoped session management
    # ------------------------------------------------------------------

    def delete_session(self, session_id: str, owner_id: str) -> None:
        with self._transaction("delete session") as db:
            row = self._owned_session(db, session_id, owner_id)
            db.delete(row)
        logger.info("Deleted session %s", session_id)

    def get_session(self, session_id: str, owner_id: str) -> SessionDetail:
        with self._transaction("get session", write=False) as db:
            row = self._owned_session(db, session_id, owner_id)
            return self._detail(row)

    def list_sessions(self, owner_id: str) -> list[Session]:
        with self._transaction("list sessions", write=False) as db:
            rows = (
                db.query(SessionRow)
                .filter(SessionRow.user_id == owner_id)
                .order_by(SessionRow.created_at.desc(), SessionRow.id)
                .all()
            )
            return [session_from_row(r.to_dict()) for r in rows]

    def duplicate_session(self, session_id: str, owner_id: str) -> SessionDetail:
        """Copy a session and its slots; the copy is named ``"<name> (Copy)"``."""
        with self._transaction("duplicate session") as db:
            original = self._owned_session(db, session_id, owner_id)
            copy = SessionRow(
                id=new_id(),
                user_id=original.user_id,
                name=f"{original.name}{DUPLICATE_NAME_SUFFIX}",
                intensity=original.intensity,
                session_length=original.session_length,
                focus_areas=list(original.focus_areas),
                environment=original.environment,
                surface=original.surface,
                created_at=self._clock(),
            )
            db.add(copy)
            db.flush()
            for slot in original.drills:
                db.add(SessionDrillRow(
                    id=new_id(),
                    session_id=copy.id,
                    drill_id=slot.drill_id,
                    order_index=slot.order_index,
                    duration_minutes=slot.duration_minutes,
                    notes=slot.notes,
                ))
            db.flush()
            db.refresh(copy)
            detail = self._detail(copy)
        logger.info("Duplicated session %s as %s", session_id, detail.session.id)
        return detail

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------

    def favorite_drill_ids(self, user_id: str) -> set[str]:
        with self._transaction("list favorites", write=False) as db:
            rows = db.query(FavoriteDrillRow).filter(FavoriteDrillRow.user_id == user_id).all()
            return {r.drill_id for r in rows}

    def toggle_favorite(self, user_id: str, drill_id: str) -> bool:
        """Star or unstar a drill for *user_id*. Returns the new state."""
        with self._transaction("toggle favorite") as db:
            existing = db.get(FavoriteDrillRow, (user_id, drill_id))
            if existing is not None:
                db.delete(existing)
                return False
            db.add(FavoriteDrillRow(user_id=user_id, drill_id=drill_id, created_at=self._clock()))
            return True

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    def get_profile(self, user_id: str) -> PlayerProfile:
        """Stored profile for *user_id*, or the defaults if none exists."""
        with self._transaction("get profile", write=False) as db:
            row = db.get(ProfileRow, user_id)
            if row is None:
                return PlayerProfile(user_id=user_id)
            return profile_from_row(row.to_dict())

    def save_profile(self, profile: PlayerProfile) -> PlayerProfile:
        with self._transaction("save profile") as db:
            row = db.get(ProfileRow, profile.user_id)
            if row is None:
                row = ProfileRow(id=profile.user_id, created_at=self._clock())
                db.add(row)
            row.utr = profile.rating
            row.handedness = profile.handedness
            row.playstyle = profile.playstyle
            row.goals = profile.goals
            row.updated_at = self._clock()
            db.flush()
            return profile_from_row(row.to_dict())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @contextmanager
    def _transaction(self, action: str, write: bool = True) -> Iterator[DbSession]:
        """Yield a database session; commit on success, roll back on error.

        OperationalError (connection-level) becomes StoreUnavailableError.
        Other SQLAlchemy errors become PersistenceError for writes and
        DrillStoreError for reads.
        """
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except OperationalError as exc:
            db.rollback()
            logger.error("Database unavailable during %s: %s", action, exc)
            raise StoreUnavailableError(f"{action}: {exc}") from exc
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Failed to %s: %s", action, exc)
            error_cls = PersistenceError if write else DrillStoreError
            raise error_cls(f"Failed to {action}: {exc}") from exc
        except BaseException:
            db.rollback()
            raise
        finally:
            db.close()

    def _add_session_row(self, db: DbSession, session: Session) -> SessionRow:
        row = SessionRow(id=new_id(), created_at=self._clock(), **session_to_row(session))
        db.add(row)
        db.flush()
        return row

    def _add_slot_rows(
        self, db: DbSession, session_id: str, drills: Sequence[SessionDrill]
    ) -> list[SessionDrillRow]:
        rows = [
            SessionDrillRow(
                id=new_id(),
                session_id=session_id,
                drill_id=d.drill_id,
                order_index=d.order_index,
                duration_minutes=d.duration_minutes,
                notes=d.notes,
            )
            for d in drills
        ]
        db.add_all(rows)
        db.flush()
        return rows

    @staticmethod
    def _owned_session(db: DbSession, session_id: str, owner_id: str) -> SessionRow:
        row = (
            db.query(SessionRow)
            .filter(SessionRow.id == session_id, SessionRow.user_id == owner_id)
            .first()
        )
        if row is None:
            raise AuthorizationError(session_id)
        return row

    @staticmethod
    def _detail(row: SessionRow) -> SessionDetail:
        return SessionDetail(
            session=session_from_row(row.to_dict()),
            drills=tuple(
                PlannedDrill(
                    slot=session_drill_from_row(slot.to_dict()),
                    drill=drill_from_row(slot.drill.to_dict()),
                )
                for slot in row.drills
            ),
        )
