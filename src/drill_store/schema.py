"""SQLAlchemy ORM models for the drill catalog, sessions and favorites.

Column names match the original storage schema; the mapping to engine
entities happens in ``session_engine.mapping``.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RowMixin:
    def to_dict(self) -> dict:
        """Column name -> value, the shape ``session_engine.mapping`` reads."""
        return {c.name: getattr(self, c.name) for c in self.__table__.columns}


class DrillRow(RowMixin, Base):
    """A catalog drill. Read-only to the engine."""
    __tablename__ = 'drills'

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(String(50), nullable=False, index=True)
    min_utr = Column(Float, nullable=False)
    max_utr = Column(Float, nullable=False)
    intensity_level = Column(String(20), nullable=False, index=True)
    default_duration_minutes = Column(Integer, nullable=False)
    instructions = Column(JSON, nullable=False, default=list)
    coaching_cues = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return f"<DrillRow({self.id}, {self.category}, {self.intensity_level})>"


class SessionRow(RowMixin, Base):
    """A generated training session owned by one user."""
    __tablename__ = 'sessions'

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(255), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    intensity = Column(String(20), nullable=False)
    session_length = Column(Integer, nullable=False)  # total minutes, never recomputed
    focus_areas = Column(JSON, nullable=False)
    environment = Column(String(20), nullable=False)
    surface = Column(String(20), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    drills = relationship(
        "SessionDrillRow",
        cascade="all, delete-orphan",
        order_by="SessionDrillRow.order_index",
    )

    def __repr__(self):
        return f"<SessionRow({self.id}, user={self.user_id})>"


class SessionDrillRow(RowMixin, Base):
    """One drill slot in a session."""
    __tablename__ = 'session_drills'

    id = Column(String(36), primary_key=True, default=new_id)
    session_id = Column(
        String(36), ForeignKey('sessions.id', ondelete='CASCADE'), nullable=False, index=True
    )
    drill_id = Column(String(36), ForeignKey('drills.id'), nullable=False)
    order_index = Column(Integer, nullable=False)  # 1-based
    duration_minutes = Column(Integer, nullable=False)
    notes = Column(Text, nullable=False, default="")

    drill = relationship("DrillRow")


class FavoriteDrillRow(RowMixin, Base):
    """A drill a user starred."""
    __tablename__ = 'favorite_drills'

    user_id = Column(String(255), primary_key=True)
    drill_id = Column(String(36), ForeignKey('drills.id', ondelete='CASCADE'), primary_key=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class ProfileRow(RowMixin, Base):
    """Per-user defaults; ``utr`` pre-fills the session request."""
    __tablename__ = 'profiles'

    id = Column(String(255), primary_key=True)  # user id
    utr = Column(Float, nullable=False)
    handedness = Column(String(20), nullable=False, default="right")
    playstyle = Column(String(50), nullable=False, default="baseline")
    goals = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
