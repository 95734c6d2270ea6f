"""Session engine — selects drills and allocates time for training sessions."""

from session_engine.engine import SessionGenerator
from session_engine.exceptions import (
    AuthorizationError,
    InvalidRecordError,
    InvalidRequestError,
    NoCandidatesError,
    PartialWriteError,
    PersistenceError,
    SessionEngineError,
    UnderfilledSelectionWarning,
)

__all__ = [
    "AuthorizationError",
    "InvalidRecordError",
    "InvalidRequestError",
    "NoCandidatesError",
    "PartialWriteError",
    "PersistenceError",
    "SessionEngineError",
    "SessionGenerator",
    "UnderfilledSelectionWarning",
]
