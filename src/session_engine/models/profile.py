"""Player profile: the stored defaults for a user's generation requests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from session_engine.exceptions import InvalidRequestError
from session_engine.models.enums import DEFAULT_RATING, MAX_RATING, MIN_RATING


@dataclass(frozen=True)
class PlayerProfile:
    """Per-user profile. ``rating`` pre-fills new session requests.

    The rating must lie in the same UTR range a request accepts.
    """

    user_id: str
    rating: float = DEFAULT_RATING
    handedness: str = "right"
    playstyle: str = "baseline"
    goals: str = ""
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if not MIN_RATING <= self.rating <= MAX_RATING:
            raise InvalidRequestError(
                f"Rating {self.rating} outside {MIN_RATING}-{MAX_RATING}"
            )
