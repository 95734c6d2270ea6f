"""Enumerations and fixed constants for the session engine.

String-valued enums: the values are exactly what the catalog and the
sessions table store.
"""

from enum import Enum


class Category(str, Enum):
    """Skill areas a drill trains. Also the focus-area vocabulary."""

    FOREHAND = "forehand"
    BACKHAND = "backhand"
    SERVE = "serve"
    RETURN = "return"
    VOLLEYS = "volleys"
    OVERHEADS = "overheads"
    MOVEMENT = "movement"
    PATTERNS = "patterns"


class IntensityTier(str, Enum):
    """Physical load of a drill or a whole session."""

    LIGHT = "light"
    MEDIUM = "medium"
    HIGH = "high"


class Environment(str, Enum):
    """Who the player trains with."""

    ALONE = "alone"
    PARTNER = "partner"
    COACH = "coach"


class Surface(str, Enum):
    """Court surface. Optional on a session."""

    HARD = "hard"
    CLAY = "clay"
    GRASS = "grass"


# ---------------------------------------------------------------------------
# Request bounds
# ---------------------------------------------------------------------------
MIN_SESSION_MINUTES = 15
MAX_SESSION_MINUTES = 120

# UTR scale as offered by the session form (1.0 - 16.5 in 0.1 steps)
MIN_RATING = 1.0
MAX_RATING = 16.5
DEFAULT_RATING = 5.0

# ---------------------------------------------------------------------------
# Drill count tiers: (upper bound in minutes inclusive, drill count)
# Anything above the last bound gets LONG_SESSION_DRILL_COUNT.
# ---------------------------------------------------------------------------
DRILL_COUNT_TIERS: tuple[tuple[int, int], ...] = (
    (30, 3),
    (60, 5),
)
LONG_SESSION_DRILL_COUNT = 7

# Suffix appended to the name of a duplicated session
DUPLICATE_NAME_SUFFIX = " (Copy)"
