"""Enumerations and composition constants for the sequence engine."""

from enum import IntEnum, auto


class Category(IntEnum):
    """Pose category tags supplied by the catalog."""

    STANDING = auto()
    BALANCE = auto()
    BACKBEND = auto()
    FORWARD_FOLD = auto()
    TWIST = auto()
    CORE = auto()
    HIP_OPENER = auto()
    INVERSION = auto()
    RELAXATION = auto()


class DifficultyLevel(IntEnum):
    """Pose difficulty, easiest first."""

    BEGINNER = auto()
    INTERMEDIATE = auto()
    ADVANCED = auto()


class AnchorRole(IntEnum):
    """Placement role decided by the catalog provider.

    OPENING poses are placed first and CLOSING poses last by the
    anchored composition policy.
    """

    NONE = auto()
    OPENING = auto()
    CLOSING = auto()


class PlaybackStatus(IntEnum):
    """Playback session status. COMPLETED is terminal."""

    IDLE = auto()
    RUNNING = auto()
    PAUSED = auto()
    COMPLETED = auto()


class CommandType(IntEnum):
    """Commands accepted by the playback transition function."""

    PLAY = auto()
    PAUSE = auto()
    TICK = auto()
    ADVANCE = auto()
    RETREAT = auto()
    JUMP = auto()


class Effect(IntEnum):
    """Side-effect signals emitted by a playback transition."""

    ARM_TIMER = auto()
    DISARM_TIMER = auto()
    COMPLETED = auto()


# ---------------------------------------------------------------------------
# Anchored composition thresholds (fractions of target duration)
# ---------------------------------------------------------------------------
WARMUP_CEILING_PCT = 0.80     # Warm-up poses must keep total below this
MAIN_SET_CEILING_PCT = 0.90   # Category picks continue while below this
FILL_CEILING_PCT = 0.95       # Fill poses may bring total up to this

MAX_WARMUP_CANDIDATES = 2

# Main-set category rotation for a balanced practice
MAIN_CATEGORIES = (
    Category.STANDING,
    Category.BALANCE,
    Category.BACKBEND,
    Category.FORWARD_FOLD,
    Category.TWIST,
)

# ---------------------------------------------------------------------------
# Stochastic composition
# ---------------------------------------------------------------------------
STOCHASTIC_STOP_PCT = 0.90    # Stop drawing once total reaches this

# ---------------------------------------------------------------------------
# Playback
# ---------------------------------------------------------------------------
TICK_SECONDS = 1              # Remaining time decrement per tick
