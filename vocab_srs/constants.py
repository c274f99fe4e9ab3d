"""
Scheduler Constants and Enums

All fixed names and default policy numbers for the scheduling engine in one place.
Tunable values live in config.py; these are the defaults it is built from.
"""

from enum import Enum


# ---- Presentation ----

class DisplayMode(str, Enum):
    """How a card is presented to the learner."""
    DEMONSTRATION = "DEMONSTRATION"              # Translation revealed automatically
    WORD = "WORD"                                # Word shown, translation on tap
    TRANSLATION = "TRANSLATION"                  # Translation shown, word on tap
    TRANSLATION_TO_WORD = "TRANSLATION_TO_WORD"  # Typed answer required
    LISTENING_1 = "LISTENING_1"                  # Word spoken, content revealed on tap
    LISTENING_2 = "LISTENING_2"                  # Word spoken, learner types it


class ReviewDirection(str, Enum):
    """Language direction of a single review."""
    KNOWN_TO_LEARNING = "K_TO_L"
    LEARNING_TO_KNOWN = "L_TO_K"


class LifecycleState(str, Enum):
    """Derived category of a card. Never stored."""
    LEARN = "LEARN"
    REVIEW = "REVIEW"
    SUSPENDED = "SUSPENDED"

    # UI labels used by the learning screens
    KNOW = "REVIEW"
    MASTERED = "SUSPENDED"


class Difficulty(str, Enum):
    """Presentation difficulty tier."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


# ---- Progress ----

MIN_PROGRESS = 0
MAX_PROGRESS = 100

PROGRESS_INCREASE = 10           # Reward for a correct answer
PROGRESS_DECREASE = 20           # Penalty for an incorrect answer
RESET_SUCCESSFUL_REVIEWS_THRESHOLD = 20  # Below this, a miss rolls back one success

INCORRECT_ANSWER_DELAY_MS = 60_000  # Card comes back after one minute


# ---- Lifecycle Bands ----

REVIEW_STATE_MIN_PROGRESS = 10   # Inclusive
REVIEW_STATE_MAX_PROGRESS = 70   # Exclusive


# ---- Direction Mixing ----
# (minimum progress, probability of LEARNING_TO_KNOWN), highest band first

DIRECTION_MIX = (
    (80, 0.5),
    (60, 0.3),
)


# ---- Supportive Mode ----

SUPPORTIVE_MODE_PROGRESS = 40    # Below this, fall back to DEMONSTRATION


# ---- Legacy Fields ----
# Carried on every card for compatibility, not read by the interval table.

DEFAULT_EASE_FACTOR = 2.5
DEFAULT_INTERVAL_DAYS = 0


# ---- Statistics ----

LEARNED_PROGRESS = 50
MASTERED_PROGRESS = 70
