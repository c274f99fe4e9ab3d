"""
vocab_srs - Vocabulary Flashcard Scheduling Engine

Decides, for each flashcard, its progress, the display mode it is shown in,
when it is due again, and how review outcomes change its state.

Quick start:
    import vocab_srs

    card = vocab_srs.new_card("1", "perro", "dog", language_pair_id="es-en")

    # How to present it
    mode = vocab_srs.select_display_mode(card.progress, card.review_count)
    direction = vocab_srs.select_direction(card.progress)

    # Apply an answer (pure; returns a new card)
    card = vocab_srs.process_review(card, vocab_srs.ReviewResult(correct=True, time_spent_ms=1800))

    # What to study next
    due = vocab_srs.get_due_cards(cards)

Every entry point that needs the current time takes an optional clock
(zero-argument callable returning an aware datetime).
"""

# Core scheduler API
from vocab_srs.scheduler import process_review, build_review_event

# Presentation
from vocab_srs.display_modes import (
    select_display_mode,
    select_mode_name,
    get_supportive_mode,
    describe_mode,
    ModeSelection,
)
from vocab_srs.direction import select_direction, reverse_probability

# Lifecycle
from vocab_srs.lifecycle import derive_state, group_by_state

# Due-set queries
from vocab_srs.queue import (
    TimeUntilNext,
    get_due_cards,
    get_next_due_card,
    get_time_until_next,
    get_lesson_cards_in_order,
    get_next_card_to_show,
    check_for_duplicates,
)

# Models
from vocab_srs.schemas import Card, ReviewResult, new_card, ensure_card

# Configuration
from vocab_srs.config import (
    CardDisplaySettings,
    DisplayModeConfig,
    IntervalSpec,
    SpacedRepetitionSettings,
    DEFAULT_SETTINGS,
    get_mode_config,
    get_mode_config_with_difficulty,
    get_all_modes,
    get_next_review_interval,
    validate_mode_bands,
    with_spaced_repetition,
    with_modes,
)

# Enums
from vocab_srs.constants import DisplayMode, ReviewDirection, LifecycleState, Difficulty

# Errors
from vocab_srs.exceptions import (
    SchedulerError,
    InvalidCardError,
    UnknownModeError,
    ConfigurationError,
    CardNotFoundError,
    DuplicateCardError,
    SessionStateError,
)

# Clock
from vocab_srs.clock import FrozenClock, utc_now


__all__ = [
    # Core algorithm
    "process_review",
    "build_review_event",

    # Presentation
    "select_display_mode",
    "select_mode_name",
    "get_supportive_mode",
    "describe_mode",
    "ModeSelection",
    "select_direction",
    "reverse_probability",

    # Lifecycle
    "derive_state",
    "group_by_state",

    # Due-set queries
    "TimeUntilNext",
    "get_due_cards",
    "get_next_due_card",
    "get_time_until_next",
    "get_lesson_cards_in_order",
    "get_next_card_to_show",
    "check_for_duplicates",

    # Models
    "Card",
    "ReviewResult",
    "new_card",
    "ensure_card",

    # Configuration
    "CardDisplaySettings",
    "DisplayModeConfig",
    "IntervalSpec",
    "SpacedRepetitionSettings",
    "DEFAULT_SETTINGS",
    "get_mode_config",
    "get_mode_config_with_difficulty",
    "get_all_modes",
    "get_next_review_interval",
    "validate_mode_bands",
    "with_spaced_repetition",
    "with_modes",

    # Enums
    "DisplayMode",
    "ReviewDirection",
    "LifecycleState",
    "Difficulty",

    # Errors
    "SchedulerError",
    "InvalidCardError",
    "UnknownModeError",
    "ConfigurationError",
    "CardNotFoundError",
    "DuplicateCardError",
    "SessionStateError",

    # Clock
    "FrozenClock",
    "utc_now",
]
