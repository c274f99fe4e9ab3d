"""
Card Display Configuration

Pure data describing how each display mode behaves and how reviews move a
card through the schedule. Swap DEFAULT_SETTINGS wholesale (or build a copy
with with_spaced_repetition / with_modes) to change policy without touching
engine code.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from datetime import timedelta
from types import MappingProxyType
from typing import Any, Literal, Mapping, Optional, Union

from vocab_srs.constants import (
    DisplayMode,
    Difficulty,
    MIN_PROGRESS,
    MAX_PROGRESS,
    PROGRESS_INCREASE,
    PROGRESS_DECREASE,
    RESET_SUCCESSFUL_REVIEWS_THRESHOLD,
    INCORRECT_ANSWER_DELAY_MS,
)
from vocab_srs.exceptions import ConfigurationError, UnknownModeError


AlternateCondition = Literal["even", "odd"]
ModeKey = Union[DisplayMode, str]


# ---- Display Modes ----

@dataclass(frozen=True)
class DisplayModeConfig:
    """
    Behaviour of a single display mode.

    The progress range is inclusive on both ends. When alternates_with is set,
    the mode hands over to alternates_with[0] on reviews whose review_count
    parity matches alternate_condition.
    """
    name: str
    label: str
    description: str
    min_progress: int
    max_progress: int

    show_translation_automatically: bool = False
    translation_delay_ms: int = 0
    card_return_delay_ms: int = 0
    show_input_field: bool = False
    show_action_buttons: bool = True
    require_input_for_buttons: bool = False
    show_translation_on_tap: bool = False
    show_word_on_tap: bool = False
    next_card_on_enter: bool = False
    next_card_on_tap: bool = False
    enter_presses_to_next: int = 0

    alternates_with: tuple[str, ...] = ()
    alternate_condition: Optional[AlternateCondition] = None

    def __post_init__(self):
        if self.min_progress > self.max_progress:
            raise ConfigurationError(
                f"Mode {self.name}: min_progress {self.min_progress} > max_progress {self.max_progress}"
            )
        if self.alternate_condition not in (None, "even", "odd"):
            raise ConfigurationError(
                f"Mode {self.name}: alternate_condition must be 'even' or 'odd'"
            )

    def contains(self, progress: int) -> bool:
        return self.min_progress <= progress <= self.max_progress


# ---- Review Intervals ----

@dataclass(frozen=True)
class IntervalSpec:
    """One entry of the interval table. Exactly one unit is set."""
    minutes: Optional[int] = None
    hours: Optional[int] = None
    days: Optional[int] = None

    def __post_init__(self):
        units = [v for v in (self.minutes, self.hours, self.days) if v is not None]
        if len(units) != 1:
            raise ConfigurationError("IntervalSpec needs exactly one of minutes, hours, days")
        if units[0] <= 0:
            raise ConfigurationError("IntervalSpec value must be positive")

    def to_timedelta(self) -> timedelta:
        if self.minutes is not None:
            return timedelta(minutes=self.minutes)
        if self.hours is not None:
            return timedelta(hours=self.hours)
        return timedelta(days=self.days)

    def __str__(self):
        if self.minutes is not None:
            return f"{self.minutes}m"
        if self.hours is not None:
            return f"{self.hours}h"
        return f"{self.days}d"


FALLBACK_INTERVAL = IntervalSpec(minutes=1)

DEFAULT_REVIEW_INTERVALS: tuple[IntervalSpec, ...] = (
    IntervalSpec(minutes=1),    # 1st successful answer
    IntervalSpec(minutes=10),   # 2nd
    IntervalSpec(minutes=30),   # 3rd
    IntervalSpec(hours=24),     # 4th
    IntervalSpec(days=7),       # 5th
    IntervalSpec(days=24),      # 6th and beyond
)


@dataclass(frozen=True)
class SpacedRepetitionSettings:
    """Reward/penalty constants and the interval table."""
    progress_increase: int = PROGRESS_INCREASE
    progress_decrease: int = PROGRESS_DECREASE
    reset_successful_reviews_threshold: int = RESET_SUCCESSFUL_REVIEWS_THRESHOLD
    incorrect_answer_delay_ms: int = INCORRECT_ANSWER_DELAY_MS
    review_intervals: tuple[IntervalSpec, ...] = DEFAULT_REVIEW_INTERVALS

    def __post_init__(self):
        if self.progress_increase < 0 or self.progress_decrease < 0:
            raise ConfigurationError("Progress deltas must be non-negative")
        if self.incorrect_answer_delay_ms < 0:
            raise ConfigurationError("incorrect_answer_delay_ms must be non-negative")
        if not self.review_intervals:
            raise ConfigurationError("review_intervals must not be empty")

    @property
    def incorrect_answer_delay(self) -> timedelta:
        return timedelta(milliseconds=self.incorrect_answer_delay_ms)


# ---- Default Mode Table ----

DEFAULT_MODES: tuple[DisplayModeConfig, ...] = (
    DisplayModeConfig(
        name=DisplayMode.DEMONSTRATION.value,
        label="Demonstration",
        description="Translation is revealed automatically after 1.5 seconds",
        min_progress=0,
        max_progress=19,
        show_translation_automatically=True,
        translation_delay_ms=1500,
        card_return_delay_ms=2000,
        show_action_buttons=True,
    ),
    DisplayModeConfig(
        name=DisplayMode.WORD.value,
        label="Word",
        description="Word is shown, translation on tap",
        min_progress=20,
        max_progress=29,
        card_return_delay_ms=1500,
        show_action_buttons=True,
        show_translation_on_tap=True,
    ),
    DisplayModeConfig(
        name=DisplayMode.TRANSLATION.value,
        label="Translation",
        description="Translation is shown, word on tap",
        min_progress=30,
        max_progress=49,
        show_translation_automatically=True,
        card_return_delay_ms=1500,
        show_action_buttons=True,
        show_word_on_tap=True,
        alternates_with=(DisplayMode.WORD.value,),
        alternate_condition="even",
    ),
    DisplayModeConfig(
        name=DisplayMode.TRANSLATION_TO_WORD.value,
        label="Translation to word",
        description="Learner types the translation, answer revealed on tap",
        min_progress=50,
        max_progress=69,
        card_return_delay_ms=2000,
        show_input_field=True,
        show_action_buttons=True,
        require_input_for_buttons=True,
        show_translation_on_tap=True,
        next_card_on_enter=True,
        next_card_on_tap=True,
        enter_presses_to_next=2,  # First press reveals the answer, second advances
        alternates_with=(DisplayMode.TRANSLATION.value,),
        alternate_condition="even",
    ),
    DisplayModeConfig(
        name=DisplayMode.LISTENING_1.value,
        label="Listening 1",
        description="Word is spoken, picture, word and translation revealed on tap",
        min_progress=70,
        max_progress=84,
        card_return_delay_ms=0,
        show_action_buttons=False,
        next_card_on_tap=True,
        alternates_with=(DisplayMode.LISTENING_2.value,),
        alternate_condition="even",
    ),
    DisplayModeConfig(
        name=DisplayMode.LISTENING_2.value,
        label="Listening 2",
        description="Word is spoken, learner types what they heard",
        min_progress=85,
        max_progress=100,
        card_return_delay_ms=2000,
        show_input_field=True,
        show_action_buttons=False,
        next_card_on_enter=True,
        next_card_on_tap=True,
        enter_presses_to_next=2,
        alternates_with=(DisplayMode.LISTENING_1.value,),
        alternate_condition="odd",
    ),
)


# ---- Difficulty Overlays ----
# Partial DisplayModeConfig overrides applied on top of any base mode.

_DIFFICULTY_OVERLAYS = {
    Difficulty.BEGINNER: {
        "translation_delay_ms": 2000,
        "card_return_delay_ms": 3000,
        "show_action_buttons": True,
        "require_input_for_buttons": False,
    },
    Difficulty.INTERMEDIATE: {
        "translation_delay_ms": 1500,
        "card_return_delay_ms": 2000,
        "show_action_buttons": True,
        "require_input_for_buttons": True,
    },
    Difficulty.ADVANCED: {
        "translation_delay_ms": 1000,
        "card_return_delay_ms": 1000,
        "show_action_buttons": True,
        "require_input_for_buttons": True,
        "next_card_on_enter": True,
        "enter_presses_to_next": 1,
    },
}

DEFAULT_DIFFICULTY_OVERLAYS: Mapping[Difficulty, Mapping[str, Any]] = MappingProxyType({
    tier: MappingProxyType(dict(overlay)) for tier, overlay in _DIFFICULTY_OVERLAYS.items()
})


# ---- Settings Container ----

@dataclass(frozen=True)
class CardDisplaySettings:
    """
    Complete policy configuration: mode table, spaced repetition constants
    and difficulty overlays. Mode order matters; selection scans in order.
    """
    modes: Mapping[str, DisplayModeConfig]
    spaced_repetition: SpacedRepetitionSettings = field(default_factory=SpacedRepetitionSettings)
    difficulty: Mapping[Difficulty, Mapping[str, Any]] = field(
        default_factory=lambda: DEFAULT_DIFFICULTY_OVERLAYS
    )

    def __post_init__(self):
        if not isinstance(self.modes, MappingProxyType):
            object.__setattr__(self, "modes", MappingProxyType(dict(self.modes)))
        object.__setattr__(self, "difficulty", _freeze_overlays(self.difficulty))

        known = {m.value for m in DisplayMode}
        for name in self.modes:
            if name not in known:
                raise ConfigurationError(
                    f"Mode {name} is not a DisplayMode (expected one of {sorted(known)})"
                )
        for name, overlay in self.difficulty.items():
            _check_overlay_keys(overlay, f"difficulty {name.value}")
        for name, mode in self.modes.items():
            for target in mode.alternates_with:
                if target not in self.modes:
                    raise ConfigurationError(
                        f"Mode {name} alternates with unknown mode {target}"
                    )

    @classmethod
    def from_modes(cls, modes, **kwargs) -> "CardDisplaySettings":
        """Build settings from an ordered iterable of DisplayModeConfig."""
        table = MappingProxyType({m.name: m for m in modes})
        return cls(modes=table, **kwargs)

    @property
    def terminal_mode(self) -> DisplayModeConfig:
        """Mode with the highest max_progress; used when no band matches."""
        return max(self.modes.values(), key=lambda m: m.max_progress)


_MODE_FIELDS = frozenset(f.name for f in fields(DisplayModeConfig))
_OVERLAY_FORBIDDEN = frozenset({"name", "min_progress", "max_progress"})


def _check_overlay_keys(overlay: Mapping[str, Any], context: str) -> None:
    unknown = set(overlay) - _MODE_FIELDS
    if unknown:
        raise ConfigurationError(f"Unknown fields in {context}: {sorted(unknown)}")
    forbidden = set(overlay) & _OVERLAY_FORBIDDEN
    if forbidden:
        raise ConfigurationError(f"{context} may not override {sorted(forbidden)}")


def _freeze_overlays(
    overlays: Mapping[Any, Mapping[str, Any]]
) -> Mapping[Difficulty, Mapping[str, Any]]:
    """Read-only copy of overlays keyed by Difficulty (already frozen input is reused)."""
    if isinstance(overlays, MappingProxyType) and all(
        isinstance(o, MappingProxyType) for o in overlays.values()
    ):
        return overlays
    frozen = {}
    for tier, overlay in overlays.items():
        try:
            key = Difficulty(tier)
        except ValueError:
            raise ConfigurationError(f"Unknown difficulty: {tier}") from None
        frozen[key] = MappingProxyType(dict(overlay))
    return MappingProxyType(frozen)


def _mode_name(mode: ModeKey) -> str:
    return mode.value if isinstance(mode, DisplayMode) else str(mode)


DEFAULT_SETTINGS = CardDisplaySettings.from_modes(DEFAULT_MODES)


# ---- Accessors ----

def get_mode_config(
    mode: ModeKey,
    settings: CardDisplaySettings = DEFAULT_SETTINGS
) -> DisplayModeConfig:
    """
    Look up a mode definition.

    Raises:
        UnknownModeError: mode is not in the table (config/engine mismatch)
    """
    name = _mode_name(mode)
    try:
        return settings.modes[name]
    except KeyError:
        raise UnknownModeError(f"Unknown display mode: {name}") from None


def apply_overlay(base: DisplayModeConfig, overlay: Mapping[str, Any]) -> DisplayModeConfig:
    """Return base with the overlay's fields replaced."""
    _check_overlay_keys(overlay, f"overlay for {base.name}")
    return replace(base, **overlay)


def get_mode_config_with_difficulty(
    mode: ModeKey,
    difficulty: Union[Difficulty, str] = Difficulty.INTERMEDIATE,
    settings: CardDisplaySettings = DEFAULT_SETTINGS
) -> DisplayModeConfig:
    """
    Look up a mode definition with a difficulty overlay applied.

    Args:
        mode: Display mode name
        difficulty: Difficulty tier (beginner, intermediate, advanced)
        settings: Configuration to read from

    Returns:
        New DisplayModeConfig; the base table is not modified
    """
    base = get_mode_config(mode, settings)
    try:
        tier = Difficulty(difficulty)
    except ValueError:
        raise ConfigurationError(f"Unknown difficulty: {difficulty}") from None
    overlay = settings.difficulty.get(tier, {})
    return apply_overlay(base, overlay)


def get_all_modes(settings: CardDisplaySettings = DEFAULT_SETTINGS) -> Mapping[str, DisplayModeConfig]:
    return settings.modes


def get_review_intervals(settings: CardDisplaySettings = DEFAULT_SETTINGS) -> tuple[IntervalSpec, ...]:
    return settings.spaced_repetition.review_intervals


def get_next_review_interval(
    successful_reviews: int,
    settings: CardDisplaySettings = DEFAULT_SETTINGS
) -> IntervalSpec:
    """
    Interval to wait after a correct answer.

    successful_reviews is 1-based (the count after the answer was counted).
    Counts past the end of the table reuse the last entry; counts <= 0 get
    FALLBACK_INTERVAL.
    """
    intervals = settings.spaced_repetition.review_intervals
    index = min(successful_reviews - 1, len(intervals) - 1)
    if index < 0:
        return FALLBACK_INTERVAL
    return intervals[index]


def validate_mode_bands(
    modes: Mapping[str, DisplayModeConfig],
    low: int = MIN_PROGRESS,
    high: int = MAX_PROGRESS
) -> None:
    """
    Check that every integer progress in [low, high] maps to exactly one mode.

    Raises:
        ConfigurationError: on a gap or an overlap
    """
    for progress in range(low, high + 1):
        matches = [m.name for m in modes.values() if m.contains(progress)]
        if not matches:
            raise ConfigurationError(f"No display mode covers progress {progress}")
        if len(matches) > 1:
            raise ConfigurationError(
                f"Display modes overlap at progress {progress}: {', '.join(matches)}"
            )


def with_spaced_repetition(
    settings: CardDisplaySettings = DEFAULT_SETTINGS,
    **overrides
) -> CardDisplaySettings:
    """Copy settings with some SpacedRepetitionSettings fields replaced."""
    return replace(settings, spaced_repetition=replace(settings.spaced_repetition, **overrides))


def with_modes(
    settings: CardDisplaySettings,
    modes,
    validate: bool = True
) -> CardDisplaySettings:
    """Copy settings with a new ordered mode table."""
    table = MappingProxyType({m.name: m for m in modes})
    if validate:
        validate_mode_bands(table)
    return replace(settings, modes=table)
