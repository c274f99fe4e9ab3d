"""
Display Mode Selector

Maps (progress, review_count) to the mode a card is presented in.

Scan the mode table in order and take the first mode whose inclusive
progress range contains progress. If that mode alternates and the parity
of review_count matches its condition, hand over to its first alternate.
If no range matches, use the terminal (highest-progress) mode.

Default bands:
    0-19    DEMONSTRATION
    20-29   WORD
    30-49   TRANSLATION          (WORD on even review_count)
    50-69   TRANSLATION_TO_WORD  (TRANSLATION on even review_count)
    70-84   LISTENING_1          (LISTENING_2 on even review_count)
    85-100  LISTENING_2          (LISTENING_1 on odd review_count)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

from vocab_srs.config import (
    CardDisplaySettings,
    DisplayModeConfig,
    DEFAULT_SETTINGS,
    get_mode_config,
    get_mode_config_with_difficulty,
)
from vocab_srs.constants import DisplayMode, Difficulty, SUPPORTIVE_MODE_PROGRESS


def _should_alternate(mode: DisplayModeConfig, review_count: int) -> bool:
    if not mode.alternates_with or mode.alternate_condition is None:
        return False
    if mode.alternate_condition == "even":
        return review_count % 2 == 0
    return review_count % 2 == 1


def select_mode_name(
    progress: int,
    review_count: int = 0,
    settings: CardDisplaySettings = DEFAULT_SETTINGS
) -> str:
    """
    Same as select_display_mode, but returns the raw table key.
    """
    for mode in settings.modes.values():
        if mode.contains(progress):
            if _should_alternate(mode, review_count):
                return mode.alternates_with[0]
            return mode.name

    return settings.terminal_mode.name


def select_display_mode(
    progress: int,
    review_count: int = 0,
    settings: CardDisplaySettings = DEFAULT_SETTINGS
) -> DisplayMode:
    """
    Select the presentation mode for a card.

    Args:
        progress: Card progress (0-100)
        review_count: Total reviews so far (drives alternation parity)
        settings: Mode table to scan

    Returns:
        DisplayMode
    """
    return DisplayMode(select_mode_name(progress, review_count, settings))


def get_supportive_mode(progress: int) -> DisplayMode:
    """
    Gentler mode used right after a mistake.

    Cards below SUPPORTIVE_MODE_PROGRESS go back to DEMONSTRATION, the rest
    to WORD.
    """
    if progress < SUPPORTIVE_MODE_PROGRESS:
        return DisplayMode.DEMONSTRATION
    return DisplayMode.WORD


@dataclass(frozen=True)
class ModeSelection:
    """Selected mode together with the behaviour the UI should apply."""
    mode: DisplayMode
    config: DisplayModeConfig


def describe_mode(
    progress: int,
    review_count: int = 0,
    difficulty: Optional[Union[Difficulty, str]] = None,
    settings: CardDisplaySettings = DEFAULT_SETTINGS
) -> ModeSelection:
    """
    Select a mode and resolve its configuration.

    When difficulty is given, the tier's overlay is applied on top of the
    base mode definition.
    """
    mode = select_display_mode(progress, review_count, settings)
    if difficulty is None:
        config = get_mode_config(mode, settings)
    else:
        config = get_mode_config_with_difficulty(mode, difficulty, settings)
    return ModeSelection(mode=mode, config=config)
