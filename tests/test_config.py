"""
Configuration store: default tables, lookups, overlays, validation.
"""

from dataclasses import replace
from datetime import timedelta

import pytest

from vocab_srs import (
    ConfigurationError,
    DEFAULT_SETTINGS,
    Difficulty,
    DisplayMode,
    DisplayModeConfig,
    IntervalSpec,
    UnknownModeError,
    get_all_modes,
    get_mode_config,
    get_mode_config_with_difficulty,
    get_next_review_interval,
    validate_mode_bands,
    with_modes,
    with_spaced_repetition,
)
from vocab_srs.config import apply_overlay


def test_default_spaced_repetition_constants():
    sr = DEFAULT_SETTINGS.spaced_repetition
    assert sr.progress_increase == 10
    assert sr.progress_decrease == 20
    assert sr.reset_successful_reviews_threshold == 20
    assert sr.incorrect_answer_delay_ms == 60_000
    assert sr.incorrect_answer_delay == timedelta(minutes=1)


def test_default_interval_table():
    table = [interval.to_timedelta() for interval in DEFAULT_SETTINGS.spaced_repetition.review_intervals]
    assert table == [
        timedelta(minutes=1),
        timedelta(minutes=10),
        timedelta(minutes=30),
        timedelta(hours=24),
        timedelta(days=7),
        timedelta(days=24),
    ]


def test_default_bands_cover_range_exactly():
    validate_mode_bands(get_all_modes())
    assert list(get_all_modes()) == [m.value for m in DisplayMode]


@pytest.mark.parametrize("successes,expected", [
    (1, IntervalSpec(minutes=1)),
    (3, IntervalSpec(minutes=30)),
    (6, IntervalSpec(days=24)),
    (40, IntervalSpec(days=24)),
    (0, IntervalSpec(minutes=1)),
    (-2, IntervalSpec(minutes=1)),
])
def test_next_review_interval_lookup(successes, expected):
    assert get_next_review_interval(successes) == expected


def test_get_mode_config_accepts_enum_and_name():
    assert get_mode_config(DisplayMode.WORD) is get_mode_config("WORD")
    assert get_mode_config("TRANSLATION").alternates_with == ("WORD",)


def test_unknown_mode_raises():
    with pytest.raises(UnknownModeError):
        get_mode_config("KARAOKE")


def test_difficulty_overlay_merges_over_base():
    base = get_mode_config(DisplayMode.DEMONSTRATION)
    beginner = get_mode_config_with_difficulty(DisplayMode.DEMONSTRATION, Difficulty.BEGINNER)

    assert beginner.translation_delay_ms == 2000
    assert beginner.card_return_delay_ms == 3000
    assert beginner.show_translation_automatically == base.show_translation_automatically
    # Base table untouched
    assert base.translation_delay_ms == 1500


def test_difficulty_accepts_string():
    advanced = get_mode_config_with_difficulty("LISTENING_2", "advanced")
    assert advanced.enter_presses_to_next == 1


def test_unknown_difficulty_rejected():
    with pytest.raises(ConfigurationError):
        get_mode_config_with_difficulty("WORD", "expert")


def test_overlay_rejects_unknown_and_band_fields():
    base = get_mode_config("WORD")
    with pytest.raises(ConfigurationError):
        apply_overlay(base, {"blink_rate": 3})
    with pytest.raises(ConfigurationError):
        apply_overlay(base, {"min_progress": 0})


def test_band_gap_detected():
    modes = [
        DisplayModeConfig(name="DEMONSTRATION", label="Demo", description="", min_progress=0, max_progress=40),
        DisplayModeConfig(name="WORD", label="Word", description="", min_progress=42, max_progress=100),
    ]
    with pytest.raises(ConfigurationError, match="41"):
        with_modes(DEFAULT_SETTINGS, modes)


def test_band_overlap_detected():
    modes = [
        DisplayModeConfig(name="DEMONSTRATION", label="Demo", description="", min_progress=0, max_progress=50),
        DisplayModeConfig(name="WORD", label="Word", description="", min_progress=50, max_progress=100),
    ]
    with pytest.raises(ConfigurationError, match="overlap"):
        with_modes(DEFAULT_SETTINGS, modes)


def test_alternate_target_must_exist():
    modes = [
        DisplayModeConfig(
            name="DEMONSTRATION", label="Demo", description="", min_progress=0, max_progress=100,
            alternates_with=("WORD",), alternate_condition="even",
        ),
    ]
    with pytest.raises(ConfigurationError, match="unknown mode WORD"):
        with_modes(DEFAULT_SETTINGS, modes)


@pytest.mark.parametrize("kwargs", [
    {},
    {"minutes": 1, "hours": 1},
    {"days": 0},
])
def test_interval_spec_requires_exactly_one_positive_unit(kwargs):
    with pytest.raises(ConfigurationError):
        IntervalSpec(**kwargs)


def test_with_spaced_repetition_copies():
    custom = with_spaced_repetition(progress_increase=25)

    assert custom.spaced_repetition.progress_increase == 25
    assert DEFAULT_SETTINGS.spaced_repetition.progress_increase == 10
    assert custom.modes is DEFAULT_SETTINGS.modes


def test_mode_table_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_SETTINGS.modes["WORD"] = None


def test_difficulty_overlays_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_SETTINGS.difficulty[Difficulty.ADVANCED]["enter_presses_to_next"] = 9
    with pytest.raises(TypeError):
        DEFAULT_SETTINGS.difficulty[Difficulty.BEGINNER] = {}

    assert get_mode_config_with_difficulty("WORD", "advanced").enter_presses_to_next == 1


def test_caller_overlays_are_copied_and_frozen():
    overlays = {"beginner": {"translation_delay_ms": 4000}}
    settings = replace(DEFAULT_SETTINGS, difficulty=overlays)

    overlays["beginner"]["translation_delay_ms"] = 1

    assert get_mode_config_with_difficulty("WORD", Difficulty.BEGINNER, settings).translation_delay_ms == 4000
    with pytest.raises(TypeError):
        settings.difficulty[Difficulty.BEGINNER]["translation_delay_ms"] = 1


def test_caller_overlay_with_bad_keys_rejected():
    with pytest.raises(ConfigurationError):
        replace(DEFAULT_SETTINGS, difficulty={"beginner": {"blink_rate": 3}})
    with pytest.raises(ConfigurationError):
        replace(DEFAULT_SETTINGS, difficulty={"expert": {}})


def test_mode_names_outside_display_mode_rejected():
    modes = [
        DisplayModeConfig(name="EASY", label="Easy", description="", min_progress=0, max_progress=100),
    ]
    with pytest.raises(ConfigurationError, match="EASY"):
        with_modes(DEFAULT_SETTINGS, modes)
