"""
Environment-driven settings loader.

The engine itself never reads the environment. Applications that want to
tune the policy per deployment call load_settings() once at startup and pass
the result to the engine entry points.

Recognised variables:
    SRS_PROGRESS_INCREASE   progress gained on a correct answer
    SRS_PROGRESS_DECREASE   progress lost on an incorrect answer
    SRS_RESET_THRESHOLD     progress below which a miss rolls back one success
    SRS_INCORRECT_DELAY_MS  delay before a missed card is due again
    SRS_DIFFICULTY          default difficulty tier for presentation
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from vocab_srs.config import CardDisplaySettings, DEFAULT_SETTINGS, with_spaced_repetition
from vocab_srs.constants import Difficulty
from vocab_srs.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


_INT_VARIABLES = {
    "SRS_PROGRESS_INCREASE": "progress_increase",
    "SRS_PROGRESS_DECREASE": "progress_decrease",
    "SRS_RESET_THRESHOLD": "reset_successful_reviews_threshold",
    "SRS_INCORRECT_DELAY_MS": "incorrect_answer_delay_ms",
}


def _read_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def load_settings(
    env_file: Optional[Union[str, Path]] = None,
    base: CardDisplaySettings = DEFAULT_SETTINGS
) -> CardDisplaySettings:
    """
    Build settings from base with environment overrides applied.

    Args:
        env_file: Optional .env file to load first (existing variables win)
        base: Settings to start from

    Returns:
        New CardDisplaySettings (base is returned unchanged if nothing is set)
    """
    if env_file is not None:
        if Path(env_file).exists():
            load_dotenv(env_file, override=False)
            logger.info("Loaded scheduler settings from %s", env_file)
        else:
            logger.warning(".env file not found at %s", env_file)

    overrides = {}
    for variable, field_name in _INT_VARIABLES.items():
        value = _read_int(variable)
        if value is not None:
            overrides[field_name] = value

    if not overrides:
        return base

    logger.info("Applying spaced repetition overrides: %s", overrides)
    return with_spaced_repetition(base, **overrides)


def load_default_difficulty(default: Difficulty = Difficulty.INTERMEDIATE) -> Difficulty:
    """Read SRS_DIFFICULTY, falling back to default when unset."""
    raw = os.getenv("SRS_DIFFICULTY")
    if not raw:
        return default
    try:
        return Difficulty(raw.strip().lower())
    except ValueError:
        raise ConfigurationError(
            f"SRS_DIFFICULTY must be one of {[d.value for d in Difficulty]}, got {raw!r}"
        ) from None
