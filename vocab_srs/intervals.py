"""
Interval arithmetic for the review schedule.
"""

from __future__ import annotations
from datetime import datetime

from vocab_srs.config import (
    CardDisplaySettings,
    IntervalSpec,
    DEFAULT_SETTINGS,
    get_next_review_interval,
)


def add_interval(moment: datetime, interval: IntervalSpec) -> datetime:
    """Add one interval table entry (minutes, hours or days) to moment."""
    return moment + interval.to_timedelta()


def next_due_after_success(
    now: datetime,
    successful_reviews: int,
    settings: CardDisplaySettings = DEFAULT_SETTINGS
) -> datetime:
    """
    Due time after a correct answer.

    Args:
        now: Review instant
        successful_reviews: Success count including this answer (1-based)
        settings: Interval table source

    Returns:
        now + table[min(successful_reviews - 1, len - 1)]
    """
    return add_interval(now, get_next_review_interval(successful_reviews, settings))


def next_due_after_failure(
    now: datetime,
    settings: CardDisplaySettings = DEFAULT_SETTINGS
) -> datetime:
    """Due time after an incorrect answer: a flat delay, table ignored."""
    return now + settings.spaced_repetition.incorrect_answer_delay
