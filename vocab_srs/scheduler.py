"""
Scheduler - Review State Machine

Pure scheduling and state updates (no storage calls).

Main workflow:
1. Caller loads the card
2. Validate the card and the review outcome
3. Apply the correct or incorrect branch
4. Return the updated card (the input is never modified)
5. Caller persists the card

Correct answer:
    progress += progress_increase (max 100)
    successful_reviews += 1
    due_at = now + interval_table[min(successful_reviews - 1, len - 1)]

Incorrect answer:
    progress -= progress_decrease (min 0)
    successful_reviews -= 1 (min 0), only when the new progress is below
        reset_successful_reviews_threshold
    due_at = now + incorrect_answer_delay

Both branches increment review_count and stamp last_reviewed_at/updated_at.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional, Union

from vocab_srs.clock import Clock, resolve_now
from vocab_srs.config import CardDisplaySettings, DEFAULT_SETTINGS
from vocab_srs.constants import MIN_PROGRESS, MAX_PROGRESS
from vocab_srs.exceptions import InvalidCardError
from vocab_srs.intervals import next_due_after_success, next_due_after_failure
from vocab_srs.lifecycle import derive_state
from vocab_srs.schemas import Card, CardLike, ReviewResult, ensure_card, ensure_result

logger = logging.getLogger(__name__)


def process_review(
    card: CardLike,
    result: Union[ReviewResult, Mapping[str, Any]],
    clock: Optional[Clock] = None,
    settings: CardDisplaySettings = DEFAULT_SETTINGS
) -> Card:
    """
    Process a review and return the updated card.

    Args:
        card: Card (or repository mapping) being reviewed
        result: Review outcome (correct flag and time spent)
        clock: Time source (defaults to system UTC clock)
        settings: Policy constants and interval table

    Returns:
        New Card with updated progress, counters, due_at and timestamps

    Raises:
        InvalidCardError: card or result violates the data model
    """
    card = ensure_card(card)
    result = ensure_result(result)
    now = resolve_now(clock)
    if now.tzinfo is None:
        raise InvalidCardError("Clock must return a timezone-aware datetime")

    if result.correct:
        updates = _apply_correct(card, now, settings)
    else:
        updates = _apply_incorrect(card, now, settings)

    updates["review_count"] = card.review_count + 1
    updates["last_reviewed_at"] = now
    updates["updated_at"] = now

    updated = card.model_copy(update=updates)

    logger.debug(
        "Card %s reviewed (%s): progress %d -> %d, successes %d -> %d, due %s, state %s",
        card.id,
        "correct" if result.correct else "incorrect",
        card.progress,
        updated.progress,
        card.successful_reviews,
        updated.successful_reviews,
        updated.due_at.isoformat(),
        derive_state(updated.progress, updated.due_at, now).value,
    )
    return updated


def _apply_correct(card: Card, now: datetime, settings: CardDisplaySettings) -> dict:
    """Field updates for a correct answer."""
    sr = settings.spaced_repetition
    successful_reviews = card.successful_reviews + 1
    return {
        "progress": min(MAX_PROGRESS, card.progress + sr.progress_increase),
        "successful_reviews": successful_reviews,
        "due_at": next_due_after_success(now, successful_reviews, settings),
    }


def _apply_incorrect(card: Card, now: datetime, settings: CardDisplaySettings) -> dict:
    """Field updates for an incorrect answer."""
    sr = settings.spaced_repetition
    progress = max(MIN_PROGRESS, card.progress - sr.progress_decrease)

    # Threshold is checked against the progress after the penalty
    if progress < sr.reset_successful_reviews_threshold:
        successful_reviews = max(0, card.successful_reviews - 1)
    else:
        successful_reviews = card.successful_reviews

    return {
        "progress": progress,
        "successful_reviews": successful_reviews,
        "due_at": next_due_after_failure(now, settings),
    }


def build_review_event(
    before: Card,
    after: Card,
    result: ReviewResult,
    now: datetime,
    presentation_mode: Optional[str] = None,
    direction: Optional[str] = None,
    session_id: Optional[str] = None,
    session_position: Optional[int] = None
) -> dict:
    """
    Build a review log entry describing one transition.

    Returns:
        Dict ready to hand to whatever stores review history
    """
    return {
        "card_id": after.id,
        "timestamp": now,
        "correct": result.correct,
        "time_spent_ms": result.time_spent_ms,
        "progress_before": before.progress,
        "progress_after": after.progress,
        "successful_reviews_before": before.successful_reviews,
        "successful_reviews_after": after.successful_reviews,
        "review_count_after": after.review_count,
        "due_at_after": after.due_at,
        "state_after": derive_state(after.progress, after.due_at, now).value,
        "presentation_mode": presentation_mode,
        "direction": direction,
        "session_id": session_id,
        "session_position": session_position,
    }
