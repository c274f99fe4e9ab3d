"""
Lifecycle State - derived card category

The lifecycle state is a view over (progress, due_at, now). It is never
stored, because time passing changes it without any review happening:

- Due (due_at <= now)            -> LEARN, whatever the progress
- Not due, 10 <= progress < 70   -> REVIEW (shown as "Know")
- Not due, otherwise             -> SUSPENDED (shown as "Mastered")
"""

from __future__ import annotations
from datetime import datetime

from vocab_srs.constants import (
    LifecycleState,
    REVIEW_STATE_MIN_PROGRESS,
    REVIEW_STATE_MAX_PROGRESS,
)


def derive_state(progress: int, due_at: datetime, now: datetime) -> LifecycleState:
    """
    Classify a card at instant now.

    Args:
        progress: Card progress (0-100)
        due_at: When the card is next due
        now: Current instant

    Returns:
        LifecycleState
    """
    if due_at <= now:
        return LifecycleState.LEARN
    if REVIEW_STATE_MIN_PROGRESS <= progress < REVIEW_STATE_MAX_PROGRESS:
        return LifecycleState.REVIEW
    return LifecycleState.SUSPENDED


def group_by_state(cards, now: datetime) -> dict[LifecycleState, list]:
    """Bucket cards by their current lifecycle state (all three keys present)."""
    groups: dict[LifecycleState, list] = {
        LifecycleState.LEARN: [],
        LifecycleState.REVIEW: [],
        LifecycleState.SUSPENDED: [],
    }
    for card in cards:
        groups[derive_state(card.progress, card.due_at, now)].append(card)
    return groups
