"""
Pydantic models for cards and review outcomes.

Cards are immutable; the engine returns new instances built with
model_copy. Field names are snake_case, and the camelCase names used by the
card repository rows (dueAt, reviewCount, ...) are accepted as aliases.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Union

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from vocab_srs.clock import Clock, resolve_now
from vocab_srs.constants import (
    LifecycleState,
    ReviewDirection,
    MIN_PROGRESS,
    MAX_PROGRESS,
    DEFAULT_EASE_FACTOR,
    DEFAULT_INTERVAL_DAYS,
)
from vocab_srs.exceptions import InvalidCardError
from vocab_srs.lifecycle import derive_state


_MODEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
    extra="ignore",
)


class Card(BaseModel):
    """
    A vocabulary card and its scheduling state.

    term and translation belong to the content layer; the scheduler only
    reads them for duplicate checks.
    """
    model_config = _MODEL_CONFIG

    id: str = Field(..., min_length=1)
    term: str
    translation: str
    language_pair_id: Optional[str] = None

    # Scheduling state
    progress: int = Field(0, ge=MIN_PROGRESS, le=MAX_PROGRESS)
    due_at: AwareDatetime
    review_count: int = Field(0, ge=0)
    successful_reviews: int = Field(0, ge=0)
    direction: ReviewDirection = ReviewDirection.KNOWN_TO_LEARNING

    # Legacy fields, passed through untouched
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval_days: int = DEFAULT_INTERVAL_DAYS

    # Bookkeeping
    last_reviewed_at: Optional[AwareDatetime] = None
    created_at: AwareDatetime
    updated_at: AwareDatetime

    # Lesson provenance
    lesson_id: Optional[str] = None
    lesson_order: Optional[int] = Field(None, ge=1)

    def lifecycle_state(self, now: datetime) -> LifecycleState:
        """Derived lifecycle state at instant now."""
        return derive_state(self.progress, self.due_at, now)

    def is_due(self, now: datetime) -> bool:
        return self.due_at <= now


class ReviewResult(BaseModel):
    """Outcome of a single review."""
    model_config = _MODEL_CONFIG

    correct: bool
    time_spent_ms: int = Field(0, ge=0, alias="timeSpent")


CardLike = Union[Card, Mapping[str, Any]]


def ensure_card(card: CardLike) -> Card:
    """
    Validate a card at the engine boundary.

    Accepts a Card or a mapping (repository row). A Card is re-validated so
    that instances built with model_construct cannot slip corrupt state in.

    Raises:
        InvalidCardError: the card violates the data model
    """
    if card is None:
        raise InvalidCardError("Card is required")
    try:
        if isinstance(card, Card):
            return Card.model_validate(card.model_dump())
        return Card.model_validate(card)
    except ValidationError as exc:
        card_id = card.get("id") if isinstance(card, Mapping) else getattr(card, "id", None)
        raise InvalidCardError(f"Invalid card {card_id!r}: {exc}") from exc


def ensure_result(result: Union[ReviewResult, Mapping[str, Any]]) -> ReviewResult:
    """Validate a review outcome; mappings may use timeSpent or time_spent_ms."""
    if isinstance(result, ReviewResult):
        return result
    try:
        return ReviewResult.model_validate(result)
    except ValidationError as exc:
        raise InvalidCardError(f"Invalid review result: {exc}") from exc


def new_card(
    card_id: str,
    term: str,
    translation: str,
    language_pair_id: Optional[str] = None,
    lesson_id: Optional[str] = None,
    lesson_order: Optional[int] = None,
    clock: Optional[Clock] = None
) -> Card:
    """
    Create a card that is immediately due.

    Args:
        card_id: Unique identifier
        term: Word in the learning language
        translation: Word in the known language
        language_pair_id: Language pair the card belongs to
        lesson_id: Lesson the card was added from (optional)
        lesson_order: 1-based position in that lesson's word list (optional)
        clock: Time source (defaults to system UTC clock)

    Returns:
        New Card with progress 0 and due_at = now
    """
    now = resolve_now(clock)
    try:
        return Card(
            id=card_id,
            term=term,
            translation=translation,
            language_pair_id=language_pair_id,
            progress=0,
            due_at=now,
            review_count=0,
            successful_reviews=0,
            created_at=now,
            updated_at=now,
            lesson_id=lesson_id,
            lesson_order=lesson_order,
        )
    except ValidationError as exc:
        raise InvalidCardError(f"Invalid card {card_id!r}: {exc}") from exc
