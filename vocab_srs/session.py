"""
Review session controller.

Wires the components together for one sitting:
1. Pick the next card (lesson order first, then the due queue)
2. Choose its display mode and review direction
3. Accept the learner's answer, run the scheduler, persist the card
4. Buffer a review event and update session statistics
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from vocab_srs.clock import Clock, resolve_now
from vocab_srs.config import CardDisplaySettings, DisplayModeConfig, DEFAULT_SETTINGS
from vocab_srs.constants import Difficulty, DisplayMode, ReviewDirection
from vocab_srs.direction import RandomSource, select_direction
from vocab_srs.display_modes import describe_mode, get_supportive_mode
from vocab_srs.exceptions import SessionStateError
from vocab_srs.queue.lessons import get_next_card_to_show
from vocab_srs.repository import CardRepository
from vocab_srs.scheduler import build_review_event, process_review
from vocab_srs.schemas import Card, ReviewResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionItem:
    """
    A single study step: the card and how to present it.
    """
    card: Card
    mode: DisplayMode
    mode_config: DisplayModeConfig
    direction: ReviewDirection
    supportive_mode: DisplayMode
    position: int
    shown_at: datetime


@dataclass
class SessionStats:
    cards_reviewed: int = 0
    correct_answers: int = 0
    time_spent_ms: int = 0
    new_cards: int = 0
    review_cards: int = 0

    @property
    def accuracy(self) -> float:
        if self.cards_reviewed == 0:
            return 0.0
        return self.correct_answers / self.cards_reviewed


class ReviewSession:
    """
    One review sitting over a card repository.

    Args:
        repository: Where cards are read from and saved to
        clock: Time source (defaults to system UTC clock)
        rng: Random source for direction selection
        settings: Policy configuration
        lesson_id: Walk this lesson's unseen cards first
        difficulty: Overlay applied to mode configs handed to the UI
        limit: Stop offering cards after this many reviews
    """

    def __init__(
        self,
        repository: CardRepository,
        clock: Optional[Clock] = None,
        rng: Optional[RandomSource] = None,
        settings: CardDisplaySettings = DEFAULT_SETTINGS,
        lesson_id: Optional[str] = None,
        difficulty: Optional[Union[Difficulty, str]] = None,
        limit: Optional[int] = None
    ):
        self.repository = repository
        self.clock = clock
        self.rng = rng
        self.settings = settings
        self.lesson_id = lesson_id
        self.difficulty = difficulty
        self.limit = limit

        self.session_id = str(uuid.uuid4())
        self.stats = SessionStats()
        self.current: Optional[SessionItem] = None
        self._position = 0
        self._events: list[dict] = []

        logger.info("Started review session %s (lesson=%s)", self.session_id, lesson_id)

    @property
    def is_finished(self) -> bool:
        return self.limit is not None and self.stats.cards_reviewed >= self.limit

    def next_item(self) -> Optional[SessionItem]:
        """
        Load the next card, or None when nothing is due (or the limit is hit).
        """
        if self.is_finished:
            self.current = None
            return None

        card = get_next_card_to_show(self.repository.list_cards(), self.lesson_id, self.clock)
        if card is None:
            self.current = None
            return None

        selection = describe_mode(
            card.progress, card.review_count, self.difficulty, self.settings
        )
        self.current = SessionItem(
            card=card,
            mode=selection.mode,
            mode_config=selection.config,
            direction=select_direction(card.progress, self.rng),
            supportive_mode=get_supportive_mode(card.progress),
            position=self._position,
            shown_at=resolve_now(self.clock),
        )
        return self.current

    def submit(self, correct: bool, time_spent_ms: Optional[int] = None) -> Card:
        """
        Record the answer for the current item.

        Args:
            correct: Whether the learner answered correctly
            time_spent_ms: Time on the card; measured from shown_at when omitted

        Returns:
            The updated, persisted card

        Raises:
            SessionStateError: no item is currently loaded
        """
        item = self.current
        if item is None:
            raise SessionStateError("No card loaded; call next_item() first")

        now = resolve_now(self.clock)
        if time_spent_ms is None:
            elapsed = now - item.shown_at
            time_spent_ms = max(0, int(elapsed.total_seconds() * 1000))

        result = ReviewResult(correct=correct, time_spent_ms=time_spent_ms)
        updated = process_review(item.card, result, clock=lambda: now, settings=self.settings)
        self.repository.save(updated)

        self._events.append(build_review_event(
            before=item.card,
            after=updated,
            result=result,
            now=now,
            presentation_mode=item.mode.value,
            direction=item.direction.value,
            session_id=self.session_id,
            session_position=item.position,
        ))

        self.stats.cards_reviewed += 1
        self.stats.time_spent_ms += time_spent_ms
        if correct:
            self.stats.correct_answers += 1
        if item.card.review_count == 0:
            self.stats.new_cards += 1
        else:
            self.stats.review_cards += 1

        self._position += 1
        self.current = None
        return updated

    def flush_events(self) -> list[dict]:
        """Return buffered review events and clear the buffer."""
        events, self._events = self._events, []
        return events

    def end(self) -> SessionStats:
        """Finish the session and return its statistics."""
        self.current = None
        logger.info(
            "Finished review session %s: %d reviewed, %d correct, %d new",
            self.session_id,
            self.stats.cards_reviewed,
            self.stats.correct_answers,
            self.stats.new_cards,
        )
        return self.stats
