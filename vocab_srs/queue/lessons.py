"""
Lesson ordering and next-card selection.

A freshly added lesson is walked through in its word-list order before the
general due queue takes over.
"""

from __future__ import annotations
from typing import Iterable, Optional

from vocab_srs.clock import Clock
from vocab_srs.queue.due import get_due_cards
from vocab_srs.schemas import Card


def get_lesson_cards_in_order(cards: Iterable[Card], lesson_id: str) -> list[Card]:
    """
    Cards from one lesson that carry a lesson_order, sorted by it.
    """
    lesson_cards = [
        c for c in cards
        if c.lesson_id == lesson_id and c.lesson_order is not None
    ]
    lesson_cards.sort(key=lambda c: c.lesson_order)
    return lesson_cards


def get_next_card_to_show(
    cards: Iterable[Card],
    current_lesson_id: Optional[str] = None,
    clock: Optional[Clock] = None
) -> Optional[Card]:
    """
    Pick the next card for the learner.

    Priority order:
    1. If current_lesson_id is given: the first lesson card at progress 0
       in lesson order, due or not. A lesson card missed at progress 0
       therefore comes straight back, ahead of its incorrect-answer delay
    2. The earliest due card
    3. None
    """
    cards = list(cards)

    if current_lesson_id:
        for card in get_lesson_cards_in_order(cards, current_lesson_id):
            if card.progress == 0:
                return card

    due_cards = get_due_cards(cards, clock)
    return due_cards[0] if due_cards else None


def check_for_duplicates(
    cards: Iterable[Card],
    term: str,
    translation: str,
    language_pair_id: Optional[str]
) -> Optional[Card]:
    """
    First card in the same language pair whose term or translation matches
    (case-insensitive), or None.
    """
    term_key = term.casefold()
    translation_key = translation.casefold()
    for card in cards:
        if card.language_pair_id != language_pair_id:
            continue
        if card.term.casefold() == term_key or card.translation.casefold() == translation_key:
            return card
    return None
