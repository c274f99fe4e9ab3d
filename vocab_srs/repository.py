"""
Card repository boundary.

The engine never talks to storage. Applications hand it cards from a
repository and give the updated cards back. CardRepository is the narrow
interface the review session depends on; InMemoryCardRepository is the
reference implementation used by tests and simulations.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Protocol, runtime_checkable

from vocab_srs.exceptions import CardNotFoundError, DuplicateCardError
from vocab_srs.queue.lessons import check_for_duplicates
from vocab_srs.schemas import Card, CardLike, ensure_card

logger = logging.getLogger(__name__)


@runtime_checkable
class CardRepository(Protocol):
    """Storage collaborator for cards."""

    def list_cards(self) -> list[Card]:
        ...

    def get(self, card_id: str) -> Card:
        ...

    def add(self, card: CardLike) -> Card:
        ...

    def save(self, card: Card) -> Card:
        ...

    def delete(self, card_id: str) -> None:
        ...


class InMemoryCardRepository:
    """
    Dict-backed repository preserving insertion order.

    Cards are immutable, so they are stored and returned as-is.
    """

    def __init__(self, cards: Optional[Iterable[CardLike]] = None):
        self._cards: dict[str, Card] = {}
        for card in cards or ():
            validated = ensure_card(card)
            self._cards[validated.id] = validated

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._cards

    def list_cards(self) -> list[Card]:
        return list(self._cards.values())

    def get(self, card_id: str) -> Card:
        try:
            return self._cards[card_id]
        except KeyError:
            raise CardNotFoundError(f"No card with id {card_id!r}") from None

    def add(self, card: CardLike) -> Card:
        """
        Insert a new card.

        Raises:
            DuplicateCardError: id already present, or the same term or
                translation exists in the card's language pair
        """
        card = ensure_card(card)
        if card.id in self._cards:
            raise DuplicateCardError(f"Card id {card.id!r} already exists", self._cards[card.id])

        existing = check_for_duplicates(
            self._cards.values(), card.term, card.translation, card.language_pair_id
        )
        if existing is not None:
            logger.warning(
                "Rejected duplicate card %r / %r (matches %s)",
                card.term, card.translation, existing.id,
            )
            raise DuplicateCardError(
                f"Card {card.term!r} - {card.translation!r} duplicates {existing.id!r}",
                existing,
            )

        self._cards[card.id] = card
        return card

    def save(self, card: Card) -> Card:
        """Replace a stored card with its updated version."""
        card = ensure_card(card)
        if card.id not in self._cards:
            raise CardNotFoundError(f"No card with id {card.id!r}")
        self._cards[card.id] = card
        return card

    def delete(self, card_id: str) -> None:
        if self._cards.pop(card_id, None) is None:
            raise CardNotFoundError(f"No card with id {card_id!r}")
