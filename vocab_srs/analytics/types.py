"""
Types for deck statistics.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DeckStats:
    """
    Snapshot of a card collection at one instant.

    learned_cards counts progress >= 50, mastered_cards progress >= 70.
    """
    total_cards: int
    learned_cards: int
    mastered_cards: int
    reviews_due: int
    by_state: dict[str, int] = field(default_factory=dict)
    by_mode: dict[str, int] = field(default_factory=dict)
    average_progress: float = 0.0
