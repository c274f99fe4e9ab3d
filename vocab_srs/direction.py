"""
Review Direction Selector

Decides whether a card is shown known->learning or learning->known.
The reverse direction is mixed in more often as mastery grows:

    progress >= 80      50% LEARNING_TO_KNOWN
    60 <= progress < 80 30% LEARNING_TO_KNOWN
    progress < 60       always KNOWN_TO_LEARNING

Randomness comes from an injectable source so tests can fix it.
"""

from __future__ import annotations
import random
from typing import Callable, Optional

from vocab_srs.constants import ReviewDirection, DIRECTION_MIX


RandomSource = Callable[[], float]


def reverse_probability(progress: int) -> float:
    """Probability of LEARNING_TO_KNOWN at this progress."""
    for min_progress, probability in DIRECTION_MIX:
        if progress >= min_progress:
            return probability
    return 0.0


def select_direction(progress: int, rng: Optional[RandomSource] = None) -> ReviewDirection:
    """
    Draw a review direction for a card.

    Args:
        progress: Card progress (0-100)
        rng: Zero-argument callable returning a float in [0, 1),
             e.g. random.Random(seed).random (defaults to random.random)

    Returns:
        ReviewDirection
    """
    probability = reverse_probability(progress)
    if probability <= 0.0:
        return ReviewDirection.KNOWN_TO_LEARNING

    draw = (rng or random.random)()
    if draw < probability:
        return ReviewDirection.LEARNING_TO_KNOWN
    return ReviewDirection.KNOWN_TO_LEARNING
