"""Deck statistics built on pandas."""

from vocab_srs.analytics.metrics import (
    build_cards_frame,
    compute_deck_stats,
    compute_due_forecast,
    mode_progress_table,
)
from vocab_srs.analytics.types import DeckStats

__all__ = [
    "DeckStats",
    "build_cards_frame",
    "compute_deck_stats",
    "compute_due_forecast",
    "mode_progress_table",
]
