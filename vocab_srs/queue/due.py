"""
Due-set queries over in-memory card snapshots (no storage calls).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Literal, Optional

from vocab_srs.clock import Clock, resolve_now
from vocab_srs.schemas import Card


TimeUnit = Literal["days", "hours", "minutes", "now"]

_UNIT_SUFFIX = {"days": "d", "hours": "h", "minutes": "m"}


def get_due_cards(cards: Iterable[Card], clock: Optional[Clock] = None) -> list[Card]:
    """
    Cards with due_at <= now, earliest first.
    """
    now = resolve_now(clock)
    due = [c for c in cards if c.due_at <= now]
    due.sort(key=lambda c: c.due_at)
    return due


def get_next_due_card(cards: Iterable[Card], clock: Optional[Clock] = None) -> Optional[Card]:
    """
    The not-yet-due card that becomes due soonest, or None.
    """
    now = resolve_now(clock)
    upcoming = [c for c in cards if c.due_at > now]
    if not upcoming:
        return None
    return min(upcoming, key=lambda c: c.due_at)


@dataclass(frozen=True)
class TimeUntilNext:
    """Coarse time remaining until a card is due."""
    unit: TimeUnit
    value: int

    @property
    def is_now(self) -> bool:
        return self.unit == "now"

    def __str__(self):
        if self.is_now:
            return "now"
        return f"in {self.value}{_UNIT_SUFFIX[self.unit]}"


def get_time_until_next(card: Optional[Card], clock: Optional[Clock] = None) -> Optional[TimeUntilNext]:
    """
    Bucket due_at - now into whole days, hours or minutes.

    The largest unit with a count of at least one wins. Anything under a
    minute (including overdue cards) is "now". None in gives None out.
    """
    if card is None:
        return None

    now = resolve_now(clock)
    seconds = (card.due_at - now).total_seconds()
    minutes = int(seconds // 60)
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        return TimeUntilNext("days", days)
    if hours > 0:
        return TimeUntilNext("hours", hours)
    if minutes > 0:
        return TimeUntilNext("minutes", minutes)
    return TimeUntilNext("now", 0)
