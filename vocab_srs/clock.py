"""
Clock helpers.

Every engine entry point takes an optional zero-argument callable returning
the current (timezone-aware) instant. None means the system UTC clock.
"""

from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def resolve_now(clock: Optional[Clock] = None) -> datetime:
    """Read the current instant from clock, or the system clock."""
    return (clock or utc_now)()


class FrozenClock:
    """
    Clock that stays at a fixed instant until moved.

    Useful for tests and simulations:

        clock = FrozenClock(start)
        card = process_review(card, result, clock=clock)
        clock.advance(minutes=1)
    """

    def __init__(self, now: datetime):
        if now.tzinfo is None:
            raise ValueError("FrozenClock requires a timezone-aware datetime")
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        """Move forward by a timedelta built from kwargs (minutes=, hours=, days=)."""
        self.now = self.now + timedelta(**kwargs)
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now
