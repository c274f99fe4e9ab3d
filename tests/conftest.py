"""
Shared fixtures.

Tests never touch the system clock or global randomness: time comes from a
FrozenClock and direction draws from stub sources.
"""

from datetime import datetime, timezone

import pytest

from vocab_srs import Card, FrozenClock


T0 = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# Clock Fixtures
# ============================================================================

@pytest.fixture
def t0():
    return T0


@pytest.fixture
def clock():
    """Clock frozen at T0."""
    return FrozenClock(T0)


# ============================================================================
# Card Fixtures
# ============================================================================

def build_card(**overrides) -> Card:
    """Card due at T0 with sensible defaults; any field can be overridden."""
    data = {
        "id": "card-1",
        "term": "perro",
        "translation": "dog",
        "language_pair_id": "es-en",
        "progress": 0,
        "due_at": T0,
        "review_count": 0,
        "successful_reviews": 0,
        "created_at": T0,
        "updated_at": T0,
    }
    data.update(overrides)
    return Card(**data)


@pytest.fixture
def make_card():
    return build_card


@pytest.fixture
def fixed_rng():
    """Factory for a random source that always returns value."""
    def _make(value: float):
        return lambda: value
    return _make
