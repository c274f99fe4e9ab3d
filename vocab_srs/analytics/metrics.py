"""
Metric computations for deck dashboards.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Optional

import pandas as pd

from vocab_srs.clock import Clock, resolve_now
from vocab_srs.config import CardDisplaySettings, DEFAULT_SETTINGS
from vocab_srs.constants import LifecycleState, LEARNED_PROGRESS, MASTERED_PROGRESS
from vocab_srs.display_modes import select_mode_name
from vocab_srs.lifecycle import derive_state
from vocab_srs.schemas import Card
from vocab_srs.analytics.types import DeckStats


CARD_COLUMNS = [
    "id",
    "progress",
    "review_count",
    "successful_reviews",
    "due_at",
    "is_due",
    "state",
    "mode",
    "lesson_id",
]


def build_cards_frame(
    cards: Iterable[Card],
    now: datetime,
    settings: CardDisplaySettings = DEFAULT_SETTINGS
) -> pd.DataFrame:
    """
    One row per card with derived state and display mode at instant now.
    """
    rows = [
        {
            "id": c.id,
            "progress": c.progress,
            "review_count": c.review_count,
            "successful_reviews": c.successful_reviews,
            "due_at": c.due_at,
            "is_due": c.due_at <= now,
            "state": derive_state(c.progress, c.due_at, now).value,
            "mode": select_mode_name(c.progress, c.review_count, settings),
            "lesson_id": c.lesson_id,
        }
        for c in cards
    ]
    if not rows:
        return pd.DataFrame(columns=CARD_COLUMNS)

    df = pd.DataFrame.from_records(rows, columns=CARD_COLUMNS)
    df["due_at"] = pd.to_datetime(df["due_at"], utc=True)
    return df


def _zero_counts(keys: Iterable[str]) -> dict[str, int]:
    return {key: 0 for key in keys}


def compute_deck_stats(
    cards: Iterable[Card],
    clock: Optional[Clock] = None,
    settings: CardDisplaySettings = DEFAULT_SETTINGS
) -> DeckStats:
    """
    Totals for the stats screen.

    Every lifecycle state and every configured mode appears in the
    breakdowns, with zero when no card falls into it.
    """
    now = resolve_now(clock)
    df = build_cards_frame(cards, now, settings)

    state_keys = [LifecycleState.LEARN.value, LifecycleState.REVIEW.value, LifecycleState.SUSPENDED.value]
    by_state = _zero_counts(state_keys)
    by_mode = _zero_counts(settings.modes.keys())

    if df.empty:
        return DeckStats(
            total_cards=0,
            learned_cards=0,
            mastered_cards=0,
            reviews_due=0,
            by_state=by_state,
            by_mode=by_mode,
        )

    by_state.update({k: int(v) for k, v in df["state"].value_counts().items()})
    by_mode.update({k: int(v) for k, v in df["mode"].value_counts().items()})

    return DeckStats(
        total_cards=int(len(df)),
        learned_cards=int((df["progress"] >= LEARNED_PROGRESS).sum()),
        mastered_cards=int((df["progress"] >= MASTERED_PROGRESS).sum()),
        reviews_due=int(df["is_due"].sum()),
        by_state=by_state,
        by_mode=by_mode,
        average_progress=float(df["progress"].mean()),
    )


def compute_due_forecast(
    cards: Iterable[Card],
    clock: Optional[Clock] = None,
    days: int = 7
) -> pd.Series:
    """
    Number of cards becoming due on each of the next `days` UTC days.

    Overdue cards count toward today. Cards due after the horizon are left out.
    The index holds datetime.date values starting at today.
    """
    now = resolve_now(clock)
    today = pd.Timestamp(now).tz_convert("UTC").floor("D")
    day_index = pd.Index(
        [(today + timedelta(days=i)).date() for i in range(max(0, days))],
        name="day",
    )

    df = build_cards_frame(cards, now)
    if df.empty or len(day_index) == 0:
        return pd.Series(0, index=day_index, dtype="int64", name="due_cards")

    due_day = df["due_at"].dt.floor("D")
    due_day = due_day.where(due_day >= today, today)
    counts = due_day.dt.date.value_counts()
    forecast = counts.reindex(day_index, fill_value=0).astype("int64")
    forecast.name = "due_cards"
    return forecast


def mode_progress_table(
    cards: Iterable[Card],
    clock: Optional[Clock] = None,
    settings: CardDisplaySettings = DEFAULT_SETTINGS
) -> pd.DataFrame:
    """
    Card count and mean progress per display mode, in table order.
    """
    now = resolve_now(clock)
    df = build_cards_frame(cards, now, settings)
    order = list(settings.modes.keys())
    if df.empty:
        return pd.DataFrame(
            {"cards": [0] * len(order), "mean_progress": [0.0] * len(order)},
            index=pd.Index(order, name="mode"),
        )

    grouped = df.groupby("mode")["progress"].agg(cards="count", mean_progress="mean")
    table = grouped.reindex(order)
    table["cards"] = table["cards"].fillna(0).astype("int64")
    table["mean_progress"] = table["mean_progress"].fillna(0.0).astype("float64")
    table.index.name = "mode"
    return table
