"""Due-set query layer."""

from vocab_srs.queue.due import (
    TimeUntilNext,
    get_due_cards,
    get_next_due_card,
    get_time_until_next,
)
from vocab_srs.queue.lessons import (
    check_for_duplicates,
    get_lesson_cards_in_order,
    get_next_card_to_show,
)

__all__ = [
    "TimeUntilNext",
    "get_due_cards",
    "get_next_due_card",
    "get_time_until_next",
    "check_for_duplicates",
    "get_lesson_cards_in_order",
    "get_next_card_to_show",
]
