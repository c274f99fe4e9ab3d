"""
Scheduling engine tests: correct/incorrect branches, clamping, intervals.
"""

import random
from datetime import timedelta

import pytest

from vocab_srs import (
    InvalidCardError,
    LifecycleState,
    ReviewResult,
    process_review,
    with_spaced_repetition,
)
from vocab_srs.scheduler import build_review_event

CORRECT = ReviewResult(correct=True, time_spent_ms=1200)
INCORRECT = ReviewResult(correct=False, time_spent_ms=3400)


class TestCorrectAnswer:
    def test_new_card_first_success(self, make_card, clock, t0):
        card = make_card()

        updated = process_review(card, CORRECT, clock=clock)

        assert updated.progress == 10
        assert updated.successful_reviews == 1
        assert updated.review_count == 1
        assert updated.due_at == t0 + timedelta(minutes=1)
        assert updated.last_reviewed_at == t0
        assert updated.updated_at == t0

    def test_second_success_uses_second_interval(self, make_card, clock, t0):
        card = process_review(make_card(), CORRECT, clock=clock)
        clock.advance(minutes=1)

        updated = process_review(card, CORRECT, clock=clock)

        assert updated.progress == 20
        assert updated.successful_reviews == 2
        assert updated.review_count == 2
        assert updated.due_at == t0 + timedelta(minutes=1) + timedelta(minutes=10)

    def test_progress_capped_at_100(self, make_card, clock):
        card = make_card(progress=95, successful_reviews=8, review_count=12)

        updated = process_review(card, CORRECT, clock=clock)

        assert updated.progress == 100

    def test_interval_table_sequence_then_repeats_last(self, make_card, clock, t0):
        expected = [
            timedelta(minutes=1),
            timedelta(minutes=10),
            timedelta(minutes=30),
            timedelta(hours=24),
            timedelta(days=7),
            timedelta(days=24),
            timedelta(days=24),
            timedelta(days=24),
        ]
        card = make_card()
        gaps = []
        for _ in expected:
            card = process_review(card, CORRECT, clock=clock)
            gaps.append(card.due_at - t0)

        assert gaps == expected
        assert gaps == sorted(gaps)

    def test_input_card_is_not_modified(self, make_card, clock, t0):
        card = make_card(progress=40)

        process_review(card, CORRECT, clock=clock)

        assert card.progress == 40
        assert card.review_count == 0
        assert card.due_at == t0

    def test_legacy_fields_pass_through(self, make_card, clock):
        card = make_card(ease_factor=1.7, interval_days=9)

        updated = process_review(card, CORRECT, clock=clock)

        assert updated.ease_factor == 1.7
        assert updated.interval_days == 9


class TestIncorrectAnswer:
    def test_threshold_not_crossed_keeps_successes(self, make_card, clock, t0):
        card = make_card(progress=50, successful_reviews=3, review_count=5)

        updated = process_review(card, INCORRECT, clock=clock)

        assert updated.progress == 30
        assert updated.successful_reviews == 3
        assert updated.review_count == 6
        assert updated.due_at == t0 + timedelta(milliseconds=60_000)

    def test_drop_below_threshold_rolls_back_one_success(self, make_card, clock):
        card = make_card(progress=15, successful_reviews=2, review_count=3)

        updated = process_review(card, INCORRECT, clock=clock)

        assert updated.progress == 0
        assert updated.successful_reviews == 1

    def test_rollback_never_below_zero(self, make_card, clock):
        card = make_card(progress=10, successful_reviews=0, review_count=1)

        updated = process_review(card, INCORRECT, clock=clock)

        assert updated.progress == 0
        assert updated.successful_reviews == 0

    def test_threshold_boundary_is_exclusive(self, make_card, clock):
        # 40 - 20 = 20, which is not below 20
        card = make_card(progress=40, successful_reviews=4, review_count=4)

        updated = process_review(card, INCORRECT, clock=clock)

        assert updated.progress == 20
        assert updated.successful_reviews == 4

    @pytest.mark.parametrize("progress,successes", [(0, 0), (35, 2), (70, 5), (100, 9)])
    def test_flat_delay_regardless_of_state(self, make_card, clock, t0, progress, successes):
        card = make_card(progress=progress, successful_reviews=successes, review_count=successes)

        updated = process_review(card, INCORRECT, clock=clock)

        assert updated.due_at == t0 + timedelta(minutes=1)

    def test_custom_delay_from_settings(self, make_card, clock, t0):
        settings = with_spaced_repetition(incorrect_answer_delay_ms=5 * 60_000)

        updated = process_review(make_card(progress=30), INCORRECT, clock=clock, settings=settings)

        assert updated.due_at == t0 + timedelta(minutes=5)


class TestInvariants:
    def test_random_sequences_hold_invariants(self, make_card, clock):
        rng = random.Random(1234)
        card = make_card()
        for step in range(500):
            before = card.review_count
            result = ReviewResult(correct=rng.random() < 0.6, time_spent_ms=rng.randint(0, 9000))
            card = process_review(card, result, clock=clock)
            clock.advance(minutes=rng.randint(0, 600))

            assert 0 <= card.progress <= 100
            assert card.successful_reviews >= 0
            assert card.review_count == before + 1

    def test_state_after_review_is_not_due(self, make_card, clock, t0):
        updated = process_review(make_card(progress=30), CORRECT, clock=clock)

        assert updated.lifecycle_state(t0) == LifecycleState.REVIEW
        assert updated.lifecycle_state(updated.due_at) == LifecycleState.LEARN


class TestValidation:
    def test_accepts_repository_mapping(self, clock, t0):
        row = {
            "id": "42",
            "term": "gato",
            "translation": "cat",
            "progress": 20,
            "dueAt": t0,
            "reviewCount": 2,
            "successfulReviews": 2,
            "createdAt": t0,
            "updatedAt": t0,
        }

        updated = process_review(row, {"correct": True, "timeSpent": 900}, clock=clock)

        assert updated.id == "42"
        assert updated.progress == 30
        assert updated.successful_reviews == 3

    def test_progress_out_of_range_rejected(self, make_card, clock):
        corrupt = make_card().model_copy(update={"progress": 140})

        with pytest.raises(InvalidCardError):
            process_review(corrupt, CORRECT, clock=clock)

    def test_negative_successes_rejected(self, make_card, clock):
        corrupt = make_card().model_copy(update={"successful_reviews": -1})

        with pytest.raises(InvalidCardError):
            process_review(corrupt, CORRECT, clock=clock)

    def test_missing_due_at_rejected(self, clock, t0):
        row = {"id": "7", "term": "a", "translation": "b", "createdAt": t0, "updatedAt": t0}

        with pytest.raises(InvalidCardError):
            process_review(row, CORRECT, clock=clock)

    def test_naive_timestamp_rejected(self, clock, t0):
        row = {
            "id": "7", "term": "a", "translation": "b",
            "dueAt": t0.replace(tzinfo=None), "createdAt": t0, "updatedAt": t0,
        }

        with pytest.raises(InvalidCardError):
            process_review(row, CORRECT, clock=clock)

    def test_none_card_rejected(self, clock):
        with pytest.raises(InvalidCardError):
            process_review(None, CORRECT, clock=clock)

    def test_invalid_result_rejected(self, make_card, clock):
        with pytest.raises(InvalidCardError):
            process_review(make_card(), {"correct": True, "timeSpent": -5}, clock=clock)


def test_build_review_event(make_card, clock, t0):
    before = make_card(progress=20, successful_reviews=2, review_count=2)
    after = process_review(before, CORRECT, clock=clock)

    event = build_review_event(before, after, CORRECT, t0, presentation_mode="WORD", session_id="s1")

    assert event["card_id"] == "card-1"
    assert event["progress_before"] == 20
    assert event["progress_after"] == 30
    assert event["successful_reviews_after"] == 3
    assert event["state_after"] == "REVIEW"
    assert event["presentation_mode"] == "WORD"
    assert event["session_id"] == "s1"
