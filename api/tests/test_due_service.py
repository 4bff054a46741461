"""
Tests for due-set selection and statistics aggregation.
"""
from datetime import date, timedelta

import pytest

from heptareview.core.config import settings
from heptareview.core.exceptions import ValidationError
from heptareview.schemas.review import ReviewResponse
from heptareview.services.due_service import (
    select_due,
    compute_stats,
    count_completed_on,
    count_due_soon,
    average_familiarity,
    subject_distribution,
    familiarity_distribution,
)
from tests.conftest import make_card

AS_OF = date(2024, 6, 6)


def _review(review_id, card_id, review_date):
    return ReviewResponse(
        id=review_id,
        card_id=card_id,
        review_date=review_date,
        familiarity_score=3,
        interval=3,
        next_review_date=review_date + timedelta(days=3),
    )


def test_never_reviewed_card_is_always_due():
    card = make_card()
    assert select_due(date(1970, 1, 1), [card]) == [card]
    assert select_due(date(2999, 12, 31), [card]) == [card]


def test_due_boundary_is_inclusive():
    card = make_card(next_review_date=AS_OF)
    assert select_due(AS_OF, [card]) == [card]


def test_card_due_tomorrow_is_excluded():
    card = make_card(next_review_date=AS_OF + timedelta(days=1))
    assert select_due(AS_OF, [card]) == []


def test_overdue_card_is_included_and_order_preserved():
    cards = [
        make_card(1, next_review_date=AS_OF - timedelta(days=10)),
        make_card(2, next_review_date=AS_OF + timedelta(days=2)),
        make_card(3),
    ]
    assert [card.id for card in select_due(AS_OF, cards)] == [1, 3]


def test_completed_today_counts_distinct_cards():
    reviews = [
        _review(1, 1, AS_OF),
        _review(2, 1, AS_OF),
        _review(3, 2, AS_OF),
        _review(4, 3, AS_OF - timedelta(days=1)),
    ]
    assert count_completed_on(AS_OF, reviews) == 2


def test_due_soon_window_excludes_today_and_unreviewed():
    cards = [
        make_card(1, next_review_date=AS_OF),                      # due today
        make_card(2, next_review_date=AS_OF + timedelta(days=1)),  # soon
        make_card(3, next_review_date=AS_OF + timedelta(days=7)),  # soon, boundary
        make_card(4, next_review_date=AS_OF + timedelta(days=8)),  # later
        make_card(5),                                              # never reviewed
    ]
    assert count_due_soon(AS_OF, cards) == 2


def test_average_familiarity():
    cards = [
        make_card(1, next_review_date=AS_OF, familiarity_score=2),
        make_card(2, next_review_date=AS_OF, familiarity_score=4),
        make_card(3),
    ]
    assert average_familiarity(cards) == 3.0


def test_average_familiarity_rounds_to_one_decimal():
    cards = [
        make_card(1, next_review_date=AS_OF, familiarity_score=1),
        make_card(2, next_review_date=AS_OF, familiarity_score=2),
        make_card(3, next_review_date=AS_OF, familiarity_score=2),
    ]
    # 5 / 3 = 1.666...
    assert average_familiarity(cards) == 1.7


def test_average_familiarity_without_reviews_is_zero():
    assert average_familiarity([make_card(1), make_card(2)]) == 0
    assert average_familiarity([]) == 0


def test_compute_stats():
    cards = [
        make_card(1, next_review_date=AS_OF, familiarity_score=2),
        make_card(2, last_review_date=AS_OF, next_review_date=AS_OF + timedelta(days=3), familiarity_score=4),
        make_card(3),
    ]
    reviews = [_review(1, 2, AS_OF), _review(2, 2, AS_OF), _review(3, 1, AS_OF - timedelta(days=2))]

    stats = compute_stats(AS_OF, cards, reviews)

    assert stats.total_cards == 3
    assert stats.cards_to_review_today == 2
    assert stats.completed_today == 1
    assert stats.due_soon == 1
    assert stats.avg_familiarity == 3.0


def test_subject_distribution_includes_empty_subjects_and_skips_dangling_labels():
    cards = [
        make_card(1, subject="Physics"),
        make_card(2, subject="Physics"),
        make_card(3, subject="History"),
        make_card(4, subject="Deleted subject"),
    ]
    distribution = subject_distribution(["Physics", "History", "Biology"], cards)
    assert [(d.subject, d.count) for d in distribution] == [
        ("Physics", 2),
        ("History", 1),
        ("Biology", 0),
    ]


def test_familiarity_distribution_has_five_levels():
    cards = [
        make_card(1, next_review_date=AS_OF, familiarity_score=5),
        make_card(2, next_review_date=AS_OF, familiarity_score=5),
        make_card(3, next_review_date=AS_OF, familiarity_score=1),
        make_card(4),
    ]
    distribution = familiarity_distribution(cards)
    assert [(d.level, d.count) for d in distribution] == [(1, 1), (2, 0), (3, 0), (4, 0), (5, 2)]


def test_average_familiarity_rounds_binary_mean():
    # 29 / 20 is stored just below 1.45
    cards = [make_card(i, next_review_date=AS_OF, familiarity_score=2) for i in range(9)]
    cards += [make_card(i, next_review_date=AS_OF, familiarity_score=1) for i in range(9, 20)]
    assert average_familiarity(cards) == 1.4


def test_due_soon_window_defaults_to_settings(monkeypatch):
    cards = [
        make_card(1, next_review_date=AS_OF + timedelta(days=2)),
        make_card(2, next_review_date=AS_OF + timedelta(days=5)),
    ]
    monkeypatch.setattr(settings, "due_soon_days", 3)
    assert count_due_soon(AS_OF, cards) == 1
    assert compute_stats(AS_OF, cards, []).due_soon == 1


def test_due_soon_window_past_last_date_is_rejected():
    with pytest.raises(ValidationError):
        count_due_soon(date.max - timedelta(days=1), [make_card()], days=7)
