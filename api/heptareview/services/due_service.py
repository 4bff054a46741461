"""
Due-set selection and dashboard statistics.

Every function here works on a snapshot of cards that carry their most
recent review as ``last_review`` (see ``CardWithReview``). Nothing touches
the database, so the functions can be called from any request handler.
"""
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Sequence, Union

from heptareview.core.config import settings
from heptareview.core.exceptions import ValidationError
from heptareview.schemas.stats import CardStats, SubjectCount, FamiliarityCount
from heptareview.services.scheduling_service import MIN_RATING, MAX_RATING, as_calendar_day


def is_due(card, as_of: Union[date, datetime]) -> bool:
    """A card is due when it was never reviewed or its next review date has arrived."""
    if card.last_review is None:
        return True
    return as_calendar_day(card.last_review.next_review_date) <= as_calendar_day(as_of)


def select_due(as_of: Union[date, datetime], cards: Iterable) -> List:
    """Return the due subset of ``cards`` in input order."""
    return [card for card in cards if is_due(card, as_of)]


def count_completed_on(day: Union[date, datetime], reviews: Iterable) -> int:
    """Count distinct cards with at least one review on ``day``."""
    day = as_calendar_day(day)
    return len({
        review.card_id
        for review in reviews
        if as_calendar_day(review.review_date) == day
    })


def count_due_soon(as_of: Union[date, datetime], cards: Iterable, days: Optional[int] = None) -> int:
    """
    Count reviewed cards falling due after ``as_of`` but within ``days`` days.

    Never-reviewed cards are excluded because they are already due today.
    ``days`` defaults to ``settings.due_soon_days``.

    Raises:
        ValidationError: If the window runs past the last representable date
    """
    if days is None:
        days = settings.due_soon_days
    today = as_calendar_day(as_of)
    try:
        horizon = today + timedelta(days=days)
    except OverflowError:
        raise ValidationError(f"as_of date {today} is too late for a {days} day window")
    count = 0
    for card in cards:
        if card.last_review is None:
            continue
        next_review_date = as_calendar_day(card.last_review.next_review_date)
        if today < next_review_date <= horizon:
            count += 1
    return count


def average_familiarity(cards: Iterable) -> float:
    """
    Mean last-review score rounded to one decimal, or 0.0 when nothing was reviewed.

    The mean is a float and is rounded from its exact binary value, so 29/20
    (stored just below 1.45) gives 1.4.
    """
    scores = [card.last_review.familiarity_score for card in cards if card.last_review is not None]
    if not scores:
        return 0.0
    mean = sum(scores) / len(scores)
    return float(Decimal(mean).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def compute_stats(
    as_of: Union[date, datetime],
    cards: Sequence,
    reviews: Iterable,
    due_soon_days: Optional[int] = None
) -> CardStats:
    """
    Aggregate dashboard counts.

    Args:
        as_of: The day considered "today"
        cards: All cards, each with its ``last_review`` attached
        reviews: Review records to scan for reviews completed on ``as_of``
        due_soon_days: Size of the "due soon" window after today (defaults to settings)

    Returns:
        CardStats
    """
    return CardStats(
        total_cards=len(cards),
        cards_to_review_today=len(select_due(as_of, cards)),
        completed_today=count_completed_on(as_of, reviews),
        due_soon=count_due_soon(as_of, cards, days=due_soon_days),
        avg_familiarity=average_familiarity(cards),
    )


def subject_distribution(subject_names: Iterable[str], cards: Iterable) -> List[SubjectCount]:
    """Card count per existing subject, zero-count subjects included."""
    counts: dict[str, int] = {}
    for card in cards:
        counts[card.subject] = counts.get(card.subject, 0) + 1
    return [SubjectCount(subject=name, count=counts.get(name, 0)) for name in subject_names]


def familiarity_distribution(cards: Iterable) -> List[FamiliarityCount]:
    """Card count for each familiarity level 1-5 based on the last review."""
    counts = {level: 0 for level in range(MIN_RATING, MAX_RATING + 1)}
    for card in cards:
        if card.last_review is None:
            continue
        score = card.last_review.familiarity_score
        if score in counts:
            counts[score] += 1
    return [FamiliarityCount(level=level, count=count) for level, count in counts.items()]
