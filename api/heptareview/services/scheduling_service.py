"""
Review scheduling service implementing a simplified spaced-repetition formula.

The next interval is a pure function of the familiarity rating and the
interval produced by the previous review. No per-card ease factor is kept.
"""
import logging
import math
from datetime import date, datetime, timedelta
from typing import NamedTuple, Optional, Union

from heptareview.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


MIN_RATING = 1
MAX_RATING = 5

MIN_INTERVAL_DAYS = 1
MAX_INTERVAL_DAYS = 365

# First review: interval in days keyed by familiarity rating
INITIAL_INTERVALS = {1: 1, 2: 2, 3: 3, 4: 5, 5: 7}

HARD_PENALTY = 0.5
EASY_BONUS = 1.3

# Later reviews: multiplier applied to the previous interval.
# Rating 1 is absent because it always resets to MIN_INTERVAL_DAYS.
GROWTH_FACTORS = {
    2: HARD_PENALTY,
    3: 1.2,
    4: 1.8,
    5: 2.5 * EASY_BONUS,
}

# Latest review date whose next review date is representable for any interval
LATEST_REVIEW_DATE = date.max - timedelta(days=MAX_INTERVAL_DAYS)


class ScheduledReview(NamedTuple):
    """Outcome of scheduling a review."""
    interval: int
    next_review_date: date


def validate_rating(rating: int) -> int:
    """
    Ensure a familiarity rating is an integer between 1 and 5.

    Raises:
        ValidationError: If the rating is out of range or not an integer
    """
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError(f"familiarity rating must be an integer, got {rating!r}")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(
            f"familiarity rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}"
        )
    return rating


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def as_calendar_day(value: Union[date, datetime]) -> date:
    """Truncate a datetime to its calendar date; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def get_initial_interval(rating: int) -> int:
    """Interval in days for a card that has never been reviewed."""
    return INITIAL_INTERVALS[validate_rating(rating)]


def get_next_interval(rating: int, prior_interval: int) -> int:
    """
    Grow or shrink the previous interval according to the rating.

    Rating 1 resets to one day. Other ratings multiply the prior interval by
    their growth factor, round to the nearest day (halves round up) and clamp
    the result to [1, 365].

    Args:
        rating: Familiarity rating (1-5)
        prior_interval: Interval in days produced by the previous review

    Returns:
        New interval in days

    Raises:
        ValidationError: If the rating is invalid or prior_interval is not a positive integer
    """
    validate_rating(rating)
    if isinstance(prior_interval, bool) or not isinstance(prior_interval, int):
        raise ValidationError(f"prior interval must be an integer, got {prior_interval!r}")
    if prior_interval < MIN_INTERVAL_DAYS:
        raise ValidationError(f"prior interval must be at least {MIN_INTERVAL_DAYS} day, got {prior_interval}")

    if rating == 1:
        return MIN_INTERVAL_DAYS

    new_interval = _round_half_up(prior_interval * GROWTH_FACTORS[rating])
    return max(MIN_INTERVAL_DAYS, min(new_interval, MAX_INTERVAL_DAYS))


def compute_next_review(
    rating: int,
    prior_interval: Optional[int] = None,
    today: Optional[Union[date, datetime]] = None
) -> ScheduledReview:
    """
    Compute the interval and next review date for a new review.

    Args:
        rating: Familiarity rating (1-5)
        prior_interval: Interval of the card's most recent review, or None if never reviewed
        today: Day the review happens (defaults to the current date); datetimes are truncated

    Returns:
        ScheduledReview with interval in days and next_review_date = today + interval
    """
    if today is None:
        today = date.today()
    today = as_calendar_day(today)

    if prior_interval is None:
        interval = get_initial_interval(rating)
    else:
        interval = get_next_interval(rating, prior_interval)

    try:
        next_review_date = today + timedelta(days=interval)
    except OverflowError:
        raise ValidationError(f"review date {today} is too late to schedule {interval} day(s) ahead")
    logger.debug(
        f"Scheduled rating={rating} prior_interval={prior_interval} on {today}: "
        f"interval={interval}, next_review_date={next_review_date}"
    )
    return ScheduledReview(interval=interval, next_review_date=next_review_date)
