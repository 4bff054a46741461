"""
Card service for persistence of cards, subjects and reviews.

This is the storage side of the scheduler: it reads each card's most recent
review, hands it to the scheduling service and appends the resulting review.
"""
import logging
from datetime import date
from typing import Dict, List, Optional

from sqlmodel import Session, select, func
from sqlalchemy.exc import IntegrityError

from heptareview.core.exceptions import ConflictError, NotFoundError, ValidationError
from heptareview.models import Card, Review, Subject
from heptareview.schemas.card import CardWithReview
from heptareview.schemas.review import ReviewResponse
from heptareview.services.scheduling_service import compute_next_review

logger = logging.getLogger(__name__)


def _most_recent_first(query):
    # Same-day reviews are ordered by insertion so "last review" is deterministic
    return query.order_by(Review.review_date.desc(), Review.id.desc())  # type: ignore


def _latest_review_per_card():
    ranked = select(
        Review.id,
        func.row_number().over(
            partition_by=Review.card_id,
            order_by=(Review.review_date.desc(), Review.id.desc()),  # type: ignore
        ).label("rank"),
    ).subquery()
    return select(Review).join(ranked, Review.id == ranked.c.id).where(ranked.c.rank == 1)


def _to_card_with_review(card: Card, last_review: Optional[Review]) -> CardWithReview:
    return CardWithReview(
        id=card.id,
        card_name=card.card_name,
        subject=card.subject,
        note=card.note,
        created_at=card.created_at,
        last_review=ReviewResponse.model_validate(last_review) if last_review else None,
    )


def get_last_review(session: Session, card_id: int) -> Optional[Review]:
    """Return the most recent review of a card, or None if it was never reviewed."""
    return session.exec(
        _most_recent_first(select(Review).where(Review.card_id == card_id))
    ).first()


def list_reviews_for_card(session: Session, card_id: int) -> List[Review]:
    """
    Return a card's review history, most recent first.

    Raises:
        NotFoundError: If the card does not exist
    """
    if not session.get(Card, card_id):
        raise NotFoundError(f"Card with id {card_id} not found")
    return list(session.exec(
        _most_recent_first(select(Review).where(Review.card_id == card_id))
    ).all())


def list_reviews_on(session: Session, day: date) -> List[Review]:
    """Return all reviews recorded on a calendar day."""
    return list(session.exec(select(Review).where(Review.review_date == day)).all())


def get_card_with_review(session: Session, card_id: int) -> Optional[CardWithReview]:
    """Return a card with its last review attached, or None if the card does not exist."""
    card = session.get(Card, card_id)
    if not card:
        return None
    return _to_card_with_review(card, get_last_review(session, card_id))


def list_cards_with_last_review(session: Session) -> List[CardWithReview]:
    """
    Return every card with its most recent review attached.

    Only the top-ranked review per card is read from the database.
    """
    cards = session.exec(
        select(Card).order_by(Card.created_at.desc(), Card.id.desc())  # type: ignore
    ).all()
    if not cards:
        return []

    last_reviews: Dict[int, Review] = {
        review.card_id: review for review in session.exec(_latest_review_per_card()).all()
    }

    return [_to_card_with_review(card, last_reviews.get(card.id)) for card in cards]


def create_card(
    session: Session,
    card_name: str,
    subject: str,
    note: Optional[str] = None
) -> Card:
    """Create and persist a card."""
    card = Card(card_name=card_name, subject=subject, note=note)
    session.add(card)
    session.commit()
    session.refresh(card)
    logger.info(f"Created card {card.id} ({card.card_name!r}) in subject {card.subject!r}")
    return card


def update_card(session: Session, card_id: int, **fields) -> Card:
    """
    Update name, subject and/or note of a card.

    Only the keys present in ``fields`` are changed.

    Raises:
        NotFoundError: If the card does not exist
        ValidationError: If a field other than card_name, subject or note is given
    """
    card = session.get(Card, card_id)
    if not card:
        raise NotFoundError(f"Card with id {card_id} not found")

    editable = {"card_name", "subject", "note"}
    unknown = set(fields) - editable
    if unknown:
        raise ValidationError(f"Cannot update card field(s): {', '.join(sorted(unknown))}")

    for name, value in fields.items():
        setattr(card, name, value)

    session.add(card)
    session.commit()
    session.refresh(card)
    logger.info(f"Updated card {card_id}: {sorted(fields)}")
    return card


def delete_card(session: Session, card_id: int) -> None:
    """
    Delete a card and all of its reviews.

    Raises:
        NotFoundError: If the card does not exist
    """
    card = session.get(Card, card_id)
    if not card:
        raise NotFoundError(f"Card with id {card_id} not found")

    reviews = session.exec(select(Review).where(Review.card_id == card_id)).all()
    for review in reviews:
        session.delete(review)
    session.delete(card)
    session.commit()
    logger.info(f"Deleted card {card_id} and {len(reviews)} review(s)")


def submit_review(
    session: Session,
    card_id: int,
    familiarity_score: int,
    review_date: Optional[date] = None,
    review_time_minutes: Optional[int] = None,
    review_notes: Optional[str] = None
) -> Review:
    """
    Schedule and record a review of a card.

    The previous interval comes from the card's most recent review; the new
    interval and next review date are counted from ``review_date``.

    Args:
        session: Database session
        card_id: Reviewed card
        familiarity_score: Rating from 1 to 5
        review_date: Day of the review (defaults to today)
        review_time_minutes: Optional time spent, in minutes
        review_notes: Optional free-text notes

    Returns:
        The persisted Review

    Raises:
        NotFoundError: If the card does not exist
        ValidationError: If the rating is outside 1-5
    """
    card = session.get(Card, card_id)
    if not card:
        raise NotFoundError(f"Card with id {card_id} not found")

    if review_date is None:
        review_date = date.today()

    last_review = get_last_review(session, card_id)
    prior_interval = last_review.interval if last_review else None
    schedule = compute_next_review(familiarity_score, prior_interval, today=review_date)

    review = Review(
        card_id=card_id,
        review_date=review_date,
        familiarity_score=familiarity_score,
        interval=schedule.interval,
        next_review_date=schedule.next_review_date,
        review_time_minutes=review_time_minutes,
        review_notes=review_notes,
    )
    session.add(review)
    session.commit()
    session.refresh(review)

    logger.info(
        f"Card {card_id} reviewed on {review_date} with score {familiarity_score}: "
        f"interval {prior_interval} -> {schedule.interval} day(s), next review {schedule.next_review_date}"
    )
    return review


def list_subjects(session: Session) -> List[Subject]:
    """Return all subjects in creation order."""
    return list(session.exec(select(Subject).order_by(Subject.id)).all())  # type: ignore


def create_subject(session: Session, name: str) -> Subject:
    """
    Create a subject, or return the existing one whose name matches ignoring case.

    Raises:
        ValidationError: If the name is empty
        ConflictError: If the insert collides with a name that cannot be found afterwards
    """
    name = (name or "").strip()
    if not name:
        raise ValidationError("Subject name cannot be empty")

    existing_subject = session.exec(
        select(Subject).where(func.lower(Subject.name) == name.lower())
    ).first()
    if existing_subject:
        return existing_subject

    subject = Subject(name=name)
    session.add(subject)
    try:
        session.commit()
    except IntegrityError:
        # Another request inserted the same name between our lookup and commit
        session.rollback()
        existing_subject = session.exec(
            select(Subject).where(func.lower(Subject.name) == name.lower())
        ).first()
        if existing_subject:
            return existing_subject
        raise ConflictError(f"Subject {name!r} could not be created")
    session.refresh(subject)
    logger.info(f"Created subject {subject.id} ({subject.name!r})")
    return subject


def delete_subject(session: Session, subject_id: int) -> None:
    """
    Delete a subject. Cards keep their subject label.

    Raises:
        NotFoundError: If the subject does not exist
    """
    subject = session.get(Subject, subject_id)
    if not subject:
        raise NotFoundError(f"Subject with id {subject_id} not found")
    subject_name = subject.name
    session.delete(subject)
    session.commit()
    logger.info(f"Deleted subject {subject_id} ({subject_name!r})")
