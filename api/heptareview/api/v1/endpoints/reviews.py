"""
Review submission and due-today endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from datetime import date
from typing import Optional
import logging

from heptareview.core.database import get_session
from heptareview.schemas.card import CardsResponse
from heptareview.schemas.review import CreateReviewRequest, ReviewResponse
from heptareview.services import card_service
from heptareview.services.due_service import select_due

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    request: CreateReviewRequest,
    session: Session = Depends(get_session)
):
    """
    Submit a review for a card.

    The interval and next review date are computed from the familiarity
    score and the card's previous review; clients do not send them.
    """
    review = card_service.submit_review(
        session,
        card_id=request.card_id,
        familiarity_score=request.familiarity_score,
        review_date=request.review_date,
        review_time_minutes=request.review_time_minutes,
        review_notes=request.review_notes
    )
    return ReviewResponse.model_validate(review)


@router.get("/today", response_model=CardsResponse)
async def get_cards_due_today(
    as_of: Optional[date] = None,
    session: Session = Depends(get_session)
):
    """
    Get cards due for review.

    Args:
        as_of: Day to evaluate (defaults to today)

    Returns:
        Cards never reviewed or whose next review date is on or before as_of
    """
    as_of = as_of or date.today()
    cards = card_service.list_cards_with_last_review(session)
    due_cards = select_due(as_of, cards)
    logger.debug(f"{len(due_cards)} of {len(cards)} card(s) due on {as_of}")
    return CardsResponse(cards=due_cards)
