"""
Statistics endpoints.
"""
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from datetime import date, timedelta
from typing import Optional

from heptareview.core.config import settings
from heptareview.core.database import get_session
from heptareview.schemas.stats import (
    CardStats,
    SubjectDistributionResponse,
    FamiliarityDistributionResponse
)
from heptareview.services import card_service
from heptareview.services.due_service import (
    compute_stats,
    subject_distribution,
    familiarity_distribution
)

router = APIRouter(prefix="/stats", tags=["stats"])

# Latest as_of whose "due soon" window is still a representable date
LATEST_AS_OF = date.max - timedelta(days=settings.due_soon_days)


@router.get("", response_model=CardStats)
async def get_stats(
    as_of: Optional[date] = Query(None, le=LATEST_AS_OF),
    session: Session = Depends(get_session)
):
    """
    Get dashboard summary counts.

    Returns total cards, cards due today, distinct cards reviewed today,
    cards due within the next week and the average last familiarity score.
    """
    as_of = as_of or date.today()
    cards = card_service.list_cards_with_last_review(session)
    todays_reviews = card_service.list_reviews_on(session, as_of)
    return compute_stats(as_of, cards, todays_reviews)


@router.get("/subject-distribution", response_model=SubjectDistributionResponse)
async def get_subject_distribution(session: Session = Depends(get_session)):
    """Get the number of cards per subject, including empty subjects."""
    subject_names = [subject.name for subject in card_service.list_subjects(session)]
    cards = card_service.list_cards_with_last_review(session)
    return SubjectDistributionResponse(distribution=subject_distribution(subject_names, cards))


@router.get("/familiarity-distribution", response_model=FamiliarityDistributionResponse)
async def get_familiarity_distribution(session: Session = Depends(get_session)):
    """Get the number of cards whose last review scored each level 1-5."""
    cards = card_service.list_cards_with_last_review(session)
    return FamiliarityDistributionResponse(distribution=familiarity_distribution(cards))
