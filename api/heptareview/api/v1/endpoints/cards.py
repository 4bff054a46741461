"""
Card CRUD endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, status, Response
from sqlmodel import Session
import logging

from heptareview.core.database import get_session
from heptareview.schemas.card import (
    CardWithReview,
    CardsResponse,
    CreateCardRequest,
    UpdateCardRequest
)
from heptareview.schemas.review import ReviewResponse, ReviewsResponse
from heptareview.schemas.utils import normalize_optional_text
from heptareview.services import card_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("", response_model=CardsResponse)
async def get_cards(session: Session = Depends(get_session)):
    """Get all cards with their most recent review, newest cards first."""
    return CardsResponse(cards=card_service.list_cards_with_last_review(session))


@router.get("/{card_id}", response_model=CardWithReview)
async def get_card(
    card_id: int,
    session: Session = Depends(get_session)
):
    """Get a single card with its most recent review."""
    card = card_service.get_card_with_review(session, card_id)
    if not card:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Card not found")
    return card


@router.post("", response_model=CardWithReview, status_code=status.HTTP_201_CREATED)
async def create_card(
    request: CreateCardRequest,
    session: Session = Depends(get_session)
):
    """Create a new card. New cards are due immediately."""
    card = card_service.create_card(
        session,
        card_name=request.card_name,
        subject=request.subject,
        note=request.note
    )
    return card_service.get_card_with_review(session, card.id)


@router.put("/{card_id}", response_model=CardWithReview)
async def update_card(
    card_id: int,
    request: UpdateCardRequest,
    session: Session = Depends(get_session)
):
    """
    Update a card by ID.

    Only fields present in the request body are changed. An empty note clears it.
    """
    fields = request.model_dump(exclude_unset=True)
    if "note" in fields:
        fields["note"] = normalize_optional_text(fields["note"])
    # card_name and subject are required columns
    for required in ("card_name", "subject"):
        if required in fields and fields[required] is None:
            del fields[required]

    card_service.update_card(session, card_id, **fields)
    return card_service.get_card_with_review(session, card_id)


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_card(
    card_id: int,
    session: Session = Depends(get_session)
):
    """Delete a card together with its review history."""
    card_service.delete_card(session, card_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{card_id}/reviews", response_model=ReviewsResponse)
async def get_card_reviews(
    card_id: int,
    session: Session = Depends(get_session)
):
    """Get the review history of a card, most recent first."""
    reviews = card_service.list_reviews_for_card(session, card_id)
    return ReviewsResponse(
        reviews=[ReviewResponse.model_validate(review) for review in reviews]
    )
