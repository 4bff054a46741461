"""
Card schemas.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from heptareview.schemas.review import ReviewResponse
from heptareview.schemas.utils import normalize_required_text, normalize_optional_text


class CardResponse(BaseModel):
    """Card response schema."""
    id: int
    card_name: str
    subject: str
    note: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CardWithReview(CardResponse):
    """Card together with its most recent review (None when never reviewed)."""
    last_review: Optional[ReviewResponse] = None


class CreateCardRequest(BaseModel):
    """Request schema for creating a card."""
    card_name: str = Field(..., description="Card title")
    subject: str = Field(..., description="Subject label")
    note: Optional[str] = Field(None, description="Optional note")

    @field_validator('card_name')
    @classmethod
    def validate_card_name(cls, v):
        return normalize_required_text(v, "card_name")

    @field_validator('subject')
    @classmethod
    def validate_subject(cls, v):
        return normalize_required_text(v, "subject")

    @field_validator('note')
    @classmethod
    def validate_note(cls, v):
        return normalize_optional_text(v)


class UpdateCardRequest(BaseModel):
    """Request schema for updating a card. Omitted fields are left unchanged."""
    card_name: Optional[str] = None
    subject: Optional[str] = None
    note: Optional[str] = None

    @field_validator('card_name')
    @classmethod
    def validate_card_name(cls, v):
        if v is None:
            return v
        return normalize_required_text(v, "card_name")

    @field_validator('subject')
    @classmethod
    def validate_subject(cls, v):
        if v is None:
            return v
        return normalize_required_text(v, "subject")


class CardsResponse(BaseModel):
    """Response schema for cards list."""
    cards: List[CardWithReview]
