"""
Review schemas.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import date
from heptareview.schemas.utils import normalize_optional_text
from heptareview.services.scheduling_service import LATEST_REVIEW_DATE


class ReviewResponse(BaseModel):
    """Review response schema."""
    id: int
    card_id: int
    review_date: date
    familiarity_score: int
    interval: int
    next_review_date: date
    review_time_minutes: Optional[int] = None
    review_notes: Optional[str] = None

    class Config:
        from_attributes = True


class CreateReviewRequest(BaseModel):
    """Request schema for submitting a review. The schedule is computed server-side."""
    card_id: int = Field(..., description="ID of the reviewed card")
    familiarity_score: int = Field(..., ge=1, le=5, description="Recall quality from 1 (forgot) to 5 (effortless)")
    review_date: Optional[date] = Field(
        None,
        le=LATEST_REVIEW_DATE,
        description="Calendar day of the review (defaults to today)"
    )
    review_time_minutes: Optional[int] = Field(None, ge=0, description="Time spent reviewing, in minutes")
    review_notes: Optional[str] = Field(None, description="Free-text notes about the session")

    @field_validator('review_notes')
    @classmethod
    def validate_review_notes(cls, v):
        return normalize_optional_text(v)

    class Config:
        json_schema_extra = {
            "example": {
                "card_id": 1,
                "familiarity_score": 4,
                "review_date": "2024-06-01",
                "review_time_minutes": 15,
                "review_notes": "Remembered the proof outline"
            }
        }


class ReviewsResponse(BaseModel):
    """Response schema for a card's review history."""
    reviews: List[ReviewResponse]
