"""
Statistics schemas.
"""
from pydantic import BaseModel
from typing import List


class CardStats(BaseModel):
    """Dashboard summary counts."""
    total_cards: int
    cards_to_review_today: int
    completed_today: int
    due_soon: int
    avg_familiarity: float


class SubjectCount(BaseModel):
    """Number of cards filed under a subject."""
    subject: str
    count: int


class FamiliarityCount(BaseModel):
    """Number of cards whose last review scored this level."""
    level: int
    count: int


class SubjectDistributionResponse(BaseModel):
    """Response for card counts per subject."""
    distribution: List[SubjectCount]


class FamiliarityDistributionResponse(BaseModel):
    """Response for card counts per familiarity level."""
    distribution: List[FamiliarityCount]
