"""
Review model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from datetime import date

if TYPE_CHECKING:
    from heptareview.models.card import Card


class Review(SQLModel, table=True):
    """Review table - append-only log of scored study sessions per card."""
    __tablename__ = "review"

    id: Optional[int] = Field(default=None, primary_key=True)
    card_id: int = Field(foreign_key="card.id", index=True)
    review_date: date
    familiarity_score: int  # 1 (forgot) .. 5 (effortless)
    interval: int  # Days until next review, 1..365
    next_review_date: date  # Always review_date + interval days
    review_time_minutes: Optional[int] = None
    review_notes: Optional[str] = None

    # Relationships
    card: "Card" = Relationship(back_populates="reviews")
