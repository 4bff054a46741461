"""
Card model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime

if TYPE_CHECKING:
    from heptareview.models.review import Review


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Card(SQLModel, table=True):
    """Card table - a unit of study material scheduled for repeated review."""
    __tablename__ = "card"

    id: Optional[int] = Field(default=None, primary_key=True)
    card_name: str
    subject: str  # Free-text subject label, intentionally not a foreign key
    note: Optional[str] = None
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )

    # Relationships
    reviews: List["Review"] = Relationship(back_populates="card")
