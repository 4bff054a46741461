"""
Shared fixtures: an in-memory SQLite database and a FastAPI test client.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("ENVIRONMENT", "development")

from datetime import date, datetime, timezone
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from heptareview import models  # noqa: F401
from heptareview.core.database import get_session
from heptareview.main import app
from heptareview.schemas.card import CardWithReview
from heptareview.schemas.review import ReviewResponse


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_card(
    card_id: int = 1,
    subject: str = "Physics",
    last_review_date: Optional[date] = None,
    next_review_date: Optional[date] = None,
    familiarity_score: int = 3,
    interval: int = 1,
) -> CardWithReview:
    """Build a card view; a last review is attached when next_review_date is given."""
    last_review = None
    if next_review_date is not None:
        last_review = ReviewResponse(
            id=card_id,
            card_id=card_id,
            review_date=last_review_date or next_review_date,
            familiarity_score=familiarity_score,
            interval=interval,
            next_review_date=next_review_date,
        )
    return CardWithReview(
        id=card_id,
        card_name=f"Card {card_id}",
        subject=subject,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        last_review=last_review,
    )
