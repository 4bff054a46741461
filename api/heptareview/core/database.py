from sqlmodel import SQLModel, create_engine, Session
from heptareview.core.config import settings
import logging

logger = logging.getLogger(__name__)

db_url = settings.sqlalchemy_url

logger.info(f"Connecting to database: {db_url[:20]}...")  # Log partial URL for debugging

if db_url.startswith("sqlite"):
    # SQLite connections are shared across FastAPI's worker threads
    engine = create_engine(
        db_url,
        echo=False,
        connect_args={"check_same_thread": False},
    )
else:
    engine = create_engine(
        db_url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
    )


def get_session():
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session


def init_db():
    """Initialize database tables."""
    # Import models so they register with SQLModel metadata
    from heptareview import models  # noqa: F401
    SQLModel.metadata.create_all(engine)
