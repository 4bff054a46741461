from pydantic_settings import BaseSettings
import os
from pathlib import Path

# Try to load .env file explicitly before creating Settings
try:
    from dotenv import load_dotenv
    import logging
    _logger = logging.getLogger(__name__)

    # Look for .env in api directory (parent of heptareview directory)
    api_dir = Path(__file__).parent.parent.parent
    env_path = api_dir / ".env"

    if env_path.exists():
        load_dotenv(env_path, override=False)
        _logger.info(f"Loaded .env file from: {env_path}")
    else:
        # Fallback to current directory
        current_env = Path(".env")
        if current_env.exists():
            load_dotenv(current_env, override=False)
            _logger.info(f"Loaded .env file from: {current_env.absolute()}")
except Exception as e:
    import logging
    _logger = logging.getLogger(__name__)
    _logger.warning(f"Error loading .env file: {e}")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database - DATABASE_URL may be provided uppercase by the platform
    database_url: str = "sqlite:///./heptareview.db"

    # API
    api_prefix: str = "/api"

    # CORS
    cors_origins: list[str] = ["*"]

    # 'development', 'dev' or 'local' expose error details in responses
    environment: str = "production"

    # Window (in days after today) counted as "due soon" in statistics
    due_soon_days: int = 7

    class Config:
        env_file = ".env"
        case_sensitive = False

    def __init__(self, **kwargs):
        # Ensure we read DATABASE_URL from environment when it is set uppercase
        if not kwargs.get("database_url") and os.getenv("DATABASE_URL"):
            kwargs["database_url"] = os.getenv("DATABASE_URL")
        super().__init__(**kwargs)

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def sqlalchemy_url(self) -> str:
        """Database URL normalized for SQLAlchemy (postgres:// -> postgresql://)."""
        if self.database_url.startswith("postgres://"):
            return self.database_url.replace("postgres://", "postgresql://", 1)
        return self.database_url


# Create settings instance
settings = Settings()

# Validate DATABASE_URL
if not settings.database_url:
    raise ValueError("DATABASE_URL environment variable must not be empty")
