"""
Application settings loaded from environment variables.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Database ─────────────────────────────────────────────────────────
    database_url: Optional[str] = None   # e.g. postgres://user:pw@host:5432/db
    database_ssl: bool = True            # TLS (unverified) when DATABASE_URL is used
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "phonebook"
    db_user: str = "phonebook_user"
    db_password: str = "password123"

    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: Optional[str] = None    # HMAC secret for auth tokens
    jwt_expiry_seconds: int = 604800    # 7 days
    bcrypt_rounds: int = 10

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 3001
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: List[str] = [
        "http://localhost:3000",
        "https://phonebook-frontend-beige.vercel.app",
    ]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def sqlalchemy_url(self) -> str:
        """
        Async SQLAlchemy URL for the store.

        ``DATABASE_URL`` wins when set; plain ``postgres://`` and
        ``postgresql://`` schemes are pointed at the asyncpg driver.
        """
        if self.database_url:
            url = self.database_url
            for prefix in ("postgres://", "postgresql://"):
                if url.startswith(prefix):
                    return "postgresql+asyncpg://" + url[len(prefix):]
            return url
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read from the environment once."""
    return Settings()
