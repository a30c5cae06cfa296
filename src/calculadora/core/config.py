"""
Settings for the Calculadora API.

Values come from environment variables and are read once (cached), so
importing this module has no side effects. Tests clear the cache with
`get_settings.cache_clear()` after changing the environment.
"""

import functools
import os
from dataclasses import dataclass, field


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    """Application settings."""

    DATABASE_URL: str = "sqlite:///./calculadora.db"
    SECRET_KEY: str = "calculadora-dev-secret-key"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days
    BCRYPT_ROUNDS: int = 12
    CORS_ORIGINS: list[str] = field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://localhost:3000",
        ]
    )
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json | text
    DB_POOL_TIMEOUT: int = 30  # seconds waiting for a pooled connection
    DB_STATEMENT_TIMEOUT_MS: int = 15000  # PostgreSQL only


@functools.lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Unset variables fall back to the development defaults above.
    """
    defaults = Settings()
    cors = os.getenv("CORS_ORIGINS")

    return Settings(
        DATABASE_URL=os.getenv("DATABASE_URL", defaults.DATABASE_URL),
        SECRET_KEY=os.getenv("SECRET_KEY", defaults.SECRET_KEY),
        ALGORITHM=os.getenv("ALGORITHM", defaults.ALGORITHM),
        ACCESS_TOKEN_EXPIRE_MINUTES=int(
            os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", defaults.ACCESS_TOKEN_EXPIRE_MINUTES)
        ),
        BCRYPT_ROUNDS=int(os.getenv("BCRYPT_ROUNDS", defaults.BCRYPT_ROUNDS)),
        CORS_ORIGINS=_split_csv(cors) if cors else defaults.CORS_ORIGINS,
        LOG_LEVEL=os.getenv("LOG_LEVEL", defaults.LOG_LEVEL).upper(),
        LOG_FORMAT=os.getenv("LOG_FORMAT", defaults.LOG_FORMAT).lower(),
        DB_POOL_TIMEOUT=int(os.getenv("DB_POOL_TIMEOUT", defaults.DB_POOL_TIMEOUT)),
        DB_STATEMENT_TIMEOUT_MS=int(
            os.getenv("DB_STATEMENT_TIMEOUT_MS", defaults.DB_STATEMENT_TIMEOUT_MS)
        ),
    )
