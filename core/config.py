# core/config.py
import os
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass
class Settings:
    # Database
    database_url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///library.db"))

    # Google Books
    google_books_api_key: Optional[str] = field(default_factory=lambda: os.getenv("GOOGLE_BOOKS_API_KEY") or None)
    google_books_base_url: str = field(default_factory=lambda: os.getenv("GOOGLE_BOOKS_BASE_URL", "https://www.googleapis.com/books/v1"))
    google_books_timeout: float = field(default_factory=lambda: float(os.getenv("GOOGLE_BOOKS_TIMEOUT", "10")))

    # HTTP
    cors_origins: List[str] = field(default_factory=lambda: _split_origins(os.getenv("CORS_ORIGIN", "http://localhost:5173")))

    # Lending / sessions
    default_loan_days: int = field(default_factory=lambda: int(os.getenv("DEFAULT_LOAN_DAYS", "14")))
    session_ttl_days: int = field(default_factory=lambda: int(os.getenv("SESSION_TTL_DAYS", "30")))

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))


@lru_cache
def get_settings() -> Settings:
    """Settings built from the process environment, created once."""
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the root logger."""
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level.upper())
