"""
Configuration for BookMatch.

Provides:
- Settings loaded from environment variables
- Match thresholds used by the search strategies
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional


# =============================================================================
# Thresholds
# =============================================================================

@dataclass(frozen=True)
class MatchThresholds:
    """
    Acceptance and scoring thresholds.
    
    Values come from empirical tuning against real catalog lookups.
    They are kept together so they can be adjusted without touching
    the matching code.
    """
    
    # Strategy acceptance
    title_author_min_confidence: int = 40
    title_only_min_author_similarity: float = 0.3
    title_only_min_confidence: int = 70
    broad_title_min_similarity: float = 0.6
    
    # Broad-title strategy
    broad_title_min_length: int = 10
    broad_title_tokens: int = 3
    
    # Language preference
    author_keep_similarity: float = 0.5


# =============================================================================
# Settings
# =============================================================================

@dataclass
class Settings:
    """Application settings loaded from environment."""
    
    # External API
    google_books_api_key: Optional[str] = None
    google_books_base_url: str = "https://www.googleapis.com/books/v1/volumes"
    max_results: int = 10
    languages: tuple[str, ...] = ("he", "en")
    
    # Transport
    request_timeout: float = 10.0
    max_attempts: int = 3
    backoff_base: float = 2.0
    
    # Logging
    log_level: str = "INFO"
    
    thresholds: MatchThresholds = field(default_factory=MatchThresholds)
    
    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        languages = os.getenv("BOOKMATCH_LANGUAGES", ",".join(cls.languages))
        return cls(
            google_books_api_key=os.getenv("GOOGLE_BOOKS_API_KEY") or None,
            google_books_base_url=os.getenv("GOOGLE_BOOKS_BASE_URL", cls.google_books_base_url),
            max_results=int(os.getenv("BOOKMATCH_MAX_RESULTS", cls.max_results)),
            languages=tuple(code.strip() for code in languages.split(",") if code.strip()),
            request_timeout=float(os.getenv("BOOKMATCH_REQUEST_TIMEOUT", cls.request_timeout)),
            max_attempts=int(os.getenv("BOOKMATCH_MAX_ATTEMPTS", cls.max_attempts)),
            backoff_base=float(os.getenv("BOOKMATCH_BACKOFF_BASE", cls.backoff_base)),
            log_level=os.getenv("BOOKMATCH_LOG_LEVEL", cls.log_level).upper(),
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings.from_env()
