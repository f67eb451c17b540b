"""
BookMatch

Fills in book details for a personal library catalog from a noisy
title/author reference, with a confidence estimate.
"""

__version__ = "0.1.0"

from bookmatch.config import MatchThresholds, Settings, get_settings
from bookmatch.identification import BookSearchService, MatchResult
from bookmatch.logging_setup import configure_logging

__all__ = [
    "BookSearchService",
    "MatchResult",
    "MatchThresholds",
    "Settings",
    "get_settings",
    "configure_logging",
]
