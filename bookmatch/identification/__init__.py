"""
Book Identification Module

Resolves noisy title/author references against Google Books.
"""

from bookmatch.identification.models import (
    SearchQuery,
    SearchStrategy,
    BookCandidate,
    MatchResult,
)
from bookmatch.identification.google_books import GoogleBooksClient, build_query
from bookmatch.identification.retry import RetryPolicy, RetryState
from bookmatch.identification.executor import QueryExecutor
from bookmatch.identification.candidate_ranker import (
    CandidateRanker,
    RankedCandidate,
    ScoringComponents,
)
from bookmatch.identification.confidence import ConfidenceScorer
from bookmatch.identification.language import LanguagePreferenceResolver
from bookmatch.identification.taxonomy import (
    Genre,
    AgeRange,
    GENRE_TABLE,
    map_genre,
    infer_age_range,
)
from bookmatch.identification.series import extract_series, parse_series_number
from bookmatch.identification.service import BookSearchService

__all__ = [
    # Models
    "SearchQuery",
    "SearchStrategy",
    "BookCandidate",
    "MatchResult",
    # API access
    "GoogleBooksClient",
    "build_query",
    "RetryPolicy",
    "RetryState",
    "QueryExecutor",
    # Ranking
    "CandidateRanker",
    "RankedCandidate",
    "ScoringComponents",
    "ConfidenceScorer",
    # Post-processing
    "LanguagePreferenceResolver",
    "Genre",
    "AgeRange",
    "GENRE_TABLE",
    "map_genre",
    "infer_age_range",
    "extract_series",
    "parse_series_number",
    # Service
    "BookSearchService",
]
