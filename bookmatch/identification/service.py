"""
Book Search Service

Resolves a user supplied title/author into one MatchResult by trying
search strategies in priority order:

1. title+author  - accepted at confidence >= 40
2. title-only    - accepted if the volume's author resembles the query
                   author (> 0.3) or confidence >= 70; always accepted
                   when no author was given
3. broad-title   - first three words of a long title (> 10 chars);
                   accepted if the volume title resembles the full title
                   (> 0.6)

Returns None when no strategy produces an acceptable match. API and
network failures never escape resolve().
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

import httpx
from loguru import logger as default_logger

from bookmatch.config import MatchThresholds, Settings, get_settings
from bookmatch.identification.candidate_ranker import CandidateRanker
from bookmatch.identification.confidence import ConfidenceScorer
from bookmatch.identification.executor import QueryExecutor, SleepFunc
from bookmatch.identification.google_books import GoogleBooksClient
from bookmatch.identification.language import LanguagePreferenceResolver
from bookmatch.identification.models import (
    BookCandidate,
    MatchResult,
    SearchQuery,
    SearchStrategy,
)
from bookmatch.identification.retry import RetryPolicy
from bookmatch.identification.series import extract_series
from bookmatch.identification.taxonomy import infer_age_range, map_genre
from bookmatch.matching.author_matcher import AuthorMatcher
from bookmatch.matching.similarity import StringSimilarity
from bookmatch.matching.text_normalizer import TextNormalizer


@dataclass
class StrategyOutcome:
    """Best candidate of one strategy with its confidence."""
    
    strategy: SearchStrategy
    query: SearchQuery
    candidate: BookCandidate
    confidence: int


class BookSearchService:
    """
    Multi-strategy book lookup against Google Books.
    
    Usage:
        async with BookSearchService() as service:
            result = await service.resolve("הארי פוטר ואבן החכמים", "ג'יי קיי רולינג")
            if result:
                print(result.title, result.confidence)
    """
    
    def __init__(
        self,
        client: Optional[GoogleBooksClient] = None,
        settings: Optional[Settings] = None,
        thresholds: Optional[MatchThresholds] = None,
        sleep: SleepFunc = asyncio.sleep,
        http_client: Optional[httpx.AsyncClient] = None,
        logger=None,
    ):
        """
        Initialize service.
        
        Args:
            client: Google Books client (built from settings if omitted)
            settings: Settings (environment settings if omitted)
            thresholds: Acceptance thresholds (settings.thresholds if omitted)
            sleep: Coroutine used for retry backoff
            http_client: Shared AsyncClient for the default Google Books client
            logger: loguru logger to bind context onto
        """
        self.settings = settings or get_settings()
        self.thresholds = thresholds or self.settings.thresholds
        self.logger = (logger or default_logger).bind(component="search")
        
        self.client = client or GoogleBooksClient(
            api_key=self.settings.google_books_api_key,
            base_url=self.settings.google_books_base_url,
            languages=self.settings.languages,
            max_results=self.settings.max_results,
            timeout=self.settings.request_timeout,
            http_client=http_client,
        )
        self.executor = QueryExecutor(
            self.client,
            policy=RetryPolicy(
                max_attempts=self.settings.max_attempts,
                backoff_base=self.settings.backoff_base,
            ),
            sleep=sleep,
            logger=logger,
        )
        self.ranker = CandidateRanker(preferred_languages=self.settings.languages)
        self.resolver = LanguagePreferenceResolver(
            author_keep_similarity=self.thresholds.author_keep_similarity,
            logger=logger,
        )
    
    async def resolve(self, title: str, author: Optional[str] = None) -> Optional[MatchResult]:
        """
        Resolve a book reference.
        
        Args:
            title: Book title as typed or detected
            author: Author name (optional)
            
        Returns:
            MatchResult, or None if nothing sufficiently confident was found
        """
        query = SearchQuery(title=(title or "").strip(), author=(author or "").strip())
        if not query.title:
            return None
        
        t = self.thresholds
        log = self.logger.bind(title=query.title, author=query.author)
        log.info(f"Searching for book: {query.title!r} by {query.author!r}")
        
        # 1. Title and author
        if query.has_author:
            outcome = await self._run(SearchStrategy.TITLE_AUTHOR, query)
            if outcome and outcome.confidence >= t.title_author_min_confidence:
                result = self._accept(outcome, query, log)
                if result:
                    return result
            elif outcome:
                self._reject(outcome, log, f"confidence {outcome.confidence} < {t.title_author_min_confidence}")
        
        # 2. Title only (author may be misspelled or in another language)
        outcome = await self._run(SearchStrategy.TITLE_ONLY, SearchQuery(title=query.title))
        if outcome:
            author_sim = AuthorMatcher.similarity(outcome.candidate.primary_author, query.author)
            if (
                not query.has_author
                or author_sim > t.title_only_min_author_similarity
                or outcome.confidence >= t.title_only_min_confidence
            ):
                result = self._accept(outcome, query, log, author_similarity=author_sim)
                if result:
                    return result
            else:
                self._reject(outcome, log, f"author similarity {author_sim:.2f}, confidence {outcome.confidence}")
        
        # 3. Broad title
        if len(query.title) > t.broad_title_min_length:
            broad = query.broadened(t.broad_title_tokens)
            outcome = await self._run(SearchStrategy.BROAD_TITLE, broad)
            if outcome:
                title_sim = StringSimilarity.ratio(
                    TextNormalizer.normalize(outcome.candidate.title),
                    TextNormalizer.normalize(query.title),
                )
                if title_sim > t.broad_title_min_similarity:
                    result = self._accept(outcome, query, log, title_similarity=title_sim)
                    if result:
                        return result
                else:
                    self._reject(outcome, log, f"title similarity {title_sim:.2f}")
        
        log.bind(event="resolve.not_found").info(f"No results found for: {query.title!r}")
        return None
    
    async def _run(self, strategy: SearchStrategy, query: SearchQuery) -> Optional[StrategyOutcome]:
        """Execute one strategy and pick its best candidate; faults become None."""
        try:
            candidates = await self.executor.execute(strategy, query)
            if not candidates:
                return None
            
            best = self.ranker.best_match(candidates, query.title, query.author)
            if best is None:
                return None
            
            confidence = ConfidenceScorer.score(best.candidate, query.title, query.author)
        except Exception:
            self.logger.bind(event="strategy.failed", strategy=strategy.value).exception(
                f"Strategy [{strategy.value}] raised unexpectedly"
            )
            return None
        
        self.logger.bind(
            event="strategy.match",
            strategy=strategy.value,
            score=best.score,
            confidence=confidence,
            volume_id=best.candidate.google_books_id,
            components=best.components.to_dict(),
        ).info(f"Found: {best.candidate.title!r} by {best.candidate.primary_author!r} (confidence: {confidence})")
        
        return StrategyOutcome(
            strategy=strategy,
            query=query,
            candidate=best.candidate,
            confidence=confidence,
        )
    
    def _accept(self, outcome: StrategyOutcome, query: SearchQuery, log, **details) -> Optional[MatchResult]:
        """Build the record for an accepted outcome; a fault while building counts as no result."""
        try:
            result = self._build_result(outcome, query)
        except Exception:
            self.logger.bind(event="strategy.failed", strategy=outcome.strategy.value).exception(
                f"Could not build result from {outcome.candidate.title!r}"
            )
            return None
        
        log.bind(
            event="resolve.accepted",
            strategy=outcome.strategy.value,
            confidence=outcome.confidence,
            **details,
        ).info(f"Accepted via {outcome.strategy.value}")
        return result
    
    def _reject(self, outcome: StrategyOutcome, log, reason: str) -> None:
        log.bind(
            event="resolve.rejected",
            strategy=outcome.strategy.value,
            confidence=outcome.confidence,
        ).info(f"Rejected {outcome.candidate.title!r} from {outcome.strategy.value}: {reason}")
    
    def _build_result(self, outcome: StrategyOutcome, query: SearchQuery) -> MatchResult:
        """Assemble the record; title/author resolved against the user's query."""
        candidate = outcome.candidate
        series, series_number = extract_series(candidate)
        genre = map_genre(candidate.categories)
        age_range = infer_age_range(candidate)
        
        return MatchResult(
            title=self.resolver.resolve_title(query.title, candidate.title),
            author=self.resolver.resolve_author(query.author, candidate.primary_author),
            confidence=outcome.confidence,
            publisher=candidate.publisher,
            publish_year=candidate.publish_year,
            pages=candidate.page_count,
            description=candidate.description,
            cover_image_url=candidate.cover_url,
            isbn=candidate.isbn,
            language=candidate.language,
            genre=genre.value if genre else None,
            age_range=age_range.value if age_range else None,
            series=series,
            series_number=series_number,
            strategy=outcome.strategy,
        )
    
    async def close(self):
        """Close HTTP client."""
        await self.client.close()
    
    async def __aenter__(self) -> "BookSearchService":
        return self
    
    async def __aexit__(self, *exc_info) -> None:
        await self.close()
