"""
Query Executor

Runs one search strategy against Google Books with bounded retry and
exponential backoff. Every failure mode ends in None; nothing raised by
the client escapes.
"""

import asyncio
from typing import Awaitable, Callable, Optional

from loguru import logger as default_logger

from bookmatch.exceptions import (
    BookMatchError,
    ClientAPIError,
    EmptyResultError,
    MalformedResponseError,
)
from bookmatch.identification.google_books import GoogleBooksClient, build_query
from bookmatch.identification.models import BookCandidate, SearchQuery, SearchStrategy
from bookmatch.identification.retry import RetryPolicy, RetryState


SleepFunc = Callable[[float], Awaitable[None]]


class QueryExecutor:
    """
    Execute a single strategy with retries.
    
    Retried: HTTP 429, 503, any 5xx, network failures.
    Not retried: other HTTP errors, empty results, malformed payloads.
    
    Usage:
        executor = QueryExecutor(GoogleBooksClient())
        candidates = await executor.execute(
            SearchStrategy.TITLE_ONLY, SearchQuery(title="Dune"),
        )
    """
    
    def __init__(
        self,
        client: GoogleBooksClient,
        policy: Optional[RetryPolicy] = None,
        sleep: SleepFunc = asyncio.sleep,
        logger=None,
    ):
        """
        Initialize executor.
        
        Args:
            client: Google Books client
            policy: Retry policy (3 attempts, 2s base by default)
            sleep: Coroutine used to wait between attempts
            logger: loguru logger to bind context onto
        """
        self.client = client
        self.policy = policy or RetryPolicy()
        self.sleep = sleep
        self.logger = (logger or default_logger).bind(component="executor")
    
    async def execute(
        self,
        strategy: SearchStrategy,
        query: SearchQuery,
    ) -> Optional[list[BookCandidate]]:
        """
        Run one strategy.
        
        Args:
            strategy: Strategy being executed (for logging)
            query: Title/author to search for
            
        Returns:
            Non-empty candidate list, or None
        """
        if not query.title.strip():
            return None
        
        log = self.logger.bind(strategy=strategy.value)
        state = RetryState(policy=self.policy)
        search_query = build_query(query.title, query.author)
        
        while state.can_attempt:
            attempt = state.begin_attempt()
            log.bind(event="strategy.start", attempt=attempt).info(
                f"Strategy [{strategy.value}] attempt {attempt}/{self.policy.max_attempts}: {search_query}"
            )
            
            try:
                candidates = await self.client.search(query.title, query.author or None)
            except BookMatchError as e:
                if not state.record_failure(e):
                    break
                log.bind(
                    event="strategy.retry",
                    attempt=attempt,
                    status=e.status_code,
                    delay=state.next_delay,
                ).warning(f"{e.message} - waiting {state.next_delay:g}s before retry")
                await self.sleep(state.next_delay)
                continue
            
            state.record_success()
            return candidates
        
        self._log_outcome(log, state)
        return None
    
    def _log_outcome(self, log, state: RetryState) -> None:
        """Log why a strategy produced nothing."""
        error = state.last_error
        
        if isinstance(error, EmptyResultError):
            log.bind(event="strategy.empty").info("No results")
        elif isinstance(error, ClientAPIError):
            log.bind(event="strategy.client_error", status=error.status_code).warning(error.message)
        elif isinstance(error, MalformedResponseError):
            log.bind(event="strategy.malformed").error(error.message)
        elif error is not None:
            log.bind(
                event="strategy.failed",
                attempt=state.attempt,
                status=error.status_code,
            ).error(f"Failed after {state.attempt} attempts: {error.message}")
