"""
Google Books API Client

Issues one volume search per call. Failures are raised as BookMatch
errors; retrying them is the executor's job.
"""

from typing import Optional

import httpx
from loguru import logger

from bookmatch.exceptions import (
    ClientAPIError,
    EmptyResultError,
    MalformedResponseError,
    TransientAPIError,
)
from bookmatch.identification.models import BookCandidate
from bookmatch.matching.text_normalizer import TextNormalizer


# Statuses retried in addition to every 5xx
RETRYABLE_STATUSES = {429, 503}


def build_query(title: str, author: Optional[str] = None) -> str:
    """
    Build a field-scoped query from normalized title/author.
    
    Args:
        title: Book title
        author: Author name (optional)
        
    Returns:
        Query such as "intitle:dune+inauthor:frank herbert"
    """
    query = f"intitle:{TextNormalizer.normalize(title)}"
    normalized_author = TextNormalizer.normalize(author) if author else ""
    if normalized_author:
        query += f"+inauthor:{normalized_author}"
    return query


class GoogleBooksClient:
    """
    Client for the Google Books volumes endpoint.
    
    Rate limit: 1000 requests/day without API key.
    """
    
    BASE_URL = "https://www.googleapis.com/books/v1/volumes"
    
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        languages: tuple[str, ...] = ("he", "en"),
        max_results: int = 10,
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize client.
        
        Args:
            api_key: Optional API key
            base_url: Volumes endpoint override
            languages: Language codes sent as langRestrict
            max_results: Items requested per search
            timeout: Per-request deadline in seconds
            http_client: Shared AsyncClient (not closed by this client)
        """
        self.api_key = api_key
        self.base_url = base_url or self.BASE_URL
        self.languages = tuple(languages)
        self.max_results = max_results
        self.timeout = timeout
        self._client = http_client
        self._owns_client = http_client is None
        
        if not self.api_key:
            logger.debug("No Google Books API key provided. Rate limits will be lower.")
    
    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client
    
    async def search(self, title: str, author: Optional[str] = None) -> list[BookCandidate]:
        """
        Search volumes by title and optional author.
        
        Args:
            title: Book title (normalized before querying)
            author: Author name (optional)
            
        Returns:
            Parsed candidates, never empty
            
        Raises:
            TransientAPIError: 429, 5xx or network failure
            ClientAPIError: Any other non-2xx status
            MalformedResponseError: Body is not a volumes payload
            EmptyResultError: No items matched
        """
        client = await self._get_client()
        
        params = {
            "q": build_query(title, author),
            "maxResults": self.max_results,
            "langRestrict": ",".join(self.languages),
        }
        if self.api_key:
            params["key"] = self.api_key
        
        try:
            response = await client.get(self.base_url, params=params, timeout=self.timeout)
        except httpx.TransportError as e:
            raise TransientAPIError(f"Network error: {e.__class__.__name__}: {e}") from e
        
        status = response.status_code
        if status in RETRYABLE_STATUSES or status >= 500:
            raise TransientAPIError(f"Google Books API {status} error", status_code=status)
        if not response.is_success:
            raise ClientAPIError(f"Google Books API error: {status}", status_code=status)
        
        try:
            data = response.json()
            items = data.get("items") or []
            candidates = [BookCandidate.from_volume(item) for item in items]
        except (ValueError, TypeError, AttributeError) as e:
            raise MalformedResponseError(f"Unparseable Google Books response: {e}") from e
        
        if not candidates:
            raise EmptyResultError()
        
        return candidates
    
    async def close(self):
        """Close HTTP client."""
        if self._client and self._owns_client:
            await self._client.aclose()
        self._client = None
