"""
Pytest configuration and fixtures for BookMatch tests.
"""

from typing import Any, Callable, Optional

import httpx
import pytest
from loguru import logger

from bookmatch.config import Settings
from bookmatch.identification.google_books import GoogleBooksClient
from bookmatch.identification.models import BookCandidate


# =============================================================================
# Volume Fixtures
# =============================================================================

def make_volume(
    title: str = "",
    authors: Optional[list[str]] = None,
    isbn_13: Optional[str] = None,
    isbn_10: Optional[str] = None,
    thumbnail: Optional[str] = None,
    description: Optional[str] = None,
    language: Optional[str] = None,
    categories: Optional[list[str]] = None,
    **extra: Any,
) -> dict:
    """Build a Google Books volume item."""
    info: dict[str, Any] = {"title": title}
    if authors is not None:
        info["authors"] = authors
    identifiers = []
    if isbn_13:
        identifiers.append({"type": "ISBN_13", "identifier": isbn_13})
    if isbn_10:
        identifiers.append({"type": "ISBN_10", "identifier": isbn_10})
    if identifiers:
        info["industryIdentifiers"] = identifiers
    if thumbnail:
        info["imageLinks"] = {"thumbnail": thumbnail}
    if description is not None:
        info["description"] = description
    if language:
        info["language"] = language
    if categories is not None:
        info["categories"] = categories
    info.update(extra)
    return {"id": f"vol-{abs(hash(title)) % 10000}", "volumeInfo": info}


def make_candidate(**kwargs: Any) -> BookCandidate:
    """Parsed candidate built from make_volume arguments."""
    return BookCandidate.from_volume(make_volume(**kwargs))


@pytest.fixture
def volume_factory() -> Callable[..., dict]:
    return make_volume


@pytest.fixture
def candidate_factory() -> Callable[..., BookCandidate]:
    return make_candidate


@pytest.fixture
def harry_potter_volume() -> dict:
    """Sample close match with ISBN and cover."""
    return make_volume(
        title="Harry Potter and the Philosopher's Stone",
        authors=["J.K. Rowling"],
        isbn_13="9780747532699",
        isbn_10="0747532699",
        thumbnail="http://books.google.com/books/content?id=hp1&printsec=frontcover",
        description="Harry Potter has never even heard of Hogwarts when the letters start "
                    "dropping on the doormat at number four, Privet Drive.",
        language="en",
        categories=["Juvenile Fiction"],
        publisher="Bloomsbury",
        publishedDate="1997-06-26",
        pageCount=223,
    )


# =============================================================================
# HTTP Fixtures
# =============================================================================

class FakeGoogleBooks:
    """
    Scripted Google Books endpoint for httpx.MockTransport.
    
    Each handler receives the request's "q" parameter and returns
    either an httpx.Response or an exception instance to raise.
    """
    
    def __init__(self, handler: Callable[[str, int], Any]):
        self.handler = handler
        self.queries: list[str] = []
        self.requests: list[httpx.Request] = []
    
    def __call__(self, request: httpx.Request) -> httpx.Response:
        q = request.url.params.get("q", "")
        self.queries.append(q)
        self.requests.append(request)
        outcome = self.handler(q, self.queries.count(q))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome
    
    def count(self, prefix: str) -> int:
        """Number of requests whose query starts with prefix."""
        return sum(1 for q in self.queries if q.startswith(prefix))


def items_response(*items: dict) -> httpx.Response:
    return httpx.Response(200, json={"totalItems": len(items), "items": list(items)})


def empty_response() -> httpx.Response:
    return httpx.Response(200, json={"totalItems": 0})


@pytest.fixture
async def fake_api_factory():
    """Build GoogleBooksClients wired to FakeGoogleBooks handlers; closes them afterwards."""
    http_clients: list[httpx.AsyncClient] = []
    
    def _build(handler: Callable[[str, int], Any]) -> tuple[GoogleBooksClient, FakeGoogleBooks]:
        fake = FakeGoogleBooks(handler)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake))
        http_clients.append(http_client)
        client = GoogleBooksClient(http_client=http_client, timeout=1.0)
        return client, fake
    
    yield _build
    
    for http_client in http_clients:
        await http_client.aclose()


@pytest.fixture
def test_settings() -> Settings:
    """Settings configured for testing."""
    return Settings(google_books_api_key=None, request_timeout=1.0)


# =============================================================================
# Timing and Logging Fixtures
# =============================================================================

class RecordingSleep:
    """Stand-in for asyncio.sleep that records delays."""
    
    def __init__(self):
        self.delays: list[float] = []
    
    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def log_records():
    """Capture loguru records emitted during a test."""
    records: list[dict] = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(sink_id)


def events(records: list[dict]) -> list[str]:
    """Event names from captured records, in order."""
    return [r["extra"]["event"] for r in records if "event" in r["extra"]]
