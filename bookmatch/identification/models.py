"""
Data model for book identification.

- SearchQuery: the caller's title/author pair
- SearchStrategy: query strategies in priority order
- BookCandidate: one parsed Google Books volume
- MatchResult: the resolved bibliographic record
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from loguru import logger


class SearchStrategy(str, Enum):
    """Query strategies, declared in the order they are tried."""
    
    TITLE_AUTHOR = "title+author"
    TITLE_ONLY = "title-only"
    BROAD_TITLE = "broad-title"


@dataclass(frozen=True)
class SearchQuery:
    """User supplied book reference."""
    
    title: str
    author: str = ""
    
    @property
    def has_author(self) -> bool:
        return bool(self.author)
    
    def broadened(self, tokens: int = 3) -> "SearchQuery":
        """Title cut down to its first whitespace-separated tokens, no author."""
        return SearchQuery(title=" ".join(self.title.split()[:tokens]))


@dataclass
class BookCandidate:
    """
    One volume from a Google Books search response.
    
    Optional fields are None when the API omits them, empty lists for
    list-valued fields.
    """
    
    title: str = ""
    authors: list[str] = field(default_factory=list)
    subtitle: Optional[str] = None
    publisher: Optional[str] = None
    published_date: Optional[str] = None
    page_count: Optional[int] = None
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    small_thumbnail_url: Optional[str] = None
    isbn_10: Optional[str] = None
    isbn_13: Optional[str] = None
    identifiers: list[dict] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    language: Optional[str] = None
    maturity_rating: Optional[str] = None
    series_info: Optional[dict] = None
    google_books_id: Optional[str] = None
    
    @property
    def primary_author(self) -> str:
        """First listed author, empty string if none."""
        if self.authors:
            return self.authors[0]
        return ""
    
    @property
    def cover_url(self) -> Optional[str]:
        """Thumbnail, falling back to the small thumbnail."""
        return self.thumbnail_url or self.small_thumbnail_url
    
    @property
    def has_thumbnail(self) -> bool:
        """Full-size thumbnail present (the small one alone earns no bonus)."""
        return self.thumbnail_url is not None
    
    @property
    def isbn(self) -> Optional[str]:
        """Primary ISBN (prefer ISBN-13)."""
        return self.isbn_13 or self.isbn_10
    
    @property
    def has_identifier(self) -> bool:
        return len(self.identifiers) > 0
    
    @property
    def publish_year(self) -> Optional[int]:
        """Year from the leading digits of publishedDate."""
        if not self.published_date:
            return None
        year = self.published_date[:4]
        if len(year) == 4 and year.isdigit():
            return int(year)
        return None
    
    @classmethod
    def from_volume(cls, item: dict[str, Any]) -> "BookCandidate":
        """
        Parse a raw volume item.
        
        Args:
            item: One entry of the response "items" list
            
        Returns:
            BookCandidate
            
        Raises:
            TypeError, AttributeError: item is not shaped like a volume
        """
        info = item.get("volumeInfo") or {}
        
        # ISBNs
        identifiers = [i for i in info.get("industryIdentifiers") or [] if isinstance(i, dict)]
        isbn_10 = None
        isbn_13 = None
        for identifier in identifiers:
            if identifier.get("type") == "ISBN_13" and isbn_13 is None:
                isbn_13 = _text(identifier.get("identifier"))
            elif identifier.get("type") == "ISBN_10" and isbn_10 is None:
                isbn_10 = _text(identifier.get("identifier"))
        
        # Cover images
        images = info.get("imageLinks") or {}
        thumbnail = _https(_text(images.get("thumbnail")))
        small_thumbnail = _https(_text(images.get("smallThumbnail")))
        
        page_count = info.get("pageCount")
        if isinstance(page_count, bool) or not isinstance(page_count, int) or page_count <= 0:
            page_count = None
        
        return cls(
            title=_text(info.get("title")) or "",
            authors=[a for a in info.get("authors") or [] if isinstance(a, str)],
            subtitle=_text(info.get("subtitle")),
            publisher=_text(info.get("publisher")),
            published_date=_text(info.get("publishedDate")),
            page_count=page_count,
            description=_text(info.get("description")),
            thumbnail_url=thumbnail,
            small_thumbnail_url=small_thumbnail,
            isbn_10=isbn_10,
            isbn_13=isbn_13,
            identifiers=identifiers,
            categories=[c for c in info.get("categories") or [] if isinstance(c, str)],
            language=_text(info.get("language")),
            maturity_rating=_text(info.get("maturityRating")),
            series_info=info.get("seriesInfo") if isinstance(info.get("seriesInfo"), dict) else None,
            google_books_id=_text(item.get("id")),
        )


def _text(value: Any) -> Optional[str]:
    """Non-empty string values only; anything else counts as missing."""
    if isinstance(value, str) and value:
        return value
    return None


def _https(url: Optional[str]) -> Optional[str]:
    """Upgrade http:// image links."""
    if url and url.startswith("http://"):
        return "https://" + url[len("http://"):]
    return url or None


@dataclass
class MatchResult:
    """
    Resolved book details.
    
    Contains the language-resolved title/author, metadata taken from the
    chosen volume, and a 0-100 confidence.
    """
    
    title: str
    author: str
    confidence: int
    
    # Publication info
    publisher: Optional[str] = None
    publish_year: Optional[int] = None
    pages: Optional[int] = None
    description: Optional[str] = None
    cover_image_url: Optional[str] = None
    isbn: Optional[str] = None
    language: Optional[str] = None
    
    # Classification
    genre: Optional[str] = None
    age_range: Optional[str] = None
    
    # Series
    series: Optional[str] = None
    series_number: Optional[int] = None
    
    # Strategy that produced the match
    strategy: Optional[SearchStrategy] = None
    
    def __post_init__(self):
        if not 0 <= self.confidence <= 100:
            logger.warning(f"Confidence {self.confidence} out of range, clamping")
            self.confidence = max(0, min(100, self.confidence))
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "title": self.title,
            "author": self.author,
            "publisher": self.publisher,
            "publish_year": self.publish_year,
            "pages": self.pages,
            "description": self.description,
            "cover_image_url": self.cover_image_url,
            "isbn": self.isbn,
            "genre": self.genre,
            "age_range": self.age_range,
            "language": self.language,
            "confidence": self.confidence,
            "series": self.series,
            "series_number": self.series_number,
            "strategy": self.strategy.value if self.strategy else None,
        }
