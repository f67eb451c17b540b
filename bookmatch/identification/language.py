"""
Language preference between user input and API output.

Catalog users often type Hebrew while Google Books returns English
transliterations. Hebrew script wins on either side; otherwise the
fields are compared for similarity.
"""

from typing import Optional

from loguru import logger as default_logger

from bookmatch.matching.author_matcher import AuthorMatcher
from bookmatch.matching.text_normalizer import TextNormalizer


class LanguagePreferenceResolver:
    """Decide field by field whether to keep the query text or the API text."""
    
    def __init__(self, author_keep_similarity: float = 0.5, logger=None):
        """
        Args:
            author_keep_similarity: Same-script author similarity at or above
                which the query author is kept
            logger: loguru logger to bind context onto
        """
        self.author_keep_similarity = author_keep_similarity
        self.logger = (logger or default_logger).bind(component="language")
    
    def resolve_author(self, query_author: Optional[str], api_author: Optional[str]) -> str:
        """
        Pick the author to report.
        
        Args:
            query_author: Author typed by the user (may be empty)
            api_author: First author of the chosen volume (may be empty)
            
        Returns:
            Resolved author, empty string if neither side has one
        """
        if not query_author or not api_author:
            return query_author or api_author or ""
        
        query_hebrew = TextNormalizer.has_hebrew(query_author)
        api_hebrew = TextNormalizer.has_hebrew(api_author)
        log = self.logger.bind(event="language.author")
        
        if query_hebrew and not api_hebrew:
            log.debug(f"Preserving Hebrew author {query_author!r} over API {api_author!r}")
            return query_author
        
        if api_hebrew and not query_hebrew:
            log.debug(f"Using Hebrew API author {api_author!r} over input {query_author!r}")
            return api_author
        
        similarity = AuthorMatcher.similarity(query_author, api_author)
        if similarity < self.author_keep_similarity:
            log.debug(f"Using API author {api_author!r} instead of {query_author!r} (similarity {similarity:.0%})")
            return api_author
        
        log.debug(f"Preserving input author {query_author!r} (similarity {similarity:.0%})")
        return query_author
    
    def resolve_title(self, query_title: Optional[str], api_title: Optional[str]) -> str:
        """
        Pick the title to report.
        
        Args:
            query_title: Title typed by the user
            api_title: Title of the chosen volume
            
        Returns:
            Resolved title
        """
        log = self.logger.bind(event="language.title")
        
        if query_title and TextNormalizer.has_hebrew(query_title):
            log.debug(f"Preserving Hebrew title {query_title!r}")
            return query_title
        
        if api_title and TextNormalizer.has_hebrew(api_title):
            log.debug(f"Using Hebrew API title {api_title!r} over input {query_title!r}")
            return api_title
        
        return api_title or query_title or ""
