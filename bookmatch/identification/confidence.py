"""
Confidence scoring for a chosen candidate.

Independent of the ranking score; produces an integer in [0, 100].
"""

import math
from typing import Optional

from bookmatch.identification.models import BookCandidate
from bookmatch.matching.similarity import StringSimilarity
from bookmatch.matching.text_normalizer import TextNormalizer


class ConfidenceScorer:
    """
    Estimate how likely a candidate is the queried book.
    
    Title contributes up to 50, author up to 30 (flat 15 without a query
    author), and identifier/cover/description up to 20 more.
    """
    
    TITLE_EXACT = 50
    TITLE_CONTAINS = 35
    TITLE_SIMILARITY_WEIGHT = 30
    
    AUTHOR_EXACT = 30
    AUTHOR_CONTAINS = 20
    AUTHOR_SIMILARITY_WEIGHT = 15
    NO_AUTHOR_QUERY = 15
    
    IDENTIFIER_BONUS = 10
    COVER_BONUS = 5
    DESCRIPTION_BONUS = 5
    
    @classmethod
    def score(cls, candidate: BookCandidate, title: str, author: Optional[str] = None) -> int:
        """
        Compute confidence.
        
        Args:
            candidate: Chosen volume
            title: Query title
            author: Query author (optional)
            
        Returns:
            Confidence 0-100
        """
        confidence = cls._title_score(
            TextNormalizer.normalize(candidate.title),
            TextNormalizer.normalize(title),
        )
        
        if author:
            cand_author = TextNormalizer.normalize(candidate.primary_author)
            if cand_author:
                confidence += cls._author_score(cand_author, TextNormalizer.normalize(author))
        else:
            confidence += cls.NO_AUTHOR_QUERY
        
        if candidate.has_identifier:
            confidence += cls.IDENTIFIER_BONUS
        if candidate.has_thumbnail:
            confidence += cls.COVER_BONUS
        if candidate.description:
            confidence += cls.DESCRIPTION_BONUS
        
        # Round half up, then clamp
        return max(0, min(100, math.floor(confidence + 0.5)))
    
    @classmethod
    def _title_score(cls, cand_title: str, query_title: str) -> float:
        if cand_title and cand_title == query_title:
            return cls.TITLE_EXACT
        if cand_title and query_title and (cand_title in query_title or query_title in cand_title):
            return cls.TITLE_CONTAINS
        return StringSimilarity.ratio(cand_title, query_title) * cls.TITLE_SIMILARITY_WEIGHT
    
    @classmethod
    def _author_score(cls, cand_author: str, query_author: str) -> float:
        if cand_author == query_author:
            return cls.AUTHOR_EXACT
        if query_author and (cand_author in query_author or query_author in cand_author):
            return cls.AUTHOR_CONTAINS
        return StringSimilarity.ratio(cand_author, query_author) * cls.AUTHOR_SIMILARITY_WEIGHT
