"""
Candidate Ranker for BookMatch

Picks the best volume out of one search response with an additive
point rubric:
- Title: exact (60), containment (50), or similarity tiers (45/30/15)
- Author: similarity tiers (30/25/15/5), or 5 when only the volume has one
- Data quality: identifier (10), cover (5), long description (5)
- Preferred language (3)

Ties keep the earlier candidate, so API relevance order breaks them.
"""

from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from bookmatch.identification.models import BookCandidate
from bookmatch.matching.author_matcher import AuthorMatcher
from bookmatch.matching.similarity import StringSimilarity
from bookmatch.matching.text_normalizer import TextNormalizer


@dataclass
class ScoringComponents:
    """Breakdown of scoring components for transparency."""
    
    title_points: int = 0
    author_points: int = 0
    quality_points: int = 0
    language_points: int = 0
    
    @property
    def total(self) -> int:
        return self.title_points + self.author_points + self.quality_points + self.language_points
    
    def to_dict(self) -> dict:
        return {
            "title_points": self.title_points,
            "author_points": self.author_points,
            "quality_points": self.quality_points,
            "language_points": self.language_points,
            "total": self.total,
        }


@dataclass
class RankedCandidate:
    """Candidate with its ranking score."""
    
    candidate: BookCandidate
    score: int
    components: ScoringComponents = field(default_factory=ScoringComponents)


class CandidateRanker:
    """
    Rank search candidates against the query that produced them.
    
    Usage:
        ranker = CandidateRanker()
        best = ranker.best_match(candidates, "Dune", "Frank Herbert")
    """
    
    # Title points
    TITLE_EXACT = 60
    TITLE_CONTAINS = 50
    TITLE_TIERS = ((0.8, 45), (0.6, 30), (0.4, 15))
    
    # Author points
    AUTHOR_TIERS = ((0.9, 30), (0.7, 25), (0.5, 15), (0.3, 5))
    AUTHOR_PRESENT = 5
    
    # Data quality points
    IDENTIFIER_BONUS = 10
    COVER_BONUS = 5
    DESCRIPTION_BONUS = 5
    DESCRIPTION_MIN_LENGTH = 100
    LANGUAGE_BONUS = 3
    
    def __init__(self, preferred_languages: tuple[str, ...] = ("he", "en")):
        self.preferred_languages = tuple(preferred_languages)
    
    def rank(
        self,
        candidates: list[BookCandidate],
        title: str,
        author: Optional[str] = None,
    ) -> list[RankedCandidate]:
        """
        Score every candidate.
        
        Args:
            candidates: Parsed volumes in API order
            title: Query title
            author: Query author (optional)
            
        Returns:
            RankedCandidates, highest score first (stable)
        """
        norm_title = TextNormalizer.normalize(title)
        
        ranked = [
            self._score_candidate(candidate, norm_title, author or "")
            for candidate in candidates
        ]
        ranked.sort(key=lambda r: r.score, reverse=True)
        return ranked
    
    def best_match(
        self,
        candidates: list[BookCandidate],
        title: str,
        author: Optional[str] = None,
    ) -> Optional[RankedCandidate]:
        """Highest scoring candidate, first one on ties."""
        ranked = self.rank(candidates, title, author)
        if not ranked:
            return None
        
        best = ranked[0]
        logger.debug(f"Best match score: {best.score} ({best.candidate.title!r})")
        return best
    
    def _score_candidate(
        self,
        candidate: BookCandidate,
        norm_query_title: str,
        query_author: str,
    ) -> RankedCandidate:
        components = ScoringComponents()
        
        # 1. Title
        norm_title = TextNormalizer.normalize(candidate.title)
        if norm_title and norm_title == norm_query_title:
            components.title_points = self.TITLE_EXACT
        elif norm_title and norm_query_title and (
            norm_query_title in norm_title or norm_title in norm_query_title
        ):
            components.title_points = self.TITLE_CONTAINS
        else:
            title_sim = StringSimilarity.ratio(norm_title, norm_query_title)
            components.title_points = self._tier_points(title_sim, self.TITLE_TIERS)
        
        # 2. Author
        cand_author = candidate.primary_author
        if query_author and cand_author:
            author_sim = AuthorMatcher.similarity(cand_author, query_author)
            components.author_points = self._tier_points(author_sim, self.AUTHOR_TIERS)
        elif not query_author and cand_author:
            components.author_points = self.AUTHOR_PRESENT
        
        # 3. Data quality
        if candidate.has_identifier:
            components.quality_points += self.IDENTIFIER_BONUS
        if candidate.has_thumbnail:
            components.quality_points += self.COVER_BONUS
        if candidate.description and len(candidate.description) > self.DESCRIPTION_MIN_LENGTH:
            components.quality_points += self.DESCRIPTION_BONUS
        
        # 4. Language
        if candidate.language in self.preferred_languages:
            components.language_points = self.LANGUAGE_BONUS
        
        return RankedCandidate(
            candidate=candidate,
            score=components.total,
            components=components,
        )
    
    @staticmethod
    def _tier_points(similarity: float, tiers: tuple[tuple[float, int], ...]) -> int:
        """Points of the first tier whose threshold the similarity exceeds."""
        for threshold, points in tiers:
            if similarity > threshold:
                return points
        return 0
