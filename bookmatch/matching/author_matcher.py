"""
Author name matching.

Person names arrive in many shapes: initials or full first names,
surname only, transliterated spellings. Comparison is layered, and the
first applicable tier wins:

1. Identical after normalization              -> 1.0
2. One name contains the other                -> 0.85
3. Same surname (last token)                  -> 0.9
4. Similar surname (ratio > 0.8)              -> 0.8
5. Shared name parts, initials ignored        -> 0.6 + 0.15 per part
6. Plain string similarity of the full names
"""

from bookmatch.matching.similarity import StringSimilarity
from bookmatch.matching.text_normalizer import TextNormalizer


class AuthorMatcher:
    """Similarity specialised for person names."""
    
    EXACT_SCORE = 1.0
    CONTAINMENT_SCORE = 0.85
    SURNAME_SCORE = 0.9
    SIMILAR_SURNAME_SCORE = 0.8
    SIMILAR_SURNAME_THRESHOLD = 0.8
    
    # Shared name parts
    PART_BASE_SCORE = 0.6
    PART_BONUS = 0.15
    PART_SIMILARITY_THRESHOLD = 0.85
    MIN_PART_LENGTH = 2
    
    @classmethod
    def similarity(cls, author1: str, author2: str) -> float:
        """
        Compare two author names.
        
        Args:
            author1: First author name (raw)
            author2: Second author name (raw)
            
        Returns:
            Similarity score 0-1, 0 when either name is missing
        """
        if not author1 or not author2:
            return 0.0
        
        name1 = TextNormalizer.normalize(author1)
        name2 = TextNormalizer.normalize(author2)
        if not name1 or not name2:
            return 0.0
        
        if name1 == name2:
            return cls.EXACT_SCORE
        
        # "J.K. Rowling" vs "Rowling"
        if name1 in name2 or name2 in name1:
            return cls.CONTAINMENT_SCORE
        
        parts1 = TextNormalizer.tokens(author1)
        parts2 = TextNormalizer.tokens(author2)
        
        surname1 = parts1[-1]
        surname2 = parts2[-1]
        if surname1 == surname2:
            return cls.SURNAME_SCORE
        if StringSimilarity.ratio(surname1, surname2) > cls.SIMILAR_SURNAME_THRESHOLD:
            return cls.SIMILAR_SURNAME_SCORE
        
        common = cls._count_common_parts(parts1, parts2)
        if common > 0:
            return min(1.0, cls.PART_BASE_SCORE + common * cls.PART_BONUS)
        
        return StringSimilarity.ratio(name1, name2)
    
    @classmethod
    def _count_common_parts(cls, parts1: list[str], parts2: list[str]) -> int:
        """Count parts of the first name that have a match in the second."""
        candidates = [p for p in parts2 if len(p) >= cls.MIN_PART_LENGTH]
        
        common = 0
        for part in parts1:
            if len(part) < cls.MIN_PART_LENGTH:
                continue
            for other in candidates:
                if part == other or StringSimilarity.ratio(part, other) > cls.PART_SIMILARITY_THRESHOLD:
                    common += 1
                    break
        
        return common
