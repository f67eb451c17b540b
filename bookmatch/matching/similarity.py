"""
String similarity based on Levenshtein edit distance.
"""

import Levenshtein


class StringSimilarity:
    """String similarity calculations."""
    
    @staticmethod
    def edit_distance(s1: str, s2: str) -> int:
        """Levenshtein distance with unit cost insert/delete/substitute."""
        return Levenshtein.distance(s1 or "", s2 or "")
    
    @classmethod
    def ratio(cls, s1: str, s2: str) -> float:
        """
        Compute similarity ratio between two strings.
        
        Defined as 1 - distance / len(longer). Two empty strings are
        identical (1.0).
        
        Args:
            s1: First string
            s2: Second string
            
        Returns:
            Similarity score 0-1
        """
        s1 = s1 or ""
        s2 = s2 or ""
        longest = max(len(s1), len(s2))
        if longest == 0:
            return 1.0
        
        return (longest - cls.edit_distance(s1, s2)) / longest
