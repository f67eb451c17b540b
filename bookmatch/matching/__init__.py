"""
Matching Module

String primitives shared by ranking, scoring and language resolution.
"""

from bookmatch.matching.text_normalizer import TextNormalizer
from bookmatch.matching.similarity import StringSimilarity
from bookmatch.matching.author_matcher import AuthorMatcher

__all__ = [
    "TextNormalizer",
    "StringSimilarity",
    "AuthorMatcher",
]
