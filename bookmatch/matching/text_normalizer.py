"""
Text Normalizer for BookMatch

Normalization used before every comparison and query:
- Case folding
- Diacritic and Hebrew niqqud removal
- Punctuation cleanup (Hebrew letters are kept)
- Whitespace collapsing
"""

import re
import unicodedata


# Hebrew block and the niqqud / cantillation sub-range inside it
HEBREW_PATTERN = re.compile(r"[\u0590-\u05FF]")
NIQQUD_PATTERN = re.compile(r"[\u0591-\u05C7]")
PUNCTUATION_PATTERN = re.compile(r"[^\w\s\u0590-\u05FF]")
WHITESPACE_PATTERN = re.compile(r"\s+")


class TextNormalizer:
    """
    Normalize titles and author names for comparison.
    
    Usage:
        TextNormalizer.normalize("הָאֲרִי פּוֹטֶר")      # "הארי פוטר"
        TextNormalizer.normalize("J.K.  Rowling")     # "jk rowling"
    """
    
    @staticmethod
    def normalize(text: str) -> str:
        """
        Normalize text for comparison.
        
        Args:
            text: Raw title or author
            
        Returns:
            Normalized text, empty string for empty input
        """
        if not text:
            return ""
        
        text = text.lower()
        
        # Decompose and drop combining marks (Latin accents, niqqud)
        text = unicodedata.normalize("NFKD", text)
        text = "".join(ch for ch in text if not unicodedata.combining(ch))
        text = NIQQUD_PATTERN.sub("", text)
        
        text = PUNCTUATION_PATTERN.sub("", text)
        text = WHITESPACE_PATTERN.sub(" ", text)
        
        return text.strip()
    
    @staticmethod
    def has_hebrew(text: str) -> bool:
        """Check whether text contains characters from the Hebrew block."""
        if not text:
            return False
        return HEBREW_PATTERN.search(text) is not None
    
    @classmethod
    def tokens(cls, text: str) -> list[str]:
        """Whitespace tokens of the normalized text."""
        return cls.normalize(text).split()
