"""
Genre and age-range mapping.

Google Books categories are free text ("Juvenile Fiction / Fantasy &
Magic"). They are mapped onto the catalog's fixed Hebrew vocabulary by
scanning an ordered table of (key, genre) pairs; more specific keys come
first so "Young Adult Fiction" does not stop at "fiction".
"""

from enum import Enum
from typing import Optional

from bookmatch.identification.models import BookCandidate


class Genre(str, Enum):
    """Catalog genre vocabulary."""
    
    FICTION = "בדיה"
    CHILDREN_FICTION = "בדיה לילדים"
    TEEN_FICTION = "בדיה לנוער"
    FANTASY = "פנטזיה"
    SCIENCE_FICTION = "מדע בדיוני"
    MYSTERY_THRILLER = "מתח ומסתורין"
    ROMANCE = "רומנטיקה"
    BIOGRAPHY = "ביוגרפיה"
    HISTORY = "היסטוריה"
    SCIENCE = "מדע"
    SELF_HELP = "עזרה עצמית"
    COOKING = "בישול"
    RELIGION = "דת"
    POETRY = "שירה"
    DRAMA = "דרמה"
    COMICS = "קומיקס"


class AgeRange(str, Enum):
    """Catalog age ranges."""
    
    CHILDREN = "ילדים"
    TEEN = "נוער"
    ADULT = "מבוגרים"


# Consulted in order; first key contained in the category wins
GENRE_TABLE: tuple[tuple[str, Genre], ...] = (
    ("juvenile fiction", Genre.CHILDREN_FICTION),
    ("young adult fiction", Genre.TEEN_FICTION),
    ("science fiction", Genre.SCIENCE_FICTION),
    ("fiction", Genre.FICTION),
    ("fantasy", Genre.FANTASY),
    ("mystery", Genre.MYSTERY_THRILLER),
    ("thriller", Genre.MYSTERY_THRILLER),
    ("romance", Genre.ROMANCE),
    ("biography", Genre.BIOGRAPHY),
    ("history", Genre.HISTORY),
    ("science", Genre.SCIENCE),
    ("self-help", Genre.SELF_HELP),
    ("cooking", Genre.COOKING),
    ("religion", Genre.RELIGION),
    ("poetry", Genre.POETRY),
    ("drama", Genre.DRAMA),
    ("comics", Genre.COMICS),
)

CHILD_CATEGORY_KEYS = ("juvenile", "children")
TEEN_CATEGORY_KEYS = ("young adult",)
MATURE_RATING = "MATURE"

CHILD_KEYWORDS = ("children", "kids", "ילדים")
TEEN_KEYWORDS = ("young adult", "teen", "נוער")


def map_genre(categories: Optional[list[str]]) -> Optional[Genre]:
    """
    Map the first category to a catalog genre.
    
    Args:
        categories: Google Books categories
        
    Returns:
        Genre, or None if no table key matches
    """
    if not categories:
        return None
    
    category = categories[0].lower()
    for key, genre in GENRE_TABLE:
        if key in category:
            return genre
    
    return None


def infer_age_range(candidate: BookCandidate) -> Optional[AgeRange]:
    """
    Infer the target age range of a volume.
    
    Order: categories, maturity rating, then keywords in title and
    description.
    """
    for category in candidate.categories:
        cat = category.lower()
        if any(key in cat for key in CHILD_CATEGORY_KEYS):
            return AgeRange.CHILDREN
        if any(key in cat for key in TEEN_CATEGORY_KEYS):
            return AgeRange.TEEN
    
    if candidate.maturity_rating == MATURE_RATING:
        return AgeRange.ADULT
    
    text = f"{candidate.title or ''}\n{candidate.description or ''}".lower()
    
    if any(keyword in text for keyword in CHILD_KEYWORDS):
        return AgeRange.CHILDREN
    if any(keyword in text for keyword in TEEN_KEYWORDS):
        return AgeRange.TEEN
    
    return None
