"""
Unit tests for language preference, taxonomy mapping and series extraction.
"""

import pytest

from bookmatch.identification.language import LanguagePreferenceResolver
from bookmatch.identification.series import extract_series, parse_series_number
from bookmatch.identification.taxonomy import (
    GENRE_TABLE,
    AgeRange,
    Genre,
    infer_age_range,
    map_genre,
)


class TestLanguagePreferenceResolver:
    """Tests for LanguagePreferenceResolver class."""
    
    @pytest.fixture
    def resolver(self):
        return LanguagePreferenceResolver()
    
    def test_hebrew_query_author_preserved(self, resolver):
        """Test Hebrew input wins over a Latin API author."""
        assert resolver.resolve_author("ג'יי קיי רולינג", "J.K. Rowling") == "ג'יי קיי רולינג"
    
    def test_hebrew_api_author_used(self, resolver):
        """Test Hebrew API author wins over Latin input."""
        assert resolver.resolve_author("J.K. Rowling", "ג'יי קיי רולינג") == "ג'יי קיי רולינג"
    
    def test_similar_same_script_keeps_query(self, resolver):
        """Test the user's spelling is kept when similar enough."""
        assert resolver.resolve_author("J.K. Rowling", "Joanne Rowling") == "J.K. Rowling"
    
    def test_dissimilar_same_script_uses_api(self, resolver):
        """Test a clearly different API author replaces the input."""
        assert resolver.resolve_author("John Smith", "Amos Oz") == "Amos Oz"
    
    def test_threshold_is_configurable(self):
        """Test similarity threshold drives the same-script decision."""
        strict = LanguagePreferenceResolver(author_keep_similarity=0.95)
        assert strict.resolve_author("J.K. Rowling", "Joanne Rowling") == "Joanne Rowling"
    
    def test_missing_sides(self, resolver):
        """Test whichever author exists is used."""
        assert resolver.resolve_author("", "Amos Oz") == "Amos Oz"
        assert resolver.resolve_author("עמוס עוז", "") == "עמוס עוז"
        assert resolver.resolve_author("", "") == ""
    
    def test_hebrew_query_title_preserved(self, resolver):
        """Test Hebrew titles typed by the user are kept."""
        assert resolver.resolve_title("הארי פוטר", "Harry Potter") == "הארי פוטר"
    
    def test_hebrew_api_title_used(self, resolver):
        """Test a Hebrew API title replaces a Latin input title."""
        assert resolver.resolve_title("Harry Poter", "הארי פוטר") == "הארי פוטר"
    
    def test_latin_titles_prefer_api(self, resolver):
        """Test API spelling wins when neither side is Hebrew."""
        assert resolver.resolve_title("harry poter", "Harry Potter") == "Harry Potter"
    
    def test_missing_api_title_keeps_query(self, resolver):
        """Test query title kept when the API has none."""
        assert resolver.resolve_title("Dune", "") == "Dune"
    
    def test_logs_structured_events(self, resolver, log_records):
        """Test decisions are logged with an event name."""
        resolver.resolve_author("ג'יי קיי רולינג", "J.K. Rowling")
        
        assert any(r["extra"].get("event") == "language.author" for r in log_records)


class TestGenreMapping:
    """Tests for map_genre."""
    
    @pytest.mark.parametrize("category,expected", [
        ("Young Adult Fiction", Genre.TEEN_FICTION),
        ("Juvenile Fiction / Fantasy & Magic", Genre.CHILDREN_FICTION),
        ("Fiction", Genre.FICTION),
        ("Fiction / Science Fiction / General", Genre.SCIENCE_FICTION),
        ("Biography & Autobiography", Genre.BIOGRAPHY),
        ("True Crime / Thriller", Genre.MYSTERY_THRILLER),
        ("Cooking", Genre.COOKING),
    ])
    def test_known_categories(self, category, expected):
        """Test categories map through the ordered table."""
        assert map_genre([category]) == expected
    
    def test_teen_fiction_value(self):
        """Test the teen fiction tag is the catalog vocabulary value."""
        assert map_genre(["Young Adult Fiction"]).value == "בדיה לנוער"
    
    def test_unrecognized_category(self):
        """Test unknown categories map to None."""
        assert map_genre(["Computers"]) is None
    
    def test_only_first_category_is_used(self):
        """Test later categories are ignored."""
        assert map_genre(["Computers", "Fiction"]) is None
    
    def test_no_categories(self):
        """Test empty or missing categories."""
        assert map_genre([]) is None
        assert map_genre(None) is None
    
    def test_specific_keys_precede_general(self):
        """Test no key is shadowed by an earlier key it contains."""
        keys = [key for key, _ in GENRE_TABLE]
        for i, key in enumerate(keys):
            for earlier in keys[:i]:
                assert earlier not in key, f"{earlier!r} shadows {key!r}"


class TestAgeRange:
    """Tests for infer_age_range."""
    
    def test_juvenile_category(self, candidate_factory):
        assert infer_age_range(candidate_factory(categories=["Juvenile Fiction"])) == AgeRange.CHILDREN
    
    def test_young_adult_category(self, candidate_factory):
        assert infer_age_range(candidate_factory(categories=["Young Adult Nonfiction"])) == AgeRange.TEEN
    
    def test_mature_rating(self, candidate_factory):
        candidate = candidate_factory(title="Lolita", maturityRating="MATURE")
        assert infer_age_range(candidate) == AgeRange.ADULT
    
    def test_categories_win_over_rating(self, candidate_factory):
        candidate = candidate_factory(categories=["Juvenile Fiction"], maturityRating="MATURE")
        assert infer_age_range(candidate) == AgeRange.CHILDREN
    
    def test_description_keywords(self, candidate_factory):
        """Test English and Hebrew keywords in text."""
        kids = candidate_factory(title="Fun Rhymes", description="Poems for kids of all ages")
        hebrew_teen = candidate_factory(title="סיפור", description="ספר לבני נוער")
        
        assert infer_age_range(kids) == AgeRange.CHILDREN
        assert infer_age_range(hebrew_teen) == AgeRange.TEEN
    
    def test_title_keyword(self, candidate_factory):
        assert infer_age_range(candidate_factory(title="Teen Titans")) == AgeRange.TEEN
    
    def test_no_signal(self, candidate_factory):
        candidate = candidate_factory(title="Dune", description="Desert planet.", maturityRating="NOT_MATURE")
        assert infer_age_range(candidate) is None


class TestSeriesExtraction:
    """Tests for extract_series and parse_series_number."""
    
    def test_series_info_volume_series(self, candidate_factory):
        candidate = candidate_factory(
            title="Leviathan Wakes",
            seriesInfo={"volumeSeries": [{"series": "The Expanse", "volumeSeriesNumber": "1"}]},
        )
        assert extract_series(candidate) == ("The Expanse", 1)
    
    def test_series_info_display_title(self, candidate_factory):
        candidate = candidate_factory(
            title="Caliban's War",
            seriesInfo={"bookDisplaySeriesTitle": "The Expanse", "volumeSeriesNumber": 2},
        )
        assert extract_series(candidate) == ("The Expanse", 2)
    
    def test_subtitle(self, candidate_factory):
        candidate = candidate_factory(title="Abaddon's Gate", subtitle="Book 3 of The Expanse")
        assert extract_series(candidate) == ("The Expanse", 3)
    
    def test_title_hash_pattern(self, candidate_factory):
        assert extract_series(candidate_factory(title="Discworld #7")) == ("Discworld", 7)
    
    def test_title_book_pattern(self, candidate_factory):
        assert extract_series(candidate_factory(title="Wheel of Time - Book 4")) == ("Wheel of Time", 4)
    
    def test_hebrew_title_part(self, candidate_factory):
        assert extract_series(candidate_factory(title="הארי פוטר, חלק 2")) == ("הארי פוטר", 2)
    
    def test_description(self, candidate_factory):
        candidate = candidate_factory(title="The Shadow Rising", description="Book 4 of the Wheel of Time. Rand...")
        assert extract_series(candidate) == ("the Wheel of Time", 4)
    
    def test_no_series(self, candidate_factory):
        assert extract_series(candidate_factory(title="Dune")) == (None, None)
    
    def test_non_string_series_info_ignored(self, candidate_factory):
        """Test non-string series names fall through to the title patterns."""
        candidate = candidate_factory(
            title="Discworld #7",
            seriesInfo={"bookDisplaySeriesTitle": 12, "volumeSeries": [{"series": ["x"]}]},
        )
        assert extract_series(candidate) == ("Discworld", 7)
    
    @pytest.mark.parametrize("value,expected", [
        (3, 3),
        ("12", 12),
        ("Vol. 5", 5),
        (2.0, 2),
        (None, None),
        ("none", None),
    ])
    def test_parse_series_number(self, value, expected):
        assert parse_series_number(value) == expected
