"""
==============================================================================
Keyword Generation Tests
==============================================================================
"""

from storefront.search.keywords import generate_keywords, keyword_list


class TestGenerateKeywords:
    """Tests for product name -> keyword set."""

    def test_case_insensitive(self):
        assert generate_keywords("Blender") == generate_keywords("blender")
        assert generate_keywords("HIGH-SPEED Blender") == generate_keywords("high-speed blender")

    def test_deterministic(self):
        assert generate_keywords("Front Load Washer") == generate_keywords("Front Load Washer")
        assert keyword_list("Front Load Washer") == keyword_list("Front Load Washer")

    def test_long_word_variants(self):
        keywords = generate_keywords("cooker")
        assert keywords == {"cooker", "cooke", "cookerr"}

    def test_short_words_have_no_variants(self):
        assert generate_keywords("fan") == {"fan"}
        assert generate_keywords("AC") == {"ac"}

    def test_four_letter_word_gets_variants(self):
        assert generate_keywords("Oven") == {"oven", "ove", "ovenr"}

    def test_multi_word_name(self):
        keywords = generate_keywords("Ceiling Fan")
        assert keywords == {
            "ceiling fan",
            "ceiling", "ceilin", "ceilingr",
            "fan",
        }

    def test_hyphenated_word_is_one_word(self):
        keywords = generate_keywords("High-Speed Blender")
        assert "high-speed" in keywords
        assert "high-spee" in keywords
        assert "high-speedr" in keywords
        assert "high" not in keywords
        assert "blender" in keywords

    def test_split_on_any_whitespace(self):
        assert generate_keywords("Split  AC\tUnit") >= {"split", "ac", "unit", "spli", "splitr"}

    def test_empty_name(self):
        assert generate_keywords("") == {""}

    def test_keyword_list_order_starts_with_full_name(self):
        assert keyword_list("Rice Cooker") == [
            "rice cooker",
            "rice", "ric", "ricer",
            "cooker", "cooke", "cookerr",
        ]

    def test_keyword_list_has_no_duplicates(self):
        keywords = keyword_list("blender")
        assert len(keywords) == len(set(keywords))
        assert keywords[0] == "blender"
