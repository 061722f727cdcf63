"""
Tests for specific-product detection.

Run with: pytest tests/test_products.py -v
"""

import pytest
from engine.products import ProductMatcher, ProductMatch, match_product
from engine.resolver import InterpreterConfig


@pytest.fixture
def matcher():
    """Create a product matcher instance."""
    return ProductMatcher()


class TestExactMatch:
    """Test whole-word containment of canonicals and variants."""

    def test_variant(self, matcher):
        assert matcher.match("labtop") == "laptop"

    def test_canonical_in_query(self, matcher):
        assert matcher.match("used laptop under 15000") == "laptop"

    def test_variant_in_query(self, matcher):
        assert matcher.match("ipad air") == "tablet"

    def test_table_order_decides(self, matcher):
        assert matcher.match("cheap mobile phone") == "mobile"

    def test_matched_text_reported(self, matcher):
        assert matcher.find("samsung smartphone") == ProductMatch("phone", "smartphone")

    def test_whole_words_only(self, matcher):
        """'tab' must not match inside 'table'."""
        assert matcher.match("study table") is None


class TestFuzzyMatch:
    """Test the typo-tolerant fallback."""

    def test_near_miss(self, matcher):
        assert matcher.match("lapptop") == "laptop"

    def test_reports_query_word(self, matcher):
        assert matcher.find("iphone 12") == ProductMatch("phone", "iphone")

    def test_term_variant_of_product(self, matcher):
        assert matcher.match("old computr") == "computer"

    def test_other_vocabulary_words_ignored(self, matcher):
        """'desk' is furniture, not a mistyped 'desktop'."""
        assert matcher.match("wooden desk") is None

    def test_short_words_ignored(self, matcher):
        assert matcher.match("one") is None

    def test_no_product(self, matcher):
        assert matcher.match("engineering book") is None

    def test_threshold_is_configurable(self):
        strict = ProductMatcher(config=InterpreterConfig(product_threshold=0.9))
        assert strict.match("lapptop") is None


def test_match_product():
    assert match_product("labtop") == "laptop"


class TestWordFragments:
    """Test that part of a longer word is not taken for a product."""

    @pytest.mark.parametrize("query", ["note book", "smart watch", "smart tv"])
    def test_fragment_ignored(self, matcher, query):
        assert matcher.match(query) is None

    def test_typo_still_found(self, matcher):
        assert matcher.match("lapptop bag") == "laptop"
