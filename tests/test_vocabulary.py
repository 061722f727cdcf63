"""
Tests for the immutable vocabulary object.

Run with: pytest tests/test_vocabulary.py -v
"""

import dataclasses

import pytest
from engine.vocabulary import Vocabulary
from vocabulary import TERM_VARIANTS, CATEGORY_KEYWORDS, PRODUCT_VARIANTS, is_price_token


@pytest.fixture
def vocab():
    """The shipped vocabulary."""
    return Vocabulary.default()


class TestConstruction:
    """Test building and validating vocabularies."""

    def test_default_is_shared(self):
        assert Vocabulary.default() is Vocabulary.default()

    def test_shipped_tables_are_unambiguous(self):
        # Would raise ValueError otherwise
        Vocabulary.from_tables(TERM_VARIANTS, CATEGORY_KEYWORDS, PRODUCT_VARIANTS)

    def test_canonical_listed_under_another_canonical_rejected(self):
        with pytest.raises(ValueError, match="'b' is canonical"):
            Vocabulary.from_tables({"a": ["b"], "b": ["c"]}, {}, {})

    def test_variant_under_two_canonicals_rejected(self):
        with pytest.raises(ValueError, match="'tbl' is listed under both"):
            Vocabulary.from_tables({"tablet": ["tbl"], "table": ["tbl", "desk"]}, {}, {})

    def test_shipped_abbreviation_has_one_owner(self):
        assert Vocabulary.default().lookup_term("tbl") == "tablet"

    def test_canonical_listing_itself_allowed(self):
        vocab = Vocabulary.from_tables({"a": ["a", "aa"]}, {}, {})
        assert vocab.lookup_term("aa") == "a"

    def test_tables_are_read_only(self, vocab):
        with pytest.raises(TypeError):
            vocab.term_variants["sofa"] = ("couch",)

    def test_instance_is_frozen(self, vocab):
        with pytest.raises(dataclasses.FrozenInstanceError):
            vocab.conditions = ("Broken",)


class TestExactLookups:
    """Test direct variant lookups."""

    def test_term_variant(self, vocab):
        assert vocab.lookup_term("labtop") == "laptop"
        assert vocab.lookup_term("LAPPY") == "laptop"

    def test_multi_word_term(self, vocab):
        assert vocab.lookup_term("second hand") == "Used"

    def test_unknown_term(self, vocab):
        assert vocab.lookup_term("sofa") is None

    def test_category_keyword(self, vocab):
        assert vocab.lookup_category("chair") == "furniture"
        assert vocab.lookup_category("headphones") == "electronics"

    def test_product(self, vocab):
        assert vocab.lookup_product("laptop") == "laptop"
        assert vocab.lookup_product("ipad") == "tablet"
        assert vocab.lookup_product("chair") is None

    def test_condition_by_name(self, vocab):
        assert vocab.lookup_condition("used") == "Used"
        assert vocab.lookup_condition("new") == "New"
        assert vocab.lookup_condition("like new") == "Like New"

    def test_condition_by_variant(self, vocab):
        assert vocab.lookup_condition("brand new") == "New"
        assert vocab.lookup_condition("preloved") == "Used"

    def test_non_condition(self, vocab):
        assert vocab.lookup_condition("laptop") is None

    def test_is_known(self, vocab):
        assert vocab.is_known("desk")
        assert vocab.is_known("mobl")
        assert not vocab.is_known("sofa")


class TestCategoryFor:
    """Test mapping resolved terms to category slugs."""

    def test_slug_maps_to_itself(self, vocab):
        assert vocab.category_for("furniture") == "furniture"

    def test_term_maps_through_keywords(self, vocab):
        assert vocab.category_for("chair") == "furniture"
        assert vocab.category_for("laptop") == "electronics"

    def test_condition_has_no_category(self, vocab):
        assert vocab.category_for("Used") is None

    def test_none(self, vocab):
        assert vocab.category_for(None) is None


class TestFuzzyCandidates:
    """Test the candidate list used by fuzzy resolution."""

    def test_term_canonicals_come_first(self, vocab):
        assert vocab.fuzzy_candidates[0] == "mobile"

    def test_contains_variants_and_keywords(self, vocab):
        candidates = vocab.fuzzy_candidates
        assert "second hand" in candidates
        assert "almirah" in candidates
        assert "electronics" in candidates

    def test_canonical_for_prefers_category(self, vocab):
        assert vocab.canonical_for("desk") == "furniture"
        assert vocab.canonical_for("electronics") == "electronics"

    def test_canonical_for_term_variant(self, vocab):
        assert vocab.canonical_for("labtop") == "laptop"


class TestExpandTypos:
    """Test canonical spelling expansion."""

    def test_product_typo(self, vocab):
        assert vocab.expand_typos("old labtop") == "old laptop"

    def test_unknown_words_kept(self, vocab):
        assert vocab.expand_typos("mobl cover") == "mobile cover"

    def test_category_words_kept(self, vocab):
        assert vocab.expand_typos("books") == "books"

    def test_plural_term(self, vocab):
        assert vocab.expand_typos("Chairs") == "chair"


class TestPriceTokens:
    """Test price token detection used during tokenisation."""

    @pytest.mark.parametrize("token", ["500", "₹799", "15,000", "rs", "under", "between", "and"])
    def test_price_tokens(self, token):
        assert is_price_token(token)

    @pytest.mark.parametrize("token", ["laptop", "used", "chair"])
    def test_regular_words(self, token):
        assert not is_price_token(token)
