"""
Specific-product detection.

Recognises well-known product nouns (laptop, tablet, mobile, phone,
computer) with typo tolerance. A product match takes precedence over
category inference in the interpreter, so the fuzzy threshold here is
stricter than for general word resolution.
"""

import re
from dataclasses import dataclass
from typing import Optional

from engine.resolver import InterpreterConfig
from engine.similarity import edit_similarity
from engine.vocabulary import Vocabulary
from engine.structured_logging import get_logger
from vocabulary.patterns import FUZZY_EXEMPT_WORDS, is_price_token

# Module-level logger
_logger = get_logger("engine.products")

# Shortest token the fuzzy pass will consider
MIN_FUZZY_PRODUCT_LENGTH = 4


@dataclass(frozen=True)
class ProductMatch:
    """
    A detected product.

    Attributes:
        canonical: Canonical product noun (e.g., "laptop")
        matched_text: The text in the query that matched (e.g., "labtop")
    """
    canonical: str
    matched_text: str


class ProductMatcher:
    """
    Detects a specific product in a query.

    Example:
        matcher = ProductMatcher()
        matcher.match("cheap labtop")   # "laptop"
        matcher.find("iphone 12")       # ProductMatch("phone", "iphone")
    """

    def __init__(
        self,
        vocabulary: Optional[Vocabulary] = None,
        config: Optional[InterpreterConfig] = None,
    ):
        self.vocabulary = vocabulary or Vocabulary.default()
        self.config = config or InterpreterConfig()

    def match(self, query: str) -> Optional[str]:
        """Canonical product named in query, or None."""
        found = self.find(query)
        return found.canonical if found else None

    def find(self, query: str) -> Optional[ProductMatch]:
        """
        Find the product named in query.

        Exact whole-word containment of a canonical name or variant is
        tried first, in table order. Otherwise each eligible query word is
        scored against every canonical and variant by edit similarity (a
        fragment like "note" gets no credit for sitting inside "notebk");
        the best score above the product threshold wins.

        Args:
            query: Query text (normalised or raw; compared lower-case)

        Returns:
            ProductMatch, or None if no product is mentioned
        """
        text = query.lower()

        exact = self._find_exact(text)
        if exact is not None:
            return exact

        return self._find_fuzzy(text)

    def _find_exact(self, text: str) -> Optional[ProductMatch]:
        for canonical, variants in self.vocabulary.product_variants.items():
            for term in (canonical, *variants):
                if re.search(rf'\b{re.escape(term)}\b', text):
                    return ProductMatch(canonical, term)
        return None

    def _find_fuzzy(self, text: str) -> Optional[ProductMatch]:
        best_match = None
        best_score = self.config.product_threshold

        for token in text.split():
            if not self._is_fuzzy_candidate(token):
                continue

            for canonical, variants in self.vocabulary.product_variants.items():
                for term in (canonical, *variants):
                    score = edit_similarity(token, term)
                    if score > best_score:
                        best_score = score
                        best_match = ProductMatch(canonical, token)

        if best_match is not None:
            _logger.debug(
                f"Fuzzy product '{best_match.matched_text}' -> '{best_match.canonical}'",
                extra={
                    "event": "product_match",
                    "token": best_match.matched_text,
                    "canonical": best_match.canonical,
                    "similarity": round(best_score, 3),
                }
            )
        return best_match

    def _is_fuzzy_candidate(self, token: str) -> bool:
        """
        Words worth a fuzzy product comparison.

        Short words, numbers, price words and filler are skipped, as are
        words the vocabulary already knows as something other than a product
        ("desk" is a table, not a mistyped "desktop").
        """
        if len(token) < MIN_FUZZY_PRODUCT_LENGTH or token in FUZZY_EXEMPT_WORDS:
            return False
        if any(ch.isdigit() for ch in token) or is_price_token(token):
            return False
        if self.vocabulary.is_known(token):
            return self.vocabulary.lookup_term(token) in self.vocabulary.product_variants
        return True


def match_product(query: str) -> Optional[str]:
    """Detect a product using the default vocabulary."""
    return ProductMatcher().match(query)
