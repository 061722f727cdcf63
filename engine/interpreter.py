"""
Freeform query interpretation.

Turns a raw search string into a SearchIntent:

1. Normalise (lower-case, ordinals, hyphens, whitespace)
2. Extract a price range from the raw query
3. Detect a specific product and cut it out of the working text
4. Walk the remaining tokens left to right with one token of lookahead,
   resolving two-word phrases before single words into condition or
   category; leftovers become residual text

A detected product switches category inference off for the rest of the
query.
"""

import re
from typing import Optional

from engine.context import InterpretationStatus, SearchIntent
from engine.pricing import PriceExtractor
from engine.products import ProductMatcher
from engine.resolver import InterpreterConfig, WordResolver
from engine.vocabulary import Vocabulary
from engine.structured_logging import Timer, get_logger, log_interpretation
from vocabulary.patterns import (
    SECOND_PATTERN,
    ORDINAL_SUFFIX_PATTERN,
    WHITESPACE_PATTERN,
    is_price_token,
)

# Module-level logger
_logger = get_logger("engine.interpreter")


def normalize_query(raw_query: str) -> str:
    """
    Normalise a raw query for token-level interpretation.

    Example:
        >>> normalize_query("  2nd-Hand  Books for 3rd Year ")
        'second hand books for 3 year'
    """
    text = raw_query.lower()
    text = SECOND_PATTERN.sub("second", text)
    text = ORDINAL_SUFFIX_PATTERN.sub(r"\1", text)
    text = text.replace("-", " ")
    return WHITESPACE_PATTERN.sub(" ", text).strip()


class QueryInterpreter:
    """
    Builds a SearchIntent from a freeform query.

    All collaborators share one read-only Vocabulary, so a single
    interpreter can serve concurrent callers.

    Example:
        interpreter = QueryInterpreter()
        intent = interpreter.interpret("used laptop under 15000")
        # intent.specific_product == "laptop"
        # intent.condition == "Used"
        # intent.price_range == PriceRange(max=15000.0)
    """

    def __init__(
        self,
        vocabulary: Optional[Vocabulary] = None,
        config: Optional[InterpreterConfig] = None,
    ):
        """
        Initialize the interpreter.

        Args:
            vocabulary: Vocabulary shared by resolver and product matcher
            config: Thresholds (uses defaults if None)
        """
        self.vocabulary = vocabulary or Vocabulary.default()
        self.config = config or InterpreterConfig()
        self.resolver = WordResolver(self.vocabulary, self.config)
        self.product_matcher = ProductMatcher(self.vocabulary, self.config)
        self.price_extractor = PriceExtractor()

    def interpret(self, raw_query: str) -> SearchIntent:
        """
        Interpret a raw query.

        Never raises for unrecognised input; a query that yields nothing
        comes back with status UNINTERPRETABLE.

        Args:
            raw_query: Query exactly as the user typed it

        Returns:
            SearchIntent

        Raises:
            TypeError: If raw_query is not a string
        """
        if not isinstance(raw_query, str):
            raise TypeError(f"query must be str, not {type(raw_query).__name__}")

        with Timer() as timer:
            intent = self._interpret(raw_query)

        log_interpretation(
            query=raw_query,
            status=intent.status.value,
            filters=intent.to_filters(),
            interpretation_time_ms=timer.elapsed_ms,
        )
        return intent

    def _interpret(self, raw_query: str) -> SearchIntent:
        if not raw_query.strip():
            return SearchIntent(raw_query=raw_query, status=InterpretationStatus.EMPTY)

        working = normalize_query(raw_query)

        price_range = self.price_extractor.extract(raw_query)
        if price_range.is_empty:
            price_range = None

        specific_product = None
        product = self.product_matcher.find(working)
        if product is not None:
            specific_product = product.canonical
            working = re.sub(rf'\b{re.escape(product.matched_text)}\b', " ", working)

        category = None
        condition = None
        residual = []

        tokens = working.split()
        i = 0
        while i < len(tokens):
            token = tokens[i]

            if is_price_token(token):
                i += 1
                continue

            if i + 1 < len(tokens) and not is_price_token(tokens[i + 1]):
                resolved = self.resolver.resolve_phrase(token, tokens[i + 1])
                if self.vocabulary.is_condition(resolved):
                    condition = resolved
                    i += 2
                    continue
                if specific_product is None and self.vocabulary.category_for(resolved):
                    category = self.vocabulary.category_for(resolved)
                    i += 2
                    continue

            word_condition = self.vocabulary.lookup_condition(token)
            resolved = None
            if word_condition is None:
                resolved = self.resolver.resolve_word(token)
                if self.vocabulary.is_condition(resolved):
                    word_condition = resolved

            if word_condition is not None:
                condition = word_condition
            elif specific_product is None and self.vocabulary.category_for(resolved):
                category = self.vocabulary.category_for(resolved)
            else:
                residual.append(token)
            i += 1

        residual_text = " ".join(residual)

        derived = any([category, condition, price_range, specific_product, residual_text])
        status = (
            InterpretationStatus.INTERPRETED if derived
            else InterpretationStatus.UNINTERPRETABLE
        )

        return SearchIntent(
            raw_query=raw_query,
            residual_text=residual_text,
            category=category,
            condition=condition,
            price_range=price_range,
            specific_product=specific_product,
            status=status,
        )


def interpret(raw_query: str) -> SearchIntent:
    """Interpret a query with the default vocabulary and thresholds."""
    return QueryInterpreter().interpret(raw_query)
