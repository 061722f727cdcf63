"""
Price phrase extraction for listing search.

Runs an ordered list of price patterns against the raw, untokenised query.
The first pattern that matches decides the price range; later patterns are
never consulted. Order is the precedence:

1. "under/below/less than X"        -> max = X
2. "above/over/more than X"         -> min = X
3. "between X and Y" / "from X to Y" -> min = X, max = Y
4. "X-Y" / "X to Y"                 -> min = X, max = Y
5. bare "₹X" / "X"                  -> max = X

No match means no price constraint, which is not an error.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from engine.context import PriceRange
from engine.structured_logging import get_logger
from vocabulary.patterns import (
    CURRENCY,
    AMOUNT,
    RANGE_SEPARATOR,
    UPPER_BOUND_WORDS,
    LOWER_BOUND_WORDS,
)

# Module-level logger
_logger = get_logger("engine.pricing")


def parse_amount(text: str) -> float:
    """
    Parse a matched amount, dropping thousands separators.

    Example:
        >>> parse_amount("1,50,000")
        150000.0
    """
    return float(text.replace(",", ""))


def _upper_bound(match: re.Match) -> PriceRange:
    return PriceRange(max=parse_amount(match.group(1)))


def _lower_bound(match: re.Match) -> PriceRange:
    return PriceRange(min=parse_amount(match.group(1)))


def _bounded(match: re.Match) -> PriceRange:
    low = parse_amount(match.group(1))
    high = parse_amount(match.group(2))
    if low > high:
        low, high = high, low
    return PriceRange(min=low, max=high)


@dataclass(frozen=True)
class PricePattern:
    """
    One step of price extraction: a regex and what a match means.

    Attributes:
        name: Short identifier used in logs and tests
        regex: Compiled pattern, searched anywhere in the query
        extract: Turns a match into a price range
    """
    name: str
    regex: re.Pattern
    extract: Callable[[re.Match], PriceRange]

    def apply(self, text: str) -> Optional[PriceRange]:
        """Price range if this pattern matches text, else None."""
        match = self.regex.search(text)
        if match is None:
            return None
        return self.extract(match)


def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


PRICE_PATTERNS = (
    PricePattern(
        "upper_bound",
        _compile(rf'\b{UPPER_BOUND_WORDS}\s*{CURRENCY}\s*{AMOUNT}'),
        _upper_bound,
    ),
    PricePattern(
        "lower_bound",
        _compile(rf'\b{LOWER_BOUND_WORDS}\s*{CURRENCY}\s*{AMOUNT}'),
        _lower_bound,
    ),
    PricePattern(
        "between",
        _compile(
            rf'\b(?:between|from)\s*{CURRENCY}\s*{AMOUNT}'
            rf'\s*(?:and|{RANGE_SEPARATOR})\s*{CURRENCY}\s*{AMOUNT}'
        ),
        _bounded,
    ),
    PricePattern(
        "range",
        _compile(rf'{CURRENCY}\s*{AMOUNT}\s*{RANGE_SEPARATOR}\s*{CURRENCY}\s*{AMOUNT}'),
        _bounded,
    ),
    PricePattern(
        "bare_amount",
        _compile(rf'{CURRENCY}\s*{AMOUNT}'),
        _upper_bound,
    ),
)


class PriceExtractor:
    """
    Extracts a price range from a raw query.

    Example:
        extractor = PriceExtractor()
        extractor.extract("used laptop under 15,000")
        # Returns: PriceRange(min=None, max=15000.0)
    """

    def __init__(self, patterns: tuple = PRICE_PATTERNS):
        """
        Initialize the extractor.

        Args:
            patterns: Ordered price patterns, highest precedence first
        """
        self.patterns = patterns

    def extract(self, raw_query: str) -> PriceRange:
        """
        Extract the price range from the first matching pattern.

        Args:
            raw_query: Query as typed, before any normalisation

        Returns:
            PriceRange (empty if no pattern matched)
        """
        for pattern in self.patterns:
            price_range = pattern.apply(raw_query)
            if price_range is not None:
                _logger.debug(
                    f"Price pattern '{pattern.name}' matched",
                    extra={
                        "event": "price_extraction",
                        "pattern": pattern.name,
                        "price_range": price_range.to_dict(),
                    }
                )
                return price_range

        return PriceRange()


def extract_price(raw_query: str) -> PriceRange:
    """Extract a price range using the default pattern order."""
    return PriceExtractor().extract(raw_query)
