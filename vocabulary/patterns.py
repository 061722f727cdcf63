"""
Regex fragments and word lists for query normalisation and price parsing.

The price patterns themselves are assembled (in precedence order) by
engine.pricing; this module only holds the shared building blocks.
"""

import re

# === Price fragments ===

# Optional currency marker before an amount: "rs", "rs.", "inr", "₹"
CURRENCY = r'(?:rs\.?|inr|₹)?'

# Amount with optional thousands separators and decimals: "15000", "1,50,000", "799.50".
# Never starts or stops mid-number, and ordinals ("2nd", "3rd year") are not amounts.
AMOUNT = r'(?<!\d)(?<!\d[.,])(\d[\d,]*(?:\.\d+)?)(?!\d|[,.]\d|(?:st|nd|rd|th)\b)'

# Range separators for "X-Y" / "X–Y" / "X to Y"
RANGE_SEPARATOR = r'(?:-|–|to)'

UPPER_BOUND_WORDS = r'(?:under|below|less\s+than|upto|up\s+to|within)'
LOWER_BOUND_WORDS = r'(?:above|over|more\s+than)'


# === Tokenisation helpers ===

# Words that only glue a price phrase together; the price extractor has
# already consumed them from the raw query.
PRICE_CONNECTOR_WORDS = frozenset({
    "under", "below", "above", "between", "from", "to", "and",
    "over", "less", "more", "than", "upto", "within",
})

# Bare currency tokens
CURRENCY_WORDS = frozenset({"rs", "rs.", "inr", "₹"})

# Tokens that never go through the fuzzy fallback (exact lookup only).
# They are common filler in listing queries and sit close to short
# vocabulary entries ("good" ~ "old", "for" ~ "fone").
FUZZY_EXEMPT_WORDS = frozenset({
    "the", "for", "with", "good", "great", "nice", "cheap", "best",
    "want", "need", "looking", "buy", "sell", "any", "some", "very",
    "condition", "one", "pair", "set",
})

DIGIT_OR_CURRENCY = re.compile(r'[\d₹]')

# "2nd" becomes "second" before ordinal suffixes are stripped ("3rd" -> "3")
SECOND_PATTERN = re.compile(r'\b2nd\b')
ORDINAL_SUFFIX_PATTERN = re.compile(r'(\d)(?:st|nd|rd|th)\b')
WHITESPACE_PATTERN = re.compile(r'\s+')


def is_price_token(token: str) -> bool:
    """
    Check if a token belongs to a price expression.

    Args:
        token: Single lower-case query word

    Returns:
        True for amounts, currency markers and price connector words
    """
    return (
        bool(DIGIT_OR_CURRENCY.search(token))
        or token in CURRENCY_WORDS
        or token in PRICE_CONNECTOR_WORDS
    )
