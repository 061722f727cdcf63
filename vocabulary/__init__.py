"""Static vocabulary and patterns for listing search."""

from vocabulary.terms import (
    TERM_VARIANTS,
    CATEGORY_KEYWORDS,
    PRODUCT_VARIANTS,
    CONDITIONS,
)
from vocabulary.patterns import (
    PRICE_CONNECTOR_WORDS,
    CURRENCY_WORDS,
    FUZZY_EXEMPT_WORDS,
    is_price_token,
)

__all__ = [
    "TERM_VARIANTS",
    "CATEGORY_KEYWORDS",
    "PRODUCT_VARIANTS",
    "CONDITIONS",
    "PRICE_CONNECTOR_WORDS",
    "CURRENCY_WORDS",
    "FUZZY_EXEMPT_WORDS",
    "is_price_token",
]
