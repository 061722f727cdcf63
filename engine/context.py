"""
Core data models for listing search.

Defines all data structures that flow through query interpretation and
ranking. These are pure Python dataclasses with no external dependencies.
Every value here is created per search call and discarded afterwards.
"""

from dataclasses import dataclass, field
from typing import Optional, Any
from enum import Enum


class InterpretationStatus(Enum):
    """
    Outcome of interpreting a freeform query.

    INTERPRETED - At least one field (category, condition, price,
                  product or residual text) was derived
    EMPTY - The query was blank; nothing to interpret
    UNINTERPRETABLE - The query had content but yielded nothing usable
    """
    INTERPRETED = "interpreted"
    EMPTY = "empty"
    UNINTERPRETABLE = "uninterpretable"


@dataclass(frozen=True)
class PriceRange:
    """
    Price bounds extracted from a query.

    Attributes:
        min: Lower bound (inclusive), if any
        max: Upper bound (inclusive), if any
    """
    min: Optional[float] = None
    max: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return self.min is None and self.max is None

    def contains(self, price: float) -> bool:
        """Check if a price falls inside the bounds."""
        if self.min is not None and price < self.min:
            return False
        if self.max is not None and price > self.max:
            return False
        return True

    def to_dict(self) -> dict:
        """Only the bounds that are set, e.g. {"max": 15000.0}."""
        bounds = {}
        if self.min is not None:
            bounds["min"] = self.min
        if self.max is not None:
            bounds["max"] = self.max
        return bounds

    def __str__(self) -> str:
        if self.min is not None and self.max is not None:
            return f"{self.min:g}-{self.max:g}"
        if self.max is not None:
            return f"<= {self.max:g}"
        if self.min is not None:
            return f">= {self.min:g}"
        return "any"


@dataclass(frozen=True)
class SearchIntent:
    """
    Structured interpretation of a freeform query.

    Attributes:
        raw_query: The query exactly as the user typed it
        residual_text: Words that described neither condition, category,
                       nor price; passed on to full-text search
        category: Category slug (e.g., "electronics")
        condition: Canonical condition (e.g., "Used")
        price_range: Price bounds, None when no price was mentioned
        specific_product: Canonical product noun (e.g., "laptop")
        status: Whether interpretation produced anything usable
    """
    raw_query: str
    residual_text: str = ""
    category: Optional[str] = None
    condition: Optional[str] = None
    price_range: Optional[PriceRange] = None
    specific_product: Optional[str] = None
    status: InterpretationStatus = InterpretationStatus.INTERPRETED

    @property
    def is_uninterpretable(self) -> bool:
        return self.status is InterpretationStatus.UNINTERPRETABLE

    @property
    def is_empty(self) -> bool:
        return self.status is InterpretationStatus.EMPTY

    @property
    def search_text(self) -> str:
        """
        Text the storage layer should match against titles/descriptions.

        Residual words followed by the specific product, if any.
        """
        parts = [p for p in (self.residual_text, self.specific_product) if p]
        return " ".join(parts)

    def has_structure(self) -> bool:
        """Check if any structured field (not residual text) was derived."""
        return any([
            self.category,
            self.condition,
            self.price_range is not None,
            self.specific_product,
        ])

    def to_filters(self) -> dict[str, Any]:
        """
        Render the intent as a flat filters dict for the storage layer.

        Keys with no value are omitted.
        """
        filters = {
            "category": self.category,
            "condition": self.condition,
            "min_price": self.price_range.min if self.price_range else None,
            "max_price": self.price_range.max if self.price_range else None,
            "specific_product": self.specific_product,
            "search_text": self.search_text or None,
        }
        return {k: v for k, v in filters.items() if v is not None}


@dataclass(frozen=True)
class CandidateItem:
    """
    A listing supplied by the item repository for ranking.

    Attributes:
        title: Listing title
        description: Free-text description
        price: Asking price
        condition: Condition as stored (e.g., "Used", "Like New")
        category_slug: Category slug (e.g., "furniture")
        item_id: Repository identifier, if known
    """
    title: str
    description: str
    price: float
    condition: str
    category_slug: str
    item_id: Optional[str] = None


@dataclass(frozen=True)
class RankedResult:
    """
    A candidate with its relevance score attached.

    Attributes:
        item: The ranked listing
        score: Additive relevance score (not normalised)
    """
    item: CandidateItem
    score: float


@dataclass
class SearchResponse:
    """
    Result of a full search call.

    Attributes:
        items: Listings for the requested page, best first
        intent: How the query was interpreted
        total: Number of listings that matched before pagination
        has_exact_matches: True if a returned title contains the search text
            (the normalised query when there is no search text)
        type: "results", "no_results" or "uninterpretable"
    """
    items: list[CandidateItem]
    intent: SearchIntent
    total: int = 0
    has_exact_matches: bool = False
    type: str = "no_results"
    scores: list[float] = field(default_factory=list)

    @property
    def has_results(self) -> bool:
        return len(self.items) > 0
