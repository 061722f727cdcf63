"""
In-memory listing repository.

Applies the structured part of a SearchIntent the way the hosted
listings store does: condition and category equality, an inclusive price
range, and a case-insensitive substring match of the search text against
title or description. Typos in the search text are also tried in their
canonical spelling ("labtop" -> "laptop").
"""

from typing import Iterable, Optional

from engine.context import CandidateItem, SearchIntent
from engine.vocabulary import Vocabulary
from engine.structured_logging import get_logger, timed

# Module-level logger
_logger = get_logger("service.repository")


class InMemoryListingRepository:
    """
    Candidate source backed by a list of CandidateItem.

    Example:
        repo = InMemoryListingRepository(load_listings("listings.csv"))
        candidates = repo.fetch(interpret("used chair under 2000"))
    """

    def __init__(self, items: Iterable[CandidateItem], vocabulary: Optional[Vocabulary] = None):
        self.items = list(items)
        self.vocabulary = vocabulary or Vocabulary.default()

    def __len__(self) -> int:
        return len(self.items)

    @timed("listing_fetch")
    def fetch(self, intent: SearchIntent, limit: Optional[int] = None) -> list:
        """
        Listings matching the intent's structured filters, in stored order.

        Args:
            intent: Interpreted query
            limit: Maximum number of listings to return

        Returns:
            List of CandidateItem
        """
        terms = self._search_terms(intent)

        matches = []
        for item in self.items:
            if not self._matches_filters(item, intent):
                continue
            if terms and not self._matches_text(item, terms):
                continue
            matches.append(item)
            if limit is not None and len(matches) >= limit:
                break

        _logger.debug(
            f"Fetched {len(matches)} of {len(self.items)} listings",
            extra={
                "event": "listing_fetch",
                "filters": intent.to_filters(),
                "candidates": len(matches),
            }
        )
        return matches

    def _matches_filters(self, item: CandidateItem, intent: SearchIntent) -> bool:
        if intent.condition and item.condition != intent.condition:
            return False
        if intent.category and item.category_slug != intent.category:
            return False
        if intent.price_range and not intent.price_range.contains(item.price):
            return False
        return True

    def _search_terms(self, intent: SearchIntent) -> list:
        """
        Substrings any one of which must appear in title or description.

        The full search text, its typo-corrected spelling, and the specific
        product on its own.
        """
        text = intent.search_text.lower()
        if not text:
            return []

        terms = [text]
        expanded = self.vocabulary.expand_typos(text)
        if expanded not in terms:
            terms.append(expanded)
        if intent.specific_product and intent.specific_product not in terms:
            terms.append(intent.specific_product)
        return terms

    @staticmethod
    def _matches_text(item: CandidateItem, terms: list) -> bool:
        title = item.title.lower()
        description = (item.description or "").lower()
        return any(term in title or term in description for term in terms)
