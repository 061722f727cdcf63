"""
Immutable vocabulary object shared by the resolver and product matcher.

Built once from the static tables in vocabulary.terms and passed by
reference into every component that needs it. Nothing mutates it after
construction, so concurrent searches can share one instance freely.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional

from vocabulary.terms import (
    TERM_VARIANTS,
    CATEGORY_KEYWORDS,
    PRODUCT_VARIANTS,
    CONDITIONS,
)


def _freeze_table(table: Mapping[str, list]) -> Mapping[str, tuple]:
    """Copy a canonical -> variants table into a read-only mapping."""
    return MappingProxyType({
        canonical: tuple(v.lower() for v in variants)
        for canonical, variants in table.items()
    })


def _build_index(table: Mapping[str, tuple]) -> Mapping[str, str]:
    """Variant -> canonical lookup."""
    index = {}
    for canonical, variants in table.items():
        for variant in variants:
            index.setdefault(variant, canonical)
    return MappingProxyType(index)


def _check_unambiguous(name: str, table: Mapping[str, tuple]) -> None:
    """
    Reject tables where a canonical term is a variant of another canonical,
    or where one variant is listed under two canonicals.

    Raises:
        ValueError: If the table violates the rule
    """
    canonicals = {c.lower(): c for c in table}
    listed_under = {}
    for canonical, variants in table.items():
        for variant in variants:
            owner = canonicals.get(variant)
            if owner is not None and owner != canonical:
                raise ValueError(
                    f"{name}: '{owner}' is canonical but also listed "
                    f"as a variant of '{canonical}'"
                )
            first = listed_under.setdefault(variant, canonical)
            if first != canonical:
                raise ValueError(
                    f"{name}: '{variant}' is listed under both "
                    f"'{first}' and '{canonical}'"
                )


@dataclass(frozen=True)
class Vocabulary:
    """
    Read-only vocabulary tables plus precomputed lookup indexes.

    Attributes:
        term_variants: Canonical term -> variants (products, furniture, conditions)
        category_keywords: Category slug -> keywords
        product_variants: Specific product noun -> variants
        conditions: Canonical condition names
    """
    term_variants: Mapping[str, tuple]
    category_keywords: Mapping[str, tuple]
    product_variants: Mapping[str, tuple]
    conditions: tuple

    def __post_init__(self):
        _check_unambiguous("term_variants", self.term_variants)
        _check_unambiguous("category_keywords", self.category_keywords)
        _check_unambiguous("product_variants", self.product_variants)

        object.__setattr__(self, "_term_index", _build_index(self.term_variants))
        object.__setattr__(self, "_category_index", _build_index(self.category_keywords))
        object.__setattr__(self, "_product_index", _build_index(self.product_variants))
        object.__setattr__(self, "_fuzzy_candidates", self._collect_fuzzy_candidates())

    @classmethod
    def from_tables(
        cls,
        term_variants: Mapping[str, list],
        category_keywords: Mapping[str, list],
        product_variants: Mapping[str, list],
        conditions: tuple = CONDITIONS,
    ) -> "Vocabulary":
        """Build a vocabulary from plain dict tables."""
        return cls(
            term_variants=_freeze_table(term_variants),
            category_keywords=_freeze_table(category_keywords),
            product_variants=_freeze_table(product_variants),
            conditions=tuple(conditions),
        )

    @classmethod
    def default(cls) -> "Vocabulary":
        """The shipped vocabulary, built once per process."""
        return _default_vocabulary()

    # === Exact lookups ===

    def lookup_term(self, text: str) -> Optional[str]:
        """Canonical term whose variants include text, if any."""
        return self._term_index.get(text.lower())

    def lookup_category(self, text: str) -> Optional[str]:
        """Category slug whose keywords include text, if any."""
        return self._category_index.get(text.lower())

    def lookup_product(self, text: str) -> Optional[str]:
        """Product noun that text names exactly (canonical or variant)."""
        text = text.lower()
        if text in self.product_variants:
            return text
        return self._product_index.get(text)

    def lookup_condition(self, text: str) -> Optional[str]:
        """Condition that text names exactly ("used", "like new", "brand new")."""
        text = text.lower()
        for condition in self.conditions:
            if condition.lower() == text:
                return condition
        canonical = self._term_index.get(text)
        return canonical if self.is_condition(canonical) else None

    def category_for(self, canonical: Optional[str]) -> Optional[str]:
        """
        Category slug a resolved term belongs to.

        Slugs map to themselves; other terms ("chair", "laptop") map through
        the category keywords.
        """
        if canonical is None:
            return None
        if self.is_category(canonical):
            return canonical
        return self.lookup_category(canonical)

    def is_known(self, text: str) -> bool:
        """Check if text is an exact term or category keyword."""
        return self.lookup_term(text) is not None or self.lookup_category(text) is not None

    # === Classification ===

    def is_condition(self, canonical: Optional[str]) -> bool:
        return canonical in self.conditions

    def is_category(self, canonical: Optional[str]) -> bool:
        return canonical in self.category_keywords

    # === Fuzzy candidates ===

    @property
    def fuzzy_candidates(self) -> tuple:
        """
        Every string the fuzzy fallback scores against, in a fixed order.

        Term canonicals, term variants, category slugs, category keywords.
        Ties keep the earliest candidate.
        """
        return self._fuzzy_candidates

    def _collect_fuzzy_candidates(self) -> tuple:
        candidates = list(self.term_variants)
        for variants in self.term_variants.values():
            candidates.extend(variants)
        candidates.extend(self.category_keywords)
        for keywords in self.category_keywords.values():
            candidates.extend(keywords)
        return tuple(candidates)

    def canonical_for(self, candidate: str) -> Optional[str]:
        """
        Map a fuzzy-matched candidate string back to its canonical term.

        Category table first, then the term table.
        """
        if candidate in self.category_keywords:
            return candidate
        category = self._category_index.get(candidate)
        if category is not None:
            return category
        if candidate in self.term_variants:
            return candidate
        return self._term_index.get(candidate)

    def expand_typos(self, text: str) -> str:
        """
        Replace every known single-word variant in text with its canonical term.

        Conditions and category slugs are left alone; only product and
        furniture nouns are rewritten.

        Example:
            >>> Vocabulary.default().expand_typos("old labtop")
            "old laptop"
        """
        def replace(match: re.Match) -> str:
            word = match.group(0)
            canonical = self.lookup_product(word) or self.lookup_term(word)
            if canonical is None or self.is_condition(canonical) or self.is_category(canonical):
                return word
            return canonical

        return re.sub(r"[a-z0-9]+", replace, text.lower())


@lru_cache(maxsize=1)
def _default_vocabulary() -> Vocabulary:
    return Vocabulary.from_tables(
        TERM_VARIANTS,
        CATEGORY_KEYWORDS,
        PRODUCT_VARIANTS,
        CONDITIONS,
    )
