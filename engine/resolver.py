"""
Word and phrase resolution for listing search.

Maps a query token (or a two-token phrase) to a canonical vocabulary term:
a condition ("Used"), a category slug ("furniture") or a product/furniture
noun ("laptop"). Exact variant lookup first, then an edit-distance fallback
over the whole vocabulary. No match is a normal outcome (None), never an
error.
"""

from dataclasses import dataclass
from typing import Optional

from engine.similarity import similarity
from engine.vocabulary import Vocabulary
from engine.structured_logging import get_logger
from vocabulary.patterns import FUZZY_EXEMPT_WORDS

# Module-level logger
_logger = get_logger("engine.resolver")


@dataclass(frozen=True)
class InterpreterConfig:
    """
    Thresholds for query interpretation.

    Attributes:
        word_threshold: Minimum similarity (exclusive) for a fuzzy word match
        product_threshold: Minimum similarity (exclusive) for a fuzzy product match
        min_fuzzy_token_length: Shorter tokens are only looked up exactly
    """
    word_threshold: float = 0.4
    product_threshold: float = 0.7
    min_fuzzy_token_length: int = 3


class WordResolver:
    """
    Resolves tokens and two-word phrases to canonical terms.

    Example:
        resolver = WordResolver()
        resolver.resolve_word("laptp")           # "laptop"
        resolver.resolve_word("chair")           # "furniture"
        resolver.resolve_word("chairs")          # "chair"
        resolver.resolve_phrase("second", "hnd") # "Used"
    """

    def __init__(
        self,
        vocabulary: Optional[Vocabulary] = None,
        config: Optional[InterpreterConfig] = None,
    ):
        """
        Initialize the resolver.

        Args:
            vocabulary: Vocabulary to resolve against (default: shipped tables)
            config: Thresholds (uses defaults if None)
        """
        self.vocabulary = vocabulary or Vocabulary.default()
        self.config = config or InterpreterConfig()

    def resolve_word(self, token: str) -> Optional[str]:
        """
        Resolve a single token.

        Args:
            token: Query word

        Returns:
            Canonical term, or None if nothing is close enough
        """
        token = token.lower().strip()
        if not token:
            return None

        exact = self._resolve_exact(token)
        if exact is not None:
            return exact

        if len(token) < self.config.min_fuzzy_token_length or token in FUZZY_EXEMPT_WORDS:
            return None

        return self._resolve_fuzzy(token, self.vocabulary.fuzzy_candidates)

    def resolve_phrase(self, token_a: str, token_b: str) -> Optional[str]:
        """
        Resolve a two-word phrase ("second hand", "brand new").

        A phrase that is a split spelling of one known word ("note book",
        "text book") resolves like that word. The fuzzy fallback only scores multi-word vocabulary entries, and is
        skipped when either word is already an exact vocabulary hit, so
        "used table" stays two words instead of becoming "study table".

        Args:
            token_a: First word
            token_b: Following word

        Returns:
            Canonical term, or None
        """
        token_a = token_a.lower().strip()
        token_b = token_b.lower().strip()
        phrase = f"{token_a} {token_b}"

        exact = self._resolve_exact(phrase) or self._resolve_exact(token_a + token_b)
        if exact is not None:
            return exact

        if self._is_exact_word(token_a) or self._is_exact_word(token_b):
            return None

        multi_word = tuple(c for c in self.vocabulary.fuzzy_candidates if " " in c)
        return self._resolve_fuzzy(phrase, multi_word)

    def _resolve_exact(self, text: str) -> Optional[str]:
        """
        Exact membership: term table, then canonical condition names
        ("like new"), then category keywords.
        """
        return (
            self.vocabulary.lookup_term(text)
            or self.vocabulary.lookup_condition(text)
            or self.vocabulary.lookup_category(text)
        )

    def _is_exact_word(self, token: str) -> bool:
        return self.vocabulary.is_known(token) or self.vocabulary.lookup_condition(token) is not None

    def _resolve_fuzzy(self, text: str, candidates: tuple) -> Optional[str]:
        """Best-scoring candidate above the word threshold, mapped to its canonical."""
        best_match = None
        best_score = self.config.word_threshold

        for candidate in candidates:
            score = similarity(text, candidate)
            if score > best_score:
                best_score = score
                best_match = candidate

        if best_match is None:
            return None

        canonical = self.vocabulary.canonical_for(best_match)
        _logger.debug(
            f"Fuzzy resolved '{text}' -> '{canonical}'",
            extra={
                "event": "fuzzy_resolution",
                "token": text,
                "matched": best_match,
                "canonical": canonical,
                "similarity": round(best_score, 3),
            }
        )
        return canonical


def resolve_word(token: str) -> Optional[str]:
    """Resolve a token against the default vocabulary."""
    return WordResolver().resolve_word(token)


def resolve_phrase(token_a: str, token_b: str) -> Optional[str]:
    """Resolve a two-word phrase against the default vocabulary."""
    return WordResolver().resolve_phrase(token_a, token_b)
