"""Query interpretation and relevance ranking for listing search."""

from engine.context import (
    InterpretationStatus,
    PriceRange,
    SearchIntent,
    CandidateItem,
    RankedResult,
    SearchResponse,
)
from engine.vocabulary import Vocabulary
from engine.similarity import similarity, edit_similarity, edit_distance
from engine.resolver import WordResolver, InterpreterConfig, resolve_word, resolve_phrase
from engine.pricing import PriceExtractor, PricePattern, PRICE_PATTERNS, extract_price
from engine.products import ProductMatcher, ProductMatch, match_product
from engine.interpreter import QueryInterpreter, interpret, normalize_query
from engine.ranking import RelevanceRanker, RankingConfig, score, rank, rank_with_scores

__all__ = [
    "InterpretationStatus",
    "PriceRange",
    "SearchIntent",
    "CandidateItem",
    "RankedResult",
    "SearchResponse",
    "Vocabulary",
    "similarity",
    "edit_similarity",
    "edit_distance",
    "WordResolver",
    "InterpreterConfig",
    "resolve_word",
    "resolve_phrase",
    "PriceExtractor",
    "PricePattern",
    "PRICE_PATTERNS",
    "extract_price",
    "ProductMatcher",
    "ProductMatch",
    "match_product",
    "QueryInterpreter",
    "interpret",
    "normalize_query",
    "RelevanceRanker",
    "RankingConfig",
    "score",
    "rank",
    "rank_with_scores",
]
