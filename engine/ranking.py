"""
Relevance ranking of candidate listings against a raw query.

Score is additive and not normalised:
- +10 if the title contains the query
- +5 if the title contains the query with whitespace collapsed
- +3 per query word that closely matches some title word
- +2 if the description contains the query

Candidates at or below the minimum score are dropped; the rest are sorted
best first, keeping their original order on ties.
"""

from dataclasses import dataclass
from typing import Optional

from engine.context import CandidateItem, RankedResult
from engine.similarity import similarity
from engine.structured_logging import Timer, log_ranking
from vocabulary.patterns import WHITESPACE_PATTERN


@dataclass(frozen=True)
class RankingConfig:
    """
    Weights and thresholds for relevance scoring.

    Attributes:
        title_match_bonus: Query found in the title
        sequence_bonus: Whitespace-collapsed query found in the title
        word_match_bonus: Per query word matching a title word
        description_bonus: Query found in the description
        word_similarity_threshold: Minimum similarity (exclusive) for a word match
        min_score: Candidates scoring at or below this are dropped
    """
    title_match_bonus: float = 10
    sequence_bonus: float = 5
    word_match_bonus: float = 3
    description_bonus: float = 2
    word_similarity_threshold: float = 0.8
    min_score: float = 0.3


class RelevanceRanker:
    """
    Scores and orders candidate listings.

    Example:
        ranker = RelevanceRanker()
        ranked = ranker.rank(candidates, "study table")
    """

    def __init__(self, config: Optional[RankingConfig] = None):
        self.config = config or RankingConfig()

    def score(self, item: CandidateItem, query: str) -> float:
        """
        Relevance of one listing to a query.

        Args:
            item: Candidate listing
            query: Raw query text

        Returns:
            Non-negative score
        """
        query = query.lower().strip()
        if not query:
            return 0.0

        title = item.title.lower()
        description = (item.description or "").lower()
        score = 0.0

        if query in title:
            score += self.config.title_match_bonus

        if WHITESPACE_PATTERN.sub(" ", query) in title:
            score += self.config.sequence_bonus

        title_words = title.split()
        for word in query.split():
            if any(
                similarity(word, title_word) > self.config.word_similarity_threshold
                for title_word in title_words
            ):
                score += self.config.word_match_bonus

        if query in description:
            score += self.config.description_bonus

        return score

    def rank_with_scores(self, items: list, query: str) -> list:
        """
        Score, filter and sort candidates, keeping the scores.

        An empty query passes every item through in its original order.

        Args:
            items: Candidate listings, in repository order
            query: Raw query text

        Returns:
            List of RankedResult, best first

        Raises:
            TypeError: If items is not a list/tuple or query is not a string
        """
        if not isinstance(items, (list, tuple)):
            raise TypeError(f"items must be a list, not {type(items).__name__}")
        if not isinstance(query, str):
            raise TypeError(f"query must be str, not {type(query).__name__}")

        if not query.strip():
            return [RankedResult(item, 0.0) for item in items]

        with Timer() as timer:
            scored = [RankedResult(item, self.score(item, query)) for item in items]
            kept = [r for r in scored if r.score > self.config.min_score]
            # sorted() is stable, so ties keep repository order
            kept = sorted(kept, key=lambda r: r.score, reverse=True)

        log_ranking(
            query=query,
            candidates=len(items),
            results=len(kept),
            ranking_time_ms=timer.elapsed_ms,
            top_score=kept[0].score if kept else None,
        )
        return kept

    def rank(self, items: list, query: str) -> list:
        """Ranked listings without scores. See rank_with_scores."""
        return [r.item for r in self.rank_with_scores(items, query)]


def score(item: CandidateItem, query: str) -> float:
    """Score one listing with the default weights."""
    return RelevanceRanker().score(item, query)


def rank(items: list, query: str) -> list:
    """Rank listings with the default weights."""
    return RelevanceRanker().rank(items, query)


def rank_with_scores(items: list, query: str) -> list:
    """Rank listings with the default weights, keeping scores."""
    return RelevanceRanker().rank_with_scores(items, query)
