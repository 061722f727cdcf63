"""
End-to-end listing search.

Glues the engine to its collaborators:

    raw query -> interpret -> fetch candidates -> rank -> paginate -> analytics

The engine never touches storage; candidates come from an injected fetch
callable (an InMemoryListingRepository, or an adapter over a real store).
"""

from dataclasses import dataclass
from typing import Callable, Optional

from engine.context import SearchIntent, SearchResponse
from engine.interpreter import QueryInterpreter, normalize_query
from engine.ranking import RelevanceRanker
from engine.structured_logging import Timer, get_logger, log_search, log_error
from service.analytics import AnalyticsSink

# Module-level logger
_logger = get_logger("service.search")

# (intent, limit) -> candidate listings
FetchCandidates = Callable[[SearchIntent, int], list]


@dataclass
class SearchServiceConfig:
    """
    Configuration for search behavior.

    Attributes:
        page_size: Listings per page when no limit is given
        max_candidates: Most listings fetched from the store per search
        view_all_limit: Most listings returned in view-all mode
    """
    page_size: int = 12
    max_candidates: int = 500
    view_all_limit: int = 100


class SearchError(Exception):
    """Raised when the candidate fetch fails."""
    pass


class SearchService:
    """
    Runs searches against a candidate source.

    Example:
        repo = InMemoryListingRepository(items)
        service = SearchService(repo.fetch, analytics=LoggingAnalyticsSink())
        response = service.search("used laptop under 15000", page=1)
        for item in response.items:
            print(item.title, item.price)
    """

    def __init__(
        self,
        fetch_candidates: FetchCandidates,
        analytics: Optional[AnalyticsSink] = None,
        interpreter: Optional[QueryInterpreter] = None,
        ranker: Optional[RelevanceRanker] = None,
        config: Optional[SearchServiceConfig] = None,
    ):
        """
        Initialize the service.

        Args:
            fetch_candidates: Returns listings matching an intent, capped at a limit
            analytics: Where to record searches (None disables analytics)
            interpreter: Query interpreter (default vocabulary if None)
            ranker: Relevance ranker (default weights if None)
            config: Paging and fetch limits (uses defaults if None)
        """
        self.fetch_candidates = fetch_candidates
        self.analytics = analytics
        self.interpreter = interpreter or QueryInterpreter()
        self.ranker = ranker or RelevanceRanker()
        self.config = config or SearchServiceConfig()

    def search(
        self,
        raw_query: str,
        page: int = 1,
        limit: Optional[int] = None,
        view_all: bool = False,
        user_id: Optional[str] = None,
    ) -> SearchResponse:
        """
        Search listings with a freeform query.

        Args:
            raw_query: Query exactly as typed (may be blank)
            page: 1-based page number (ignored in view-all mode)
            limit: Listings per page (default: config.page_size)
            view_all: Return up to limit (default: config.view_all_limit)
                listings from the top instead of one page
            user_id: Searching user, for analytics

        Returns:
            SearchResponse

        Raises:
            SearchError: If fetching candidates fails
            ValueError: If page or limit is not positive
        """
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if limit is not None and limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")

        with Timer() as timer:
            intent = self.interpreter.interpret(raw_query)

            if intent.is_uninterpretable:
                response = SearchResponse(items=[], intent=intent, type="uninterpretable")
            else:
                response = self._run(intent, page, limit, view_all)

        log_search(
            query=raw_query,
            results=len(response.items),
            total=response.total,
            search_time_ms=timer.elapsed_ms,
            response_type=response.type,
            filters=intent.to_filters(),
            page=page,
            view_all=view_all or None,
        )

        if raw_query.strip():
            self._record_analytics(raw_query, response, user_id)

        return response

    def _run(
        self,
        intent: SearchIntent,
        page: int,
        limit: Optional[int],
        view_all: bool,
    ) -> SearchResponse:
        try:
            candidates = self.fetch_candidates(intent, self.config.max_candidates)
        except Exception as e:
            log_error(e, context="candidate_fetch", query=intent.raw_query)
            raise SearchError(f"Failed to fetch listings for '{intent.raw_query}': {e}") from e

        candidates = list(candidates)[:self.config.max_candidates]
        ranked = self.ranker.rank_with_scores(candidates, intent.raw_query)
        total = len(ranked)

        if view_all:
            shown = ranked[:limit or self.config.view_all_limit]
        else:
            per_page = limit or self.config.page_size
            offset = (page - 1) * per_page
            shown = ranked[offset:offset + per_page]

        items = [r.item for r in shown]
        # Category/condition-only queries compare the normalised query instead
        search_text = intent.search_text.lower() or normalize_query(intent.raw_query)
        has_exact_matches = bool(search_text) and any(
            search_text in item.title.lower() for item in items
        )

        return SearchResponse(
            items=items,
            intent=intent,
            total=total,
            has_exact_matches=has_exact_matches,
            type="results" if items else "no_results",
            scores=[r.score for r in shown],
        )

    def _record_analytics(
        self,
        raw_query: str,
        response: SearchResponse,
        user_id: Optional[str],
    ) -> None:
        if self.analytics is None:
            return
        self.analytics.record(
            raw_query,
            len(response.items),
            response.has_results,
            user_id=user_id,
        )
