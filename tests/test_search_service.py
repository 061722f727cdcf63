"""
Tests for the end-to-end search service.

Run with: pytest tests/test_search_service.py -v
"""

import pytest
from unittest.mock import Mock

from engine.context import CandidateItem, InterpretationStatus
from service.repository import InMemoryListingRepository
from service.search_service import SearchService, SearchServiceConfig, SearchError


@pytest.fixture
def listings():
    return [
        CandidateItem("Dell Inspiron laptop", "i5, 8GB RAM, lightly used", 14000, "Used", "electronics", "1"),
        CandidateItem("HP laptop", "Sealed box", 45000, "New", "electronics", "2"),
        CandidateItem("Wooden study table", "Sturdy table", 1500, "Used", "furniture", "3"),
        CandidateItem("Office chair", "Ergonomic chair", 2500, "Like New", "furniture", "4"),
        CandidateItem("Engineering Mathematics textbook", "3rd semester", 300, "Used", "books-and-stationery", "5"),
    ]


@pytest.fixture
def analytics():
    return Mock()


@pytest.fixture
def service(listings, analytics):
    repo = InMemoryListingRepository(listings)
    return SearchService(repo.fetch, analytics=analytics)


def ids(response):
    return [item.item_id for item in response.items]


class TestSearch:
    """Test complete searches."""

    def test_structured_query(self, service, analytics):
        response = service.search("used laptop under 15000")

        assert ids(response) == ["1"]
        assert response.total == 1
        assert response.type == "results"
        assert response.has_results
        assert response.has_exact_matches
        assert response.intent.specific_product == "laptop"
        analytics.record.assert_called_once_with(
            "used laptop under 15000", 1, True, user_id=None
        )

    def test_category_query_scored(self, service):
        response = service.search("chair")

        assert ids(response) == ["4"]
        assert response.scores == [20]
        assert response.intent.category == "furniture"
        assert response.has_exact_matches

    def test_exact_match_flag_without_search_text(self, service):
        """Category-only queries compare the normalised query to titles."""
        matched = service.search("Chair")
        assert matched.intent.search_text == ""
        assert matched.has_exact_matches

        # found through the description, not the title
        unmatched = service.search("used")
        assert ids(unmatched) == ["1"]
        assert not unmatched.has_exact_matches

    def test_no_results(self, service, analytics):
        response = service.search("zzzz", user_id="u42")

        assert response.items == []
        assert response.total == 0
        assert response.type == "no_results"
        analytics.record.assert_called_once_with("zzzz", 0, False, user_id="u42")

    def test_uninterpretable_skips_fetch(self, listings, analytics):
        fetch = Mock(return_value=listings)
        service = SearchService(fetch, analytics=analytics)

        response = service.search("to and from")

        assert response.type == "uninterpretable"
        assert response.items == []
        assert response.intent.status == InterpretationStatus.UNINTERPRETABLE
        fetch.assert_not_called()
        analytics.record.assert_called_once_with("to and from", 0, False, user_id=None)

    def test_blank_query_lists_everything(self, service, analytics):
        response = service.search("")

        assert ids(response) == ["1", "2", "3", "4", "5"]
        assert response.total == 5
        assert response.type == "results"
        assert response.scores == [0.0] * 5
        analytics.record.assert_not_called()

    def test_without_analytics(self, listings):
        repo = InMemoryListingRepository(listings)
        response = SearchService(repo.fetch).search("chair")
        assert ids(response) == ["4"]


class TestPagination:
    """Test page and view-all slicing."""

    @pytest.fixture
    def paged(self, listings):
        repo = InMemoryListingRepository(listings)
        return SearchService(repo.fetch, config=SearchServiceConfig(page_size=2))

    def test_pages(self, paged):
        assert ids(paged.search("", page=1)) == ["1", "2"]
        assert ids(paged.search("", page=2)) == ["3", "4"]
        assert ids(paged.search("", page=3)) == ["5"]

    def test_past_last_page(self, paged):
        response = paged.search("", page=4)

        assert response.items == []
        assert response.total == 5
        assert response.type == "no_results"

    def test_explicit_limit(self, paged):
        assert ids(paged.search("", page=2, limit=3)) == ["4", "5"]

    def test_view_all(self, paged):
        assert ids(paged.search("", page=3, view_all=True, limit=3)) == ["1", "2", "3"]

    def test_view_all_default_limit(self, listings):
        repo = InMemoryListingRepository(listings)
        service = SearchService(repo.fetch, config=SearchServiceConfig(page_size=2, view_all_limit=4))
        assert len(service.search("", view_all=True).items) == 4

    @pytest.mark.parametrize("kwargs", [{"page": 0}, {"page": -1}, {"limit": 0}])
    def test_invalid_paging(self, paged, kwargs):
        with pytest.raises(ValueError):
            paged.search("", **kwargs)


class TestCandidateFetch:
    """Test the contract with the candidate source."""

    def test_fetch_capped(self, listings):
        fetch = Mock(return_value=listings)
        service = SearchService(fetch, config=SearchServiceConfig(max_candidates=2))

        response = service.search("")

        fetch.assert_called_once_with(response.intent, 2)
        assert response.total == 2

    def test_fetch_failure(self, analytics):
        error = RuntimeError("store unavailable")
        service = SearchService(Mock(side_effect=error), analytics=analytics)

        with pytest.raises(SearchError) as exc_info:
            service.search("laptop")

        assert exc_info.value.__cause__ is error
        analytics.record.assert_not_called()
