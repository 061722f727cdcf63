"""Search service, candidate repository and analytics sinks."""

from service.search_service import SearchService, SearchServiceConfig, SearchError
from service.repository import InMemoryListingRepository
from service.analytics import (
    AnalyticsSink,
    LoggingAnalyticsSink,
    GoogleSheetsAnalyticsSink,
    create_gsheets_sink,
    GSPREAD_AVAILABLE,
)

__all__ = [
    "SearchService",
    "SearchServiceConfig",
    "SearchError",
    "InMemoryListingRepository",
    "AnalyticsSink",
    "LoggingAnalyticsSink",
    "GoogleSheetsAnalyticsSink",
    "create_gsheets_sink",
    "GSPREAD_AVAILABLE",
]
