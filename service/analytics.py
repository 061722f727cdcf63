"""
Search analytics sinks.

After each non-blank search the service records the search term, how many
listings were shown, whether anything was found and who searched. Sinks
never raise: a failed write is logged as a warning and reported as False,
so analytics can't break a search.

Sheets structure (GoogleSheetsAnalyticsSink):
- search-analytics-YYYY-MM-DD: one tab per day, header row on creation
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

from engine.structured_logging import get_logger, log_search_analytics

try:
    import gspread
    from google.oauth2.service_account import Credentials
    GSPREAD_AVAILABLE = True
except ImportError:
    GSPREAD_AVAILABLE = False

# Module-level logger
_logger = get_logger("service.analytics")

# Column order for search analytics rows
ANALYTICS_COLUMNS = [
    'timestamp',
    'search_term',
    'results_count',
    'has_results',
    'user_id',
]

SHEET_PREFIX = "search-analytics"


class AnalyticsSink(Protocol):
    """Anything that can record one search."""

    def record(
        self,
        raw_query: str,
        result_count: int,
        has_results: bool,
        user_id: Optional[str] = None,
    ) -> bool:
        ...


class LoggingAnalyticsSink:
    """Records searches as structured log events (event=search_analytics)."""

    def record(
        self,
        raw_query: str,
        result_count: int,
        has_results: bool,
        user_id: Optional[str] = None,
    ) -> bool:
        try:
            log_search_analytics(
                query=raw_query,
                results=result_count,
                has_results=has_results,
                user_id=user_id,
            )
            return True
        except Exception as e:
            _logger.warning(f"Failed to log search analytics: {e}")
            return False


class GoogleSheetsAnalyticsSink:
    """
    Appends search analytics rows to Google Sheets with daily tab rotation.

    Each day gets its own worksheet within the spreadsheet:
    - search-analytics-2026-10-19
    """

    SCOPES = [
        'https://www.googleapis.com/auth/spreadsheets',
        'https://www.googleapis.com/auth/drive'
    ]

    def __init__(
        self,
        spreadsheet_id: str,
        credentials_dict: Optional[Dict[str, Any]] = None,
        client: Any = None,
    ):
        """
        Initialize the sink.

        Args:
            spreadsheet_id: The Google Sheets spreadsheet ID
            credentials_dict: Service account credentials as a dict
            client: Already authorised gspread client (skips credentials)
        """
        self.spreadsheet_id = spreadsheet_id
        self.credentials_dict = credentials_dict
        self._client = client
        self._spreadsheet = None
        self._sheet_cache = {}

    def _get_client(self):
        """Get or create the gspread client."""
        if self._client is None:
            credentials = Credentials.from_service_account_info(
                self.credentials_dict,
                scopes=self.SCOPES
            )
            self._client = gspread.authorize(credentials)
        return self._client

    def _get_spreadsheet(self):
        if self._spreadsheet is None:
            self._spreadsheet = self._get_client().open_by_key(self.spreadsheet_id)
        return self._spreadsheet

    def _get_or_create_sheet(self, sheet_name: str, columns: List[str]):
        """Get existing worksheet or create it with a header row."""
        if sheet_name in self._sheet_cache:
            return self._sheet_cache[sheet_name]

        spreadsheet = self._get_spreadsheet()

        try:
            worksheet = spreadsheet.worksheet(sheet_name)
        except gspread.WorksheetNotFound:
            worksheet = spreadsheet.add_worksheet(
                title=sheet_name,
                rows=1000,
                cols=len(columns)
            )
            worksheet.append_row(columns, value_input_option='RAW')
            _logger.info(
                f"Created analytics worksheet {sheet_name}",
                extra={"event": "analytics_sheet_created", "worksheet": sheet_name}
            )

        self._sheet_cache[sheet_name] = worksheet
        return worksheet

    @staticmethod
    def sheet_name_for(day: datetime) -> str:
        return f"{SHEET_PREFIX}-{day.strftime('%Y-%m-%d')}"

    def record(
        self,
        raw_query: str,
        result_count: int,
        has_results: bool,
        user_id: Optional[str] = None,
    ) -> bool:
        """
        Append one analytics row to today's worksheet.

        Returns:
            True if logged successfully, False otherwise
        """
        try:
            now = datetime.now()
            worksheet = self._get_or_create_sheet(self.sheet_name_for(now), ANALYTICS_COLUMNS)

            row = [
                now.strftime('%Y-%m-%d %H:%M:%S'),
                raw_query or '',
                str(result_count),
                'TRUE' if has_results else 'FALSE',
                user_id or '',
            ]

            worksheet.append_row(row, value_input_option='RAW')
            return True

        except Exception as e:
            _logger.warning(
                f"Failed to log search analytics to Google Sheets: {e}",
                extra={"event": "analytics_write_failed", "sink": "gsheets", "error_type": type(e).__name__}
            )
            return False


def create_gsheets_sink(
    spreadsheet_id: str,
    credentials_dict: Dict[str, Any],
) -> Optional[GoogleSheetsAnalyticsSink]:
    """
    Build a Google Sheets sink if gspread is installed.

    Returns:
        GoogleSheetsAnalyticsSink, or None if gspread is not available
    """
    if not GSPREAD_AVAILABLE:
        _logger.warning("gspread not installed. Google Sheets analytics disabled.")
        return None

    return GoogleSheetsAnalyticsSink(spreadsheet_id, credentials_dict)
