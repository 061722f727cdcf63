"""
Structured logging for listing search.

Provides JSON logging with:
- Rotating file handlers (daily rotation, 30-day retention)
- Separate error log file
- Search latency tracking
- Interpretation context (query, category, condition, price, product)

Nothing is configured on import; the host application calls
setup_logging() once. Until then records propagate to the root logger.

Usage:
    from engine.structured_logging import get_logger, log_search

    logger = get_logger("engine.ranking")
    logger.debug("Ranking candidates", extra={"query": "laptop", "candidates": 40})

    # Or use convenience functions:
    log_search(query="used laptop", results=12, total=40, search_time_ms=8.5)
"""

import json
import logging
import sys
import time
import traceback
from datetime import datetime, timezone
from functools import wraps
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Dict, Optional

ROOT_LOGGER_NAME = "listing_search"


# =============================================================================
# Formatters
# =============================================================================

class JSONFormatter(logging.Formatter):
    """
    Formats log records as one JSON object per line.

    Output format:
    {
        "timestamp": "2026-10-19T10:30:00.123456Z",
        "level": "INFO",
        "logger": "listing_search.engine.interpreter",
        "message": "Query interpreted",
        "event": "query_interpretation",
        "query": "used laptop under 15000",
        ...
    }
    """

    EXTRA_FIELDS = (
        # Query and interpretation
        "event", "query", "status", "category", "condition", "price_range",
        "specific_product", "residual_text", "filters",
        # Resolution detail
        "token", "matched", "canonical", "similarity", "pattern",
        # Ranking and results
        "candidates", "results", "total", "page", "limit", "view_all",
        "response_type", "has_exact_matches", "top_score",
        # Performance
        "search_latency_ms", "interpretation_ms", "ranking_ms", "elapsed_ms",
        "function",
        # Errors
        "error_type", "stack_trace", "context",
        # Analytics
        "user_id", "has_results", "sink", "worksheet",
    )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in self.EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value

        if record.exc_info:
            log_data["error_type"] = record.exc_info[0].__name__ if record.exc_info[0] else None
            log_data["stack_trace"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable formatter for console output.

    Output format:
    2026-10-19 10:30:00 | INFO     | listing_search.service | Search complete | event=search_complete
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
        "RESET": "\033[0m",
    }

    CONTEXT_FIELDS = ("event", "query", "results", "search_latency_ms")

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for console."""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname

        if self.use_color:
            color = self.COLORS.get(level, "")
            reset = self.COLORS["RESET"]
        else:
            color = reset = ""

        msg = f"{timestamp} | {color}{level:8}{reset} | {record.name} | {record.getMessage()}"

        context_parts = []
        for field in self.CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                context_parts.append(f"{field}={value}")

        if context_parts:
            msg += f" | {', '.join(context_parts)}"

        if record.exc_info:
            msg += f"\n{self.formatException(record.exc_info)}"

        return msg


# =============================================================================
# Logger Setup
# =============================================================================

_loggers: Dict[str, logging.Logger] = {}
_initialized = False


def setup_logging(
    log_dir: str = "logs",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    enable_console: bool = True,
    enable_file: bool = True,
    enable_error_log: bool = True,
) -> None:
    """
    Initialize the logging system. Safe to call more than once.

    Creates:
    - logs/listing_search.log (all logs, JSON, rotating daily, 30-day retention)
    - logs/errors.log (ERROR and above, rotating daily, 30-day retention)
    - Console output (if enabled)

    Args:
        log_dir: Directory for log files
        console_level: Minimum level for console output
        file_level: Minimum level for file output
        enable_console: Whether to output to console
        enable_file: Whether to write listing_search.log
        enable_error_log: Whether to write errors.log
    """
    global _initialized
    if _initialized:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers = []

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(ConsoleFormatter())
        root_logger.addHandler(console_handler)

    if enable_file or enable_error_log:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        if enable_file:
            root_logger.addHandler(
                _rotating_handler(log_path / "listing_search.log", file_level)
            )

        if enable_error_log:
            root_logger.addHandler(
                _rotating_handler(log_path / "errors.log", logging.ERROR)
            )

    _initialized = True


def _rotating_handler(filename: Path, level: int) -> TimedRotatingFileHandler:
    handler = TimedRotatingFileHandler(
        filename=str(filename),
        when="midnight",
        interval=1,
        backupCount=30,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    handler.suffix = "%Y-%m-%d"
    return handler


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Dotted module name, e.g. "engine.ranking"

    Returns:
        Logger under the listing_search namespace

    Example:
        logger = get_logger("service.search")
        logger.info("Search started", extra={"query": "study table"})
    """
    prefix = f"{ROOT_LOGGER_NAME}."
    logger_name = name if name.startswith(prefix) else f"{prefix}{name}"

    if logger_name not in _loggers:
        _loggers[logger_name] = logging.getLogger(logger_name)

    return _loggers[logger_name]


# =============================================================================
# Convenience Functions
# =============================================================================

def log_interpretation(
    query: str,
    status: str,
    filters: Dict[str, Any],
    interpretation_time_ms: float,
    **extra
) -> None:
    """
    Log the outcome of interpreting a query.

    Args:
        query: Raw query text
        status: Interpretation status value ("interpreted", "empty", ...)
        filters: Derived filters (category, condition, prices, product, text)
        interpretation_time_ms: Time taken to interpret
        **extra: Additional fields
    """
    logger = get_logger("interpretation")
    logger.debug(
        f"Query interpreted: {status}",
        extra={
            "event": "query_interpretation",
            "query": query,
            "status": status,
            "filters": filters,
            "interpretation_ms": round(interpretation_time_ms, 2),
            **extra
        }
    )


def log_ranking(
    query: str,
    candidates: int,
    results: int,
    ranking_time_ms: float,
    top_score: Optional[float] = None,
    **extra
) -> None:
    """
    Log a ranking pass.

    Args:
        query: Text the candidates were ranked against
        candidates: Number of candidates in
        results: Number of candidates kept after the score cut-off
        ranking_time_ms: Time taken to score and sort
        top_score: Score of the best result, if any
        **extra: Additional fields
    """
    logger = get_logger("ranking")
    logger.debug(
        f"Ranked {candidates} candidates, kept {results}",
        extra={
            "event": "ranking_complete",
            "query": query,
            "candidates": candidates,
            "results": results,
            "top_score": top_score,
            "ranking_ms": round(ranking_time_ms, 2),
            **extra
        }
    )


def log_search(
    query: str,
    results: int,
    total: int,
    search_time_ms: float,
    response_type: Optional[str] = None,
    filters: Optional[Dict[str, Any]] = None,
    **extra
) -> None:
    """
    Log a completed search.

    Args:
        query: Raw query text
        results: Listings returned on this page
        total: Listings that matched before pagination
        search_time_ms: End-to-end search time
        response_type: "results", "no_results" or "uninterpretable"
        filters: Filters the repository was queried with
        **extra: Additional fields
    """
    logger = get_logger("search")
    logger.info(
        f"Search complete: {total} listings matched, {results} returned",
        extra={
            "event": "search_complete",
            "query": query,
            "results": results,
            "total": total,
            "response_type": response_type,
            "filters": filters,
            "search_latency_ms": round(search_time_ms, 2),
            **extra
        }
    )


def log_search_analytics(
    query: str,
    results: int,
    has_results: bool,
    user_id: Optional[str] = None,
    **extra
) -> None:
    """
    Log one search analytics row (term, result count, user).

    Args:
        query: Raw query text
        results: Number of results shown
        has_results: Whether anything was found
        user_id: Searching user, if known
        **extra: Additional fields
    """
    logger = get_logger("analytics")
    logger.info(
        f"Search analytics: '{query}' -> {results} results",
        extra={
            "event": "search_analytics",
            "query": query,
            "results": results,
            "has_results": has_results,
            "user_id": user_id,
            **extra
        }
    )


def log_error(
    error: Exception,
    context: Optional[str] = None,
    query: Optional[str] = None,
    **extra
) -> None:
    """
    Log an error with full context.

    Args:
        error: The exception
        context: What was happening when it was raised
        query: Query being served, if any
        **extra: Additional fields
    """
    logger = get_logger("error")
    logger.error(
        f"Error: {type(error).__name__}: {error}",
        extra={
            "event": "error",
            "query": query,
            "error_type": type(error).__name__,
            "stack_trace": traceback.format_exc(),
            "context": context,
            **extra
        },
        exc_info=True
    )


# =============================================================================
# Performance Timing
# =============================================================================

def timed(event_name: str, logger_name: str = "performance"):
    """
    Decorator to time function execution and log it.

    Usage:
        @timed("listing_fetch")
        def fetch(intent: SearchIntent) -> list:
            ...

    Args:
        event_name: Name of the event for logging
        logger_name: Logger to use
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(logger_name)
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                elapsed_ms = (time.perf_counter() - start) * 1000
                logger.error(
                    f"{event_name} failed after {elapsed_ms:.2f}ms",
                    extra={
                        "event": f"{event_name}_error",
                        "elapsed_ms": round(elapsed_ms, 2),
                        "function": func.__name__,
                        "error_type": type(e).__name__,
                    },
                    exc_info=True
                )
                raise

            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.debug(
                f"{event_name} completed",
                extra={
                    "event": f"{event_name}_timing",
                    "elapsed_ms": round(elapsed_ms, 2),
                    "function": func.__name__,
                }
            )
            return result
        return wrapper
    return decorator


class Timer:
    """
    Context manager for timing code blocks.

    Usage:
        with Timer() as t:
            # ... do work ...
        print(f"Took {t.elapsed_ms}ms")
    """

    def __init__(self):
        self.start_time = None
        self.end_time = None
        self.elapsed_ms = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        self.end_time = time.perf_counter()
        self.elapsed_ms = (self.end_time - self.start_time) * 1000
