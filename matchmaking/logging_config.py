"""
Centralized logging configuration for the matchmaking service.

Provides a unified log line format for the matcher and its command-line driver:
Format: 2026-01-06T14:05:52Z [source] LEVEL message

Environment Variables:
    LOG_LEVEL: Set to "DEBUG", "TRACE", or "INFO" (default)
               - INFO: Run summaries (teams formed, unmatched counts)
               - DEBUG: Per-decision narration (filter stages, anchors, picks)
               - TRACE: Candidate-by-candidate scoring

Usage:
    from matchmaking.logging_config import configure_logging, get_logger

    configure_logging(source="matcher")
    logger = get_logger(__name__)
    logger.info("Matching started")
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import UTC, datetime

# Custom TRACE level for very verbose diagnostics
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def _trace(self: logging.Logger, message: object, *args: object, **kw: object) -> None:
    """Log a message at TRACE level (5)."""
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kw)  # type: ignore[arg-type]


# Add trace method to Logger class
logging.Logger.trace = _trace  # type: ignore[attr-defined]


class ISO8601Formatter(logging.Formatter):
    """Custom formatter producing ISO8601 timestamps in UTC.

    Output format: 2026-01-06T14:05:52Z [source] LEVEL message
    """

    def __init__(self, source: str = "matchmaking"):
        """Initialize formatter with a source identifier.

        Args:
            source: Identifier shown in brackets (e.g., "matcher", "cli")
        """
        self.source = source
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record with ISO8601 UTC timestamp."""
        timestamp = datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
        level = record.levelname
        message = record.getMessage()

        if record.exc_info:
            exception_text = self.formatException(record.exc_info)
            message = f"{message}\n{exception_text}"

        return f"{timestamp} [{self.source}] {level} {message}"


def resolve_level(level_name: str | None, debug: bool | None = None) -> int:
    """Map a level name ("TRACE", "DEBUG", "INFO", ...) to a logging level.

    Unknown names fall back to INFO. ``debug`` forces at least DEBUG.
    """
    name = (level_name or "").upper()
    if name == "TRACE":
        return TRACE
    if name == "DEBUG" or debug:
        return logging.DEBUG
    if name in ("WARNING", "ERROR", "CRITICAL"):
        return logging.getLevelName(name)  # type: ignore[no-any-return]
    return logging.INFO


def configure_logging(
    source: str = "matchmaking",
    level: int | None = None,
    debug: bool | None = None,
    stream: object | None = None,
) -> logging.Logger:
    """Configure logging for a service component.

    Args:
        source: Source identifier for log messages (e.g., "matcher", "cli")
        level: Logging level (defaults to INFO, or DEBUG/TRACE from LOG_LEVEL env var)
        debug: Enable debug mode (overrides level to DEBUG)
        stream: Output stream for the handler (defaults to stderr so JSON on stdout stays clean)

    Returns:
        Configured root logger
    """
    if level is None:
        level = resolve_level(os.getenv("LOG_LEVEL"), debug)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)  # type: ignore[arg-type]
    handler.setLevel(level)
    handler.setFormatter(ISO8601Formatter(source=source))

    root_logger.addHandler(handler)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
