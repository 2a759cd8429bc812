"""
Logging configuration for BottleneckIQ.

Log Levels:
    DEBUG:   Per-process scores, rendered prompts, LLM requests
    INFO:    Batch milestones ("Analyzed 12 processes", "Generated 4 insights")
    WARNING: Recoverable issues (unknown status, skipped rows, LLM fallback used)
    ERROR:   Failures (unreadable input, configuration errors)

Logs go to stderr so the CLI's report on stdout stays pipeable.

Usage:
    from bottleneckiq.logging_config import setup_logging
    setup_logging("DEBUG")
"""

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are chatty at INFO during LLM calls
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "anthropic", "langchain")

_logging_configured = False


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Attach a handler to the ``bottleneckiq`` logger and set its level.

    Repeated calls only change the level, so the CLI and library callers
    can both call it without duplicating output.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR); unknown names
            fall back to INFO.
        stream: Where to write; defaults to stderr. Only used on the first call.
    """
    global _logging_configured  # noqa: PLW0603

    app_logger = logging.getLogger("bottleneckiq")

    if not _logging_configured:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        app_logger.addHandler(handler)
        app_logger.propagate = False

        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

        _logging_configured = True

    app_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
