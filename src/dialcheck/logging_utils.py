"""Logging configuration for dialcheck.

Library modules log through ``logging.getLogger(__name__)`` at DEBUG level
only; the CLI calls configure_logging() when --verbose is given.
"""

from __future__ import annotations

import logging
import sys

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "WARNING", format_string: str | None = None) -> None:
    """Configure application-wide logging to stderr.

    Can be called more than once; later calls replace earlier configuration.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ...). Case-insensitive.
        format_string: Custom format string. Defaults to DEFAULT_FORMAT.

    Raises:
        ValueError: If level is not a known logging level.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    # stdout carries the summary and --json output
    logging.basicConfig(
        level=numeric_level,
        format=format_string or DEFAULT_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
