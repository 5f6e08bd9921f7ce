"""Logging setup for command-line entry points.

The library modules only create loggers via `logging.getLogger(__name__)`;
handlers are configured here, once, by the program that uses them.
"""

import logging
import sys

from pow_puzzle.core.settings import settings


def setup_logging(level: str | None = None) -> None:
    """Configure stdlib logging for console output."""
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        level=getattr(logging, (level or settings.log_level).upper(), logging.INFO),
    )
