"""
Utility functions for the GitHub issue copier.
"""

from __future__ import annotations

import logging

_CONSOLE_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def setup_logging(*, verbosity: int = 0) -> None:
    """Configure logging for the migration process.

    The console shows warnings by default, INFO with -v and DEBUG with -vv.
    The log file always receives everything.
    """
    console_handler = logging.StreamHandler()
    console_handler.setLevel(_CONSOLE_LEVELS[min(max(verbosity, 0), len(_CONSOLE_LEVELS) - 1)])

    file_handler = logging.FileHandler("migration.log", mode="a")
    file_handler.setLevel(logging.DEBUG)

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[console_handler, file_handler],
    )
