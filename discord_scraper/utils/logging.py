"""Centralized logging configuration with rich integration.

Usage:
    from discord_scraper.utils.logging import setup_logging
    import logging

    setup_logging(level=logging.DEBUG)
    logger = logging.getLogger(__name__)
    logger.info("Hello")

Call setup_logging() once at startup (the CLI does), never at import time.
All rich output goes through the shared `console` below.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


console = Console()

# Libraries quieted to WARNING unless debug_third_party is set
THIRD_PARTY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "aiosqlite")


def setup_logging(
    level: int = logging.INFO,
    log_file: str | Path | None = None,
    debug_third_party: bool = False,
) -> None:
    """Configure logging with RichHandler using the shared console.

    Args:
        level: Logging level for the root logger (default: INFO)
        log_file: Optional path to a log file for persistent logging
        debug_third_party: If True, let httpx/sqlalchemy log at DEBUG/INFO
    """
    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            show_path=False,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        handlers=handlers,
        format="%(message)s",
        force=True,
    )

    for name in THIRD_PARTY_LOGGERS:
        if debug_third_party:
            third_party_level = logging.INFO if name == "sqlalchemy.engine" else logging.DEBUG
        else:
            third_party_level = logging.WARNING
        logging.getLogger(name).setLevel(third_party_level)
