"""CLI entry point for discord_scraper.scrape.

Usage:
    python -m discord_scraper.scrape CHANNEL_ID [CHANNEL_ID ...]
    python -m discord_scraper.scrape 123,456 --auth TOKEN
    python -m discord_scraper.scrape 123 --db-path ./archive.db
    python -m discord_scraper.scrape 123 --verbose
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from discord_scraper import __version__
from discord_scraper.config.settings import (
    DEFAULT_DB_PATH,
    ConfigurationError,
    load_settings,
    parse_channel_ids,
)
from discord_scraper.scrape.client import DiscordAuthError
from discord_scraper.scrape.logger import logger
from discord_scraper.scrape.run import run_scrape
from discord_scraper.utils.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="discord-scraper",
        description="Download the message history of Discord channels into SQLite",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  discord-scraper 123456789
      Scrape one channel using DISCORD_AUTH_TOKEN from the environment

  discord-scraper 123,456 789 --auth TOKEN
      Scrape three channels with an explicit token

  discord-scraper 123456789 --db-path ./archive/messages.db
      Write to a custom database file
        """,
    )

    parser.add_argument(
        "channel_ids",
        nargs="+",
        metavar="CHANNEL_IDS",
        help="Channel IDs to scrape (space- or comma-separated)",
    )
    parser.add_argument(
        "-a",
        "--auth",
        type=str,
        help="Discord authorization token (default: $DISCORD_AUTH_TOKEN)",
    )
    parser.add_argument(
        "-d",
        "--db-path",
        type=str,
        default=None,
        help=f"Database path (default: {DEFAULT_DB_PATH.as_posix()})",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (DEBUG level)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with third-party library logs",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Optional file to write logs to",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.debug:
        log_level = logging.DEBUG
        debug_third_party = True
    elif args.verbose:
        log_level = logging.DEBUG
        debug_third_party = False
    else:
        log_level = logging.INFO
        debug_third_party = False

    setup_logging(
        level=log_level,
        log_file=args.log_file,
        debug_third_party=debug_third_party,
    )

    try:
        channel_ids = parse_channel_ids(args.channel_ids)
        settings = load_settings(auth_token=args.auth, db_path=args.db_path)
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"Scraping {len(channel_ids)} channel(s) into {settings.db_path}")

    try:
        result = asyncio.run(run_scrape(settings, channel_ids))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)
    except DiscordAuthError:
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        raise

    if result.all_failed:
        logger.error("No channel could be scraped")
        sys.exit(1)

    logger.success("Scrape complete!")


if __name__ == "__main__":
    main()
