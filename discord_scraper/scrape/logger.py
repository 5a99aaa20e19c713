"""Rich-based logging utilities for the channel scraper.

Provides console output with per-channel blocks, inline page progress,
and color-coded messages for different event types.
"""

from __future__ import annotations

from typing import Any

from discord_scraper.utils.pipeline_logger import BasePipelineLogger


class ScrapeLogger(BasePipelineLogger):
    """Logger for scrape operations with rich output.

    Extends BasePipelineLogger with scrape-specific methods for
    rate limiting and the run summary.
    """

    def __init__(self) -> None:
        super().__init__(__name__)

    # -------------------------------------------------------------------------
    # Scrape-specific: Rate Limiting
    # -------------------------------------------------------------------------

    def rate_limit(self, retry_after: float) -> None:
        """Log a rate limit warning with retry time."""
        self._clear_progress_line()
        self._logger.warning(f"Rate limited. Waiting {retry_after:.1f}s...")

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------

    def summary(
        self,
        channels: int = 0,
        failed: int = 0,
        messages: int = 0,
        pages: int = 0,
        elapsed: float = 0.0,
        **kwargs: Any,
    ) -> None:
        """Print final scrape summary."""
        self.print_summary(
            "Scrape",
            elapsed=elapsed,
            stats={
                "Channels scraped": channels,
                "Channels failed": failed,
                "Pages fetched": pages,
                "Messages stored": messages,
            },
            style="red" if failed and not channels else "cyan",
        )


# Global logger instance
logger = ScrapeLogger()
