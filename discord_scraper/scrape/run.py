"""Main orchestration for the channel scraper.

Scrapes the requested channels one after another. Channels are independent
work items: a failed channel is logged and skipped. A rejected token or a
storage failure aborts the run.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from discord_scraper.config.settings import AppSettings, database_url
from discord_scraper.core import BaseOrchestrator
from discord_scraper.db.engine import dispose_engines
from discord_scraper.db.repositories import get_channel_message_count, upsert_channel
from discord_scraper.scrape.client import DiscordAPIError, DiscordAuthError, DiscordClient
from discord_scraper.scrape.fetcher import fetch_channel
from discord_scraper.scrape.history import scrape_channel_history
from discord_scraper.scrape.logger import logger
from discord_scraper.scrape.mappers.channel import channel_type_name


@dataclass
class ScrapeResult:
    """Aggregate statistics of a scrape run."""

    channels_completed: int = 0
    channels_failed: int = 0
    messages_stored: int = 0
    pages_fetched: int = 0

    @property
    def all_failed(self) -> bool:
        """True when channels were attempted and none completed."""
        return self.channels_failed > 0 and self.channels_completed == 0


class ScrapeOrchestrator(BaseOrchestrator):
    """Orchestrates the scrape of a set of channels."""

    def __init__(self, settings: AppSettings) -> None:
        super().__init__(database_url(settings.db_path))
        self.settings = settings
        self.result = ScrapeResult()

    async def _run_pipeline(self, channel_ids: list[int]) -> None:
        """Scrape every requested channel, strictly in sequence."""
        async with DiscordClient(
            token=self.settings.auth_token or "",
            user_agent=self.settings.user_agent,
            max_rate_limit_retries=self.settings.max_rate_limit_retries,
        ) as client:
            for channel_id in channel_ids:
                await self._process_channel(client, channel_id)

    def _log_summary(self, elapsed: float) -> None:
        """Log the final scrape summary."""
        logger.summary(
            channels=self.result.channels_completed,
            failed=self.result.channels_failed,
            messages=self.result.messages_stored,
            pages=self.result.pages_fetched,
            elapsed=elapsed,
        )

    async def _process_channel(self, client: DiscordClient, channel_id: int) -> None:
        """Record a channel's metadata and scrape its full history.

        Raises:
            DiscordAuthError: The token was rejected
            SQLAlchemyError: Storage failed
        """
        async with self.async_session() as session:
            try:
                channel = await fetch_channel(client, channel_id)
                await upsert_channel(session, channel)
                await session.commit()

                title = channel.name or f"Channel {channel_id}"
                with logger.block(title) as block:
                    block.field("channel ID", channel_id)
                    block.field("channel type", channel_type_name(channel.type))

                    history = await scrape_channel_history(
                        client=client,
                        session=session,
                        channel_id=channel_id,
                        page_size=self.settings.page_size,
                    )
                    self.result.pages_fetched += history.pages_fetched
                    self.result.messages_stored += history.messages_count

                    if history.messages_count == 0:
                        block.empty()
                    else:
                        archived = await get_channel_message_count(session, channel_id)
                        block.result(
                            f"stored {history.messages_count:,} messages "
                            f"({archived:,} archived)"
                        )
            except DiscordAuthError as e:
                logger.error(f"Authentication rejected: {e.message}")
                raise
            except (DiscordAPIError, httpx.HTTPError) as e:
                await session.rollback()
                self.result.channels_failed += 1
                logger.error(f"Failed to scrape channel {channel_id}: {e}")
                return

        self.result.channels_completed += 1


async def run_scrape(settings: AppSettings, channel_ids: list[int]) -> ScrapeResult:
    """Entry point for running the scraper."""
    orchestrator = ScrapeOrchestrator(settings)
    try:
        await orchestrator.run(channel_ids)
    finally:
        await dispose_engines()
    return orchestrator.result
