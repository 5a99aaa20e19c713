"""Channel history pagination.

Walks a channel from its newest message to its oldest using the `before`
parameter. Each page is stored and committed before the next is requested,
so an interrupted run loses at most the page in flight.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from discord_scraper.db.repositories import store
from discord_scraper.scrape.client import PAGE_SIZE
from discord_scraper.scrape.fetcher import fetch_page
from discord_scraper.scrape.logger import logger
from discord_scraper.utils.snowflake import snowflake_to_datetime

if TYPE_CHECKING:
    from discord_scraper.scrape.client import DiscordClient


@dataclass
class HistoryResult:
    """Result of scraping one channel's history."""

    messages_count: int
    pages_fetched: int


async def scrape_channel_history(
    client: "DiscordClient",
    session: AsyncSession,
    channel_id: int,
    page_size: int = PAGE_SIZE,
) -> HistoryResult:
    """Scrape the full message history of a channel.

    Stops on an empty page or on a page shorter than page_size.

    Args:
        client: Discord API client
        session: Database session
        channel_id: Channel to scrape
        page_size: Messages per API call (max 100)

    Returns:
        HistoryResult with total messages stored and pages fetched
    """
    before_id: int | None = None
    total_messages = 0
    pages_fetched = 0

    while True:
        page = await fetch_page(client, channel_id, before=before_id, limit=page_size)
        pages_fetched += 1

        # Empty response = reached the beginning of the channel
        if not page:
            break

        total_messages += await store(session, page)
        await session.commit()

        # Pages are newest-first; the oldest ID bounds the next request
        before_id = min(m.message_id for m in page)

        oldest_date = snowflake_to_datetime(before_id).strftime("%Y-%m-%d")
        logger.batch_progress(total_messages, None, oldest_date=oldest_date)

        # A short page means there is nothing older
        if len(page) < page_size:
            break

    return HistoryResult(messages_count=total_messages, pages_fetched=pages_fetched)
