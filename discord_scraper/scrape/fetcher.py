"""Channel metadata and single-page message history fetching."""

from __future__ import annotations

from typing import TYPE_CHECKING

from discord_scraper.db.models import Channel, Message
from discord_scraper.scrape.client import PAGE_SIZE, DiscordPayloadError
from discord_scraper.scrape.mappers import map_channel, map_messages

if TYPE_CHECKING:
    from discord_scraper.scrape.client import DiscordClient


async def fetch_page(
    client: "DiscordClient",
    channel_id: int,
    before: int | None = None,
    limit: int = PAGE_SIZE,
) -> list[Message]:
    """Fetch one page of a channel's history as Message records.

    Args:
        client: Discord API client (carries the auth token)
        channel_id: Channel to read
        before: Exclusive upper bound message ID; None starts from the newest
        limit: Page size (1-100)

    Returns:
        Messages newest-first. Empty when the channel has no older history.

    Raises:
        DiscordAuthError: The token was rejected
        DiscordAPIError: Any other failed request, including malformed
            payloads (DiscordPayloadError)
    """
    messages_data = await client.get_messages(
        channel_id=channel_id,
        limit=limit,
        before=before,
    )

    try:
        return map_messages(messages_data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DiscordPayloadError(200, f"Malformed message object: {e!r}") from e


async def fetch_channel(client: "DiscordClient", channel_id: int) -> Channel:
    """Fetch a channel's metadata as a Channel record.

    Raises:
        DiscordAuthError: The token was rejected
        DiscordAPIError: Any other failed request, including a malformed
            channel object (DiscordPayloadError)
    """
    channel_data = await client.get_channel(channel_id)

    try:
        return map_channel(channel_data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DiscordPayloadError(200, f"Malformed channel object: {e!r}") from e
