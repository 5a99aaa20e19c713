"""Repository layer for database operations.

Provides clean separation between data access and scraping logic.
All upsert operations are centralized here.
"""

from discord_scraper.db.repositories.channel_repository import upsert_channel
from discord_scraper.db.repositories.message_repository import (
    bulk_upsert_messages,
    bulk_upsert_users,
    get_channel_message_count,
    store,
)

__all__ = [
    "upsert_channel",
    "bulk_upsert_messages",
    "bulk_upsert_users",
    "get_channel_message_count",
    "store",
]
