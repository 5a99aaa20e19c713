"""Mappers for converting Discord API JSON to ORM models."""

from discord_scraper.scrape.mappers.channel import map_channel
from discord_scraper.scrape.mappers.message import map_message, map_messages
from discord_scraper.scrape.mappers.user import extract_users_from_message, map_user

__all__ = [
    "map_channel",
    "map_message",
    "map_messages",
    "map_user",
    "extract_users_from_message",
]
