"""Channel repository for database operations."""

from __future__ import annotations

from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from discord_scraper.db.base import utcnow
from discord_scraper.db.models import Channel


async def upsert_channel(session: AsyncSession, channel: Channel) -> None:
    """Upsert a channel record.

    Inserts a new channel or updates the existing one on conflict (channel_id).

    Args:
        session: Database session
        channel: Channel ORM model instance to upsert
    """
    archived_at = utcnow()
    stmt = (
        sqlite_insert(Channel)
        .values(
            channel_id=channel.channel_id,
            guild_id=channel.guild_id,
            type=channel.type or 0,
            name=channel.name,
            raw=channel.raw or {},
            archived_at=archived_at,
        )
        .on_conflict_do_update(
            index_elements=["channel_id"],
            set_={
                "guild_id": channel.guild_id,
                "type": channel.type or 0,
                "name": channel.name,
                "raw": channel.raw or {},
                "archived_at": archived_at,
            },
        )
    )
    await session.execute(stmt)
