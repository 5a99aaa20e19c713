"""Message repository for bulk database operations.

Handles idempotent bulk upserts for:
- Users (message authors)
- Messages
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from discord_scraper.db.base import utcnow
from discord_scraper.db.models import Message, User
from discord_scraper.scrape.mappers.user import extract_users_from_message

# Columns overwritten when a stored message is written again
MESSAGE_UPDATE_COLUMNS = (
    "channel_id",
    "author_id",
    "content",
    "created_at",
    "edited_timestamp",
    "type",
    "pinned",
    "attachments",
    "embeds",
    "raw",
    "archived_at",
)

USER_UPDATE_COLUMNS = (
    "username",
    "discriminator",
    "global_name",
    "bot",
    "raw",
    "archived_at",
)


async def get_channel_message_count(session: AsyncSession, channel_id: int) -> int:
    """Get the count of stored messages in a channel.

    Args:
        session: Database session
        channel_id: The channel ID to count messages for

    Returns:
        Number of messages in the channel
    """
    stmt = (
        select(func.count())
        .select_from(Message)
        .where(Message.channel_id == channel_id)
    )
    result = await session.execute(stmt)
    return result.scalar() or 0


async def bulk_upsert_users(session: AsyncSession, users: list[User]) -> None:
    """Bulk upsert users with deduplication.

    When the same user appears more than once, the last occurrence wins.

    Args:
        session: Database session
        users: List of User ORM instances to upsert
    """
    if not users:
        return

    unique_users: dict[int, User] = {}
    for user in users:
        unique_users[user.user_id] = user

    archived_at = utcnow()
    values = [
        {
            "user_id": u.user_id,
            "username": u.username,
            "discriminator": u.discriminator,
            "global_name": u.global_name,
            "bot": bool(u.bot),
            "raw": u.raw or {},
            "archived_at": archived_at,
        }
        for u in unique_users.values()
    ]

    insert_stmt = sqlite_insert(User).values(values)
    stmt = insert_stmt.on_conflict_do_update(
        index_elements=["user_id"],
        set_={col: insert_stmt.excluded[col] for col in USER_UPDATE_COLUMNS},
    )
    await session.execute(stmt)


async def bulk_upsert_messages(session: AsyncSession, messages: list[Message]) -> int:
    """Bulk upsert messages keyed by message_id.

    A message that is already stored is overwritten in place with the new
    field values; it is never duplicated. Duplicate IDs within the batch
    collapse to the last occurrence.

    Args:
        session: Database session
        messages: List of Message ORM instances to upsert

    Returns:
        Number of distinct messages written
    """
    if not messages:
        return 0

    unique_messages: dict[int, Message] = {}
    for message in messages:
        unique_messages[message.message_id] = message

    archived_at = utcnow()
    values = [
        {
            "message_id": m.message_id,
            "channel_id": m.channel_id,
            "author_id": m.author_id,
            "content": m.content or "",
            "created_at": m.created_at,
            "edited_timestamp": m.edited_timestamp,
            "type": m.type or 0,
            "pinned": bool(m.pinned),
            "attachments": m.attachments or [],
            "embeds": m.embeds or [],
            "raw": m.raw or {},
            "archived_at": archived_at,
        }
        for m in unique_messages.values()
    ]

    insert_stmt = sqlite_insert(Message).values(values)
    stmt = insert_stmt.on_conflict_do_update(
        index_elements=["message_id"],
        set_={col: insert_stmt.excluded[col] for col in MESSAGE_UPDATE_COLUMNS},
    )
    await session.execute(stmt)
    return len(values)


async def store(session: AsyncSession, messages: list[Message]) -> int:
    """Persist a batch of messages and their authors.

    Idempotent: storing the same batch twice leaves exactly one row per
    message ID holding the latest values. The caller owns the transaction
    and commits once the page is written.

    Args:
        session: Database session
        messages: Message ORM instances (e.g. one fetched page)

    Returns:
        Number of messages written
    """
    if not messages:
        return 0

    users: list[User] = []
    for message in messages:
        users.extend(extract_users_from_message(message.raw or {}))

    await bulk_upsert_users(session, users)
    return await bulk_upsert_messages(session, messages)
