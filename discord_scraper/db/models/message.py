"""Discord Message ORM model.

This module defines the Message entity for the channel history scraper.
Messages are WRITE-ONCE artifacts keyed by their snowflake: a re-run that
fetches the same message overwrites the row in place, it never duplicates it.
Edits and deletions on Discord after the scrape are not reconciled.

Design principles:
- JSON is used for nested Discord structures (attachments, embeds)
- channel_id and author_id are soft references (no FK); channels and users
  are stored for convenience but never required to exist
- The `raw` column preserves the complete API payload for forward compatibility
"""

from datetime import datetime

from sqlalchemy import JSON, BigInteger, Boolean, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from discord_scraper.db.base import Base, TZDateTime, utcnow


class Message(Base):
    """
    Discord Message entity.

    Each message is uniquely identified by message_id (Discord snowflake),
    which is also the pagination cursor: the oldest stored ID of a page is the
    exclusive `before` bound of the next one.
    """

    __tablename__ = "messages"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------

    # Discord snowflake ID. Globally unique, encodes creation timestamp.
    message_id: Mapped[int] = mapped_column(BigInteger, primary_key=True)

    # -------------------------------------------------------------------------
    # Core References
    # -------------------------------------------------------------------------

    # Soft reference to channels.channel_id. Stored, not enforced: history
    # pages may be written even when channel metadata could not be fetched.
    channel_id: Mapped[int] = mapped_column(BigInteger, nullable=False)

    # Soft reference to users.user_id. Webhook and system authors never
    # appear in the users table.
    author_id: Mapped[int] = mapped_column(BigInteger, nullable=False)

    # -------------------------------------------------------------------------
    # Message Content
    # -------------------------------------------------------------------------

    # Empty string for embed-only or attachment-only messages.
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------

    # The API `timestamp` field, NOT derived from the snowflake.
    created_at: Mapped[datetime] = mapped_column(TZDateTime, nullable=False)

    # NULL if the message was never edited (as of the scrape).
    edited_timestamp: Mapped[datetime | None] = mapped_column(TZDateTime, nullable=True)

    # -------------------------------------------------------------------------
    # Message Metadata
    # -------------------------------------------------------------------------

    # 0 = DEFAULT, 7 = USER_JOIN, 19 = REPLY, etc.
    type: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    pinned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # -------------------------------------------------------------------------
    # Rich Content (JSON)
    # -------------------------------------------------------------------------

    # Raw attachment objects (id, filename, size, url, content_type, ...).
    # Files themselves are not downloaded.
    attachments: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)

    embeds: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)

    # -------------------------------------------------------------------------
    # Forward Compatibility
    # -------------------------------------------------------------------------

    # Complete raw API response, including fields not modeled above.
    raw: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    # -------------------------------------------------------------------------
    # Archival Metadata
    # -------------------------------------------------------------------------

    # When OUR SYSTEM last wrote this row. Distinct from created_at.
    archived_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )

    # -------------------------------------------------------------------------
    # Indexes
    # -------------------------------------------------------------------------

    __table_args__ = (
        Index("ix_messages_channel_id", "channel_id"),
        Index("ix_messages_author_id", "author_id"),
        # Paginated channel queries (most common access pattern)
        Index("ix_messages_channel_created", "channel_id", "created_at"),
    )

    def __repr__(self) -> str:
        content_preview = (
            self.content[:50] + "..." if len(self.content) > 50 else self.content
        )
        return f"<Message(message_id={self.message_id}, content='{content_preview}')>"
