"""Discord Channel ORM model.

Channels are LATEST-STATE SNAPSHOTS: each run that scrapes a channel
overwrites its row. Messages reference channels softly (see message.py).
"""

from datetime import datetime

from sqlalchemy import JSON, BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from discord_scraper.db.base import Base, TZDateTime, utcnow


class Channel(Base):
    """
    Discord Channel entity.

    - `guild_id` is NULL for DM and group DM channels
    - `name` is NULL only for DM channels
    """

    __tablename__ = "channels"

    # Primary key - Discord snowflake
    channel_id: Mapped[int] = mapped_column(BigInteger, primary_key=True)

    guild_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    # 0=text, 1=dm, 2=voice, 3=group dm, 5=announcement, 10-12=threads, ...
    type: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    name: Mapped[str | None] = mapped_column(String(400), nullable=True)

    raw: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    archived_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )

    def __repr__(self) -> str:
        return f"<Channel(channel_id={self.channel_id}, name='{self.name}')>"
