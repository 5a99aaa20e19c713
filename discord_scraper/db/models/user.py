"""Discord User ORM model.

Users are LATEST-STATE SNAPSHOTS of message authors: each scraped page
overwrites the previous state. Only authors are recorded; there is no
separate user endpoint call.
"""

from datetime import datetime

from sqlalchemy import JSON, BigInteger, Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from discord_scraper.db.base import Base, TZDateTime, utcnow


class User(Base):
    """
    Discord User entity.

    user_id is the ONLY authoritative identity. The display fields are
    best-effort and may be missing (partial user objects) or outdated.
    """

    __tablename__ = "users"

    # Discord snowflake ID.
    user_id: Mapped[int] = mapped_column(BigInteger, primary_key=True)

    # String(128) to handle Unicode (32 chars, up to 4 bytes each).
    username: Mapped[str | None] = mapped_column(String(128), nullable=True)

    # Legacy discriminator ("1234"), or "0" under the new username system.
    discriminator: Mapped[str | None] = mapped_column(String(4), nullable=True)

    # Display name (new username system).
    global_name: Mapped[str | None] = mapped_column(String(128), nullable=True)

    bot: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    raw: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    archived_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )

    __table_args__ = (Index("ix_users_username", "username"),)

    def __repr__(self) -> str:
        return f"<User(user_id={self.user_id}, username='{self.username}')>"
