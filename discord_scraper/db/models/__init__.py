"""Discord Scraper Database Models.

All models use SQLAlchemy 2.0 syntax and are stored in SQLite.
"""

from discord_scraper.db.base import Base
from discord_scraper.db.models.channel import Channel
from discord_scraper.db.models.message import Message
from discord_scraper.db.models.user import User

__all__ = [
    "Base",
    "Channel",
    "Message",
    "User",
]
