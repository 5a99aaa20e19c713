"""User API JSON to ORM mapper."""

from __future__ import annotations

from typing import Any

from discord_scraper.db.models import User


def map_user(data: dict[str, Any]) -> User:
    """Convert Discord API user JSON to User ORM instance.

    Args:
        data: Raw user object from Discord API (may be partial)

    Returns:
        User ORM instance (not yet added to session)
    """
    return User(
        user_id=int(data["id"]),
        username=data.get("username"),
        discriminator=data.get("discriminator"),
        global_name=data.get("global_name"),
        bot=data.get("bot", False),
        raw=data,
    )


def extract_users_from_message(data: dict[str, Any]) -> list[User]:
    """Extract the author of a message API response.

    Webhook messages carry a pseudo-user author that is not a real account;
    those are skipped.

    Args:
        data: Raw message object from Discord API

    Returns:
        List with the author's User instance, or empty
    """
    author = data.get("author")
    if not author or not author.get("id") or data.get("webhook_id"):
        return []
    return [map_user(author)]
