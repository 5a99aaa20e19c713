"""Channel API JSON to ORM mapper."""

from __future__ import annotations

from typing import Any

from discord_scraper.db.models import Channel


# Discord channel type codes with a readable name for console output
CHANNEL_TYPE_NAMES: dict[int, str] = {
    0: "text",
    1: "dm",
    2: "voice",
    3: "group_dm",
    4: "category",
    5: "announcement",
    10: "announcement_thread",
    11: "public_thread",
    12: "private_thread",
    13: "stage",
    15: "forum",
    16: "media",
}


def map_channel(data: dict[str, Any]) -> Channel:
    """Convert a `GET /channels/{id}` response to a Channel row.

    DM and group DM channels have neither guild nor name.
    """
    return Channel(
        channel_id=int(data["id"]),
        guild_id=int(data["guild_id"]) if data.get("guild_id") else None,
        type=data.get("type", 0),
        name=data.get("name"),
        raw=data,
    )


def channel_type_name(channel_type: int) -> str:
    return CHANNEL_TYPE_NAMES.get(channel_type, f"unknown({channel_type})")
