"""Message API JSON to ORM mapper."""

from __future__ import annotations

from typing import Any

from discord_scraper.db.models import Message
from discord_scraper.utils.time import parse_iso8601


def _sanitize_null_bytes(value: Any) -> Any:
    """Remove NULL bytes (0x00) from strings.

    For dict/list types, recursively sanitize all string values.
    """
    if isinstance(value, str):
        return value.replace("\x00", "")
    elif isinstance(value, dict):
        return {k: _sanitize_null_bytes(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_sanitize_null_bytes(item) for item in value]
    return value


def map_message(data: dict[str, Any]) -> Message:
    """Convert Discord API message JSON to Message ORM instance.

    Args:
        data: Raw message object from Discord API

    Returns:
        Message ORM instance (not yet added to session)

    Raises:
        KeyError: If a required field (id, channel_id, author.id, timestamp)
            is missing
        ValueError: If an ID or the timestamp cannot be parsed
    """
    data = _sanitize_null_bytes(data)

    created_at = parse_iso8601(data["timestamp"])
    if created_at is None:
        raise ValueError(f"Message {data['id']} has an empty timestamp")

    return Message(
        message_id=int(data["id"]),
        channel_id=int(data["channel_id"]),
        author_id=int(data["author"]["id"]),
        content=data.get("content") or "",
        # Timestamps
        created_at=created_at,
        edited_timestamp=parse_iso8601(data.get("edited_timestamp")),
        # Metadata
        type=data.get("type", 0),
        pinned=data.get("pinned", False),
        # Rich content
        attachments=data.get("attachments") or [],
        embeds=data.get("embeds") or [],
        # Raw
        raw=data,
    )


def map_messages(data_list: list[dict[str, Any]]) -> list[Message]:
    """Convert a list of message API responses to ORM instances.

    Order is preserved (the API returns newest first).
    """
    return [map_message(data) for data in data_list]
