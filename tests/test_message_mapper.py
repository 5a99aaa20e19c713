"""Tests for the discord_scraper.scrape.mappers package."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from discord_scraper.scrape.mappers import (
    extract_users_from_message,
    map_channel,
    map_message,
    map_messages,
    map_user,
)
from discord_scraper.scrape.mappers.channel import channel_type_name
from discord_scraper.scrape.mappers.message import _sanitize_null_bytes


class TestSanitizeNullBytes:
    """Tests for _sanitize_null_bytes function."""

    def test_removes_null_bytes_from_string(self) -> None:
        assert _sanitize_null_bytes("hello\x00world") == "helloworld"

    def test_recursively_sanitizes_containers(self) -> None:
        data = {"key": "value\x00", "nested": [{"inner": "\x00test"}]}
        assert _sanitize_null_bytes(data) == {
            "key": "value",
            "nested": [{"inner": "test"}],
        }

    def test_passes_through_non_string_types(self) -> None:
        assert _sanitize_null_bytes(123) == 123
        assert _sanitize_null_bytes(None) is None


class TestMapMessage:
    """Tests for map_message function."""

    def test_maps_core_fields(self, message_data) -> None:
        msg = map_message(message_data(123456789, channel_id=987654321))

        assert msg.message_id == 123456789
        assert msg.channel_id == 987654321
        assert msg.author_id == 111222333
        assert msg.content == "message 123456789"
        assert msg.created_at == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
        assert msg.edited_timestamp is None
        assert msg.type == 0
        assert msg.pinned is False

    def test_keeps_attachment_and_embed_metadata(self, message_data) -> None:
        attachment = {
            "id": "555",
            "filename": "cat.png",
            "size": 1024,
            "url": "https://cdn.discordapp.com/attachments/1/555/cat.png",
        }
        embed = {"type": "rich", "title": "A link"}
        msg = map_message(message_data(1, attachments=[attachment], embeds=[embed]))

        assert msg.attachments == [attachment]
        assert msg.embeds == [embed]

    def test_raw_holds_complete_payload(self, message_data) -> None:
        data = message_data(1, flags=4, reactions=[{"count": 2}])

        msg = map_message(data)

        assert msg.raw["flags"] == 4
        assert msg.raw["reactions"] == [{"count": 2}]

    def test_null_content_becomes_empty_string(self, message_data) -> None:
        data = message_data(1)
        data["content"] = None

        assert map_message(data).content == ""

    def test_parses_edited_timestamp(self, message_data) -> None:
        msg = map_message(message_data(1, edited_timestamp="2024-02-01T00:00:00Z"))

        assert msg.edited_timestamp == datetime(2024, 2, 1, tzinfo=timezone.utc)

    def test_strips_null_bytes_from_content(self, message_data) -> None:
        msg = map_message(message_data(1, content="bad\x00byte"))

        assert msg.content == "badbyte"

    def test_missing_id_raises_key_error(self, message_data) -> None:
        data = message_data(1)
        del data["id"]

        with pytest.raises(KeyError):
            map_message(data)

    def test_empty_timestamp_raises_value_error(self, message_data) -> None:
        with pytest.raises(ValueError):
            map_message(message_data(1, timestamp=""))


class TestMapMessages:
    """Tests for map_messages function."""

    def test_preserves_order(self, message_data) -> None:
        messages = map_messages([message_data(3), message_data(2), message_data(1)])

        assert [m.message_id for m in messages] == [3, 2, 1]

    def test_empty_list(self) -> None:
        assert map_messages([]) == []


class TestUserMapper:
    """Tests for map_user and extract_users_from_message."""

    def test_map_user(self) -> None:
        user = map_user(
            {"id": "42", "username": "alice", "discriminator": "0", "bot": True}
        )

        assert user.user_id == 42
        assert user.username == "alice"
        assert user.discriminator == "0"
        assert user.bot is True
        assert user.global_name is None

    def test_extracts_author(self, message_data) -> None:
        users = extract_users_from_message(message_data(1, author_id=77))

        assert [u.user_id for u in users] == [77]

    def test_skips_webhook_author(self, message_data) -> None:
        data = message_data(1, webhook_id="999")

        assert extract_users_from_message(data) == []

    def test_no_author(self) -> None:
        assert extract_users_from_message({"id": "1"}) == []


class TestChannelMapper:
    """Tests for map_channel and channel_type_name."""

    def test_guild_channel(self) -> None:
        channel = map_channel(
            {"id": "123", "guild_id": "456", "name": "general", "type": 0}
        )

        assert channel.channel_id == 123
        assert channel.guild_id == 456
        assert channel.name == "general"
        assert channel.type == 0

    def test_dm_channel_has_no_guild(self) -> None:
        channel = map_channel({"id": "123", "type": 1, "recipients": []})

        assert channel.guild_id is None
        assert channel.name is None
        assert channel.raw == {"id": "123", "type": 1, "recipients": []}

    def test_type_names(self) -> None:
        assert channel_type_name(0) == "text"
        assert channel_type_name(11) == "public_thread"
        assert channel_type_name(99) == "unknown(99)"
