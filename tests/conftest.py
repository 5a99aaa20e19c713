"""Shared fixtures for discord-scraper tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from discord_scraper.db.models import Base


def make_message_data(
    message_id: int,
    channel_id: int = 123,
    author_id: int = 111222333,
    content: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build a realistic message payload as returned by the history endpoint."""
    data: dict[str, Any] = {
        "id": str(message_id),
        "channel_id": str(channel_id),
        "author": {
            "id": str(author_id),
            "username": "scraper_test",
            "discriminator": "0",
            "global_name": "Scraper Test",
        },
        "content": content if content is not None else f"message {message_id}",
        "timestamp": "2024-01-15T10:30:00.000000+00:00",
        "edited_timestamp": None,
        "type": 0,
        "pinned": False,
        "attachments": [],
        "embeds": [],
    }
    data.update(extra)
    return data


@pytest.fixture
def message_data() -> Callable[..., dict[str, Any]]:
    """Factory fixture for message payloads."""
    return make_message_data


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path of a not-yet-created SQLite database file."""
    return tmp_path / "data" / "messages.db"


@pytest_asyncio.fixture
async def session_factory(tmp_path: Path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Session factory bound to a fresh SQLite database with all tables."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, expire_on_commit=False)
    await engine.dispose()
