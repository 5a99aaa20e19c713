"""Database engine configuration.

Provides centralized database engine and session management.

Usage:
    from discord_scraper.db.engine import get_engine, get_async_session

    # Get engine (cached per database_url)
    engine = get_engine("sqlite+aiosqlite:///./data/messages.db")

    # Get session factory
    AsyncSession = get_async_session("sqlite+aiosqlite:///./data/messages.db")
    async with AsyncSession() as session:
        ...
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


# Engine cache: database_url -> engine
_engine_cache: dict[str, AsyncEngine] = {}


def ensure_database_dir(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database.

    In-memory databases and non-SQLite URLs are left alone.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return
    if not url.database or url.database == ":memory:":
        return
    Path(url.database).parent.mkdir(parents=True, exist_ok=True)


def get_engine(database_url: str) -> AsyncEngine:
    """Get or create an async database engine.

    Engines are cached by database_url to avoid opening the same
    database file more than once.

    Args:
        database_url: Database connection URL.

    Returns:
        AsyncEngine instance (cached).
    """
    if database_url not in _engine_cache:
        _engine_cache[database_url] = create_async_engine(
            database_url,
            echo=False,
        )

    return _engine_cache[database_url]


@lru_cache(maxsize=8)
def get_async_session(database_url: str) -> async_sessionmaker[AsyncSession]:
    """Get a session factory for the given database URL.

    Session factories are cached to ensure consistent configuration.

    Args:
        database_url: Database connection URL.

    Returns:
        async_sessionmaker instance for creating sessions.
    """
    engine = get_engine(database_url)
    return async_sessionmaker(bind=engine, expire_on_commit=False)


async def dispose_engines() -> None:
    """Dispose all cached engines.

    Call this during application shutdown to properly close
    all database connections.
    """
    for engine in _engine_cache.values():
        await engine.dispose()
    _engine_cache.clear()
    get_async_session.cache_clear()
