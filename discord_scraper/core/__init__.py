"""Base orchestrator for pipeline execution.

Provides common infrastructure for pipeline orchestrators:
- Database engine and session management
- Schema creation on first run
- Timing around the pipeline run

Usage:
    class MyOrchestrator(BaseOrchestrator):
        async def _run_pipeline(self, channel_ids):
            ...

        def _log_summary(self, elapsed):
            ...
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from discord_scraper.db.engine import ensure_database_dir, get_async_session, get_engine
from discord_scraper.db.models import Base

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker


class BaseOrchestrator(ABC):
    """Abstract base class for pipeline orchestrators.

    Subclasses must implement:
    - _run_pipeline(): The actual pipeline logic
    - _log_summary(): Log final statistics
    """

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        self.engine: AsyncEngine = get_engine(database_url)
        self.async_session: async_sessionmaker[AsyncSession] = get_async_session(
            database_url
        )
        self.start_time: float = 0.0

    async def init_db(self) -> None:
        """Create the database file and tables if they don't exist."""
        ensure_database_dir(self.database_url)
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def run(self, channel_ids: list[int]) -> None:
        """Run the pipeline over the given channels.

        The summary is logged even when the pipeline aborts.
        """
        self.start_time = time.time()

        await self.init_db()
        try:
            await self._run_pipeline(channel_ids)
        finally:
            elapsed = time.time() - self.start_time
            self._log_summary(elapsed)

    @abstractmethod
    async def _run_pipeline(self, channel_ids: list[int]) -> None:
        """Execute the pipeline logic."""
        ...

    @abstractmethod
    def _log_summary(self, elapsed: float) -> None:
        """Log the final summary statistics.

        Args:
            elapsed: Total time elapsed in seconds.
        """
        ...
