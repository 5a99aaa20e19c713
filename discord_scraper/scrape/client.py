"""Discord REST API client with rate limit handling.

This module provides an async HTTP client for Discord's REST API with:
- Automatic rate limit handling (429 responses)
- Fatal classification of rejected credentials (401/403)
- Proper request headers for user/bot tokens
"""

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass
from typing import Any

import httpx

from discord_scraper.scrape.logger import logger


# Discord API base URL
BASE_URL = "https://discord.com/api/v10"

# Maximum page size accepted by the message history endpoint
PAGE_SIZE = 100

# Retry configuration
MAX_RATE_LIMIT_RETRIES = 30  # Cap on consecutive 429 retries
DEFAULT_RETRY_AFTER = 1.0  # seconds, when the service gives no delay
RETRY_PAD = 0.1  # seconds added on top of the service-provided delay


class DiscordAPIError(Exception):
    """Raised when Discord API returns an error."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Discord API error {status_code}: {message}")


class DiscordAuthError(DiscordAPIError):
    """Raised when the token is rejected (401/403). Aborts the whole run."""


class DiscordPayloadError(DiscordAPIError):
    """Raised when a successful response carries an unusable body."""


def _error_message(response: httpx.Response) -> str:
    """Extract Discord's `message` field from an error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text


def _delay_seconds(value: Any) -> float | None:
    """Parse a delay in seconds; None when it is not a finite number."""
    try:
        delay = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(delay):
        return None
    return max(delay, 0.0)


def _retry_after(response: httpx.Response) -> float:
    """Read the service-mandated delay from a 429 response."""
    header = response.headers.get("Retry-After")
    if header is not None:
        delay = _delay_seconds(header)
        if delay is not None:
            return delay
    try:
        body = response.json()
    except ValueError:
        return DEFAULT_RETRY_AFTER
    if isinstance(body, dict) and body.get("retry_after") is not None:
        delay = _delay_seconds(body["retry_after"])
        if delay is not None:
            return delay
    return DEFAULT_RETRY_AFTER


@dataclass
class DiscordClient:
    """Async Discord REST API client.

    Handles rate limits automatically; one request is in flight at a time.
    """

    token: str
    user_agent: str
    max_rate_limit_retries: int = MAX_RATE_LIMIT_RETRIES

    def __post_init__(self) -> None:
        self._client: httpx.AsyncClient | None = None

    @property
    def headers(self) -> dict[str, str]:
        """Build request headers."""
        return {
            "Authorization": self.token,
            "User-Agent": self.user_agent,
            "Content-Type": "application/json",
        }

    async def __aenter__(self) -> "DiscordClient":
        self._client = httpx.AsyncClient(
            base_url=BASE_URL,
            headers=self.headers,
            timeout=30.0,
        )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make a request with rate limit handling.

        A 429 suspends for the mandated delay and resubmits the identical
        request. Every other failure is raised to the caller.
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use async with.")

        rate_limit_retries = 0

        while True:
            response = await self._client.request(method, path, params=params)

            # Success
            if 200 <= response.status_code < 300:
                if response.status_code == 204:
                    return None
                try:
                    return response.json()
                except ValueError as e:
                    raise DiscordPayloadError(
                        response.status_code, f"Malformed JSON body: {e}"
                    ) from e

            # Rate limited - wait and resubmit
            if response.status_code == 429:
                rate_limit_retries += 1
                if rate_limit_retries > self.max_rate_limit_retries:
                    raise DiscordAPIError(429, "Max rate limit retries exceeded")
                retry_after = _retry_after(response)
                logger.rate_limit(retry_after)
                await asyncio.sleep(retry_after + RETRY_PAD)
                continue

            # Rejected credentials - a bad token will not improve
            if response.status_code in (401, 403):
                raise DiscordAuthError(response.status_code, _error_message(response))

            # Other errors
            raise DiscordAPIError(response.status_code, _error_message(response))

    # -------------------------------------------------------------------------
    # Channel endpoints
    # -------------------------------------------------------------------------

    async def get_channel(self, channel_id: int) -> dict[str, Any]:
        """Fetch channel information."""
        data = await self._request("GET", f"/channels/{channel_id}")
        if not isinstance(data, dict):
            raise DiscordPayloadError(200, "Expected a channel object")
        return data

    # -------------------------------------------------------------------------
    # Message endpoints
    # -------------------------------------------------------------------------

    async def get_messages(
        self,
        channel_id: int,
        limit: int = PAGE_SIZE,
        before: int | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch one page of messages from a channel.

        Args:
            channel_id: The channel to fetch from
            limit: Max messages to return (1-100)
            before: Get messages before this message ID (exclusive)

        Returns:
            List of message objects, ordered by ID descending (newest first)
        """
        params: dict[str, Any] = {"limit": max(1, min(limit, PAGE_SIZE))}
        if before is not None:
            params["before"] = before
        data = await self._request(
            "GET", f"/channels/{channel_id}/messages", params=params
        )
        if not isinstance(data, list):
            raise DiscordPayloadError(200, "Expected a JSON array of messages")
        return data
