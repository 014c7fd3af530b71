"""HTTP client helper."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import aiohttp

from ...core.exceptions import TransportError


class HTTPClient:
    """Async HTTP client wrapper.

    Owns a lazily created ``aiohttp.ClientSession`` and converts every
    failure mode of a GET into ``TransportError``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = dict(headers or {})
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
        return self._session

    async def get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET request returning the decoded JSON body.

        Raises:
            TransportError: On network errors, timeouts, non-success status
                codes, or a body that is not JSON
        """
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            url = f"{self.base_url}{url}"

        try:
            async with self.session.get(url, params=params, headers=headers) as response:
                if response.status >= 400:
                    raise TransportError(
                        f"GET {url} failed: {response.status} {response.reason}",
                        url=url,
                        status_code=response.status,
                    )
                text = await response.text()
        except aiohttp.ClientError as e:
            raise TransportError(f"GET {url} failed: {e}", url=url) from e
        except asyncio.TimeoutError as e:
            raise TransportError(f"GET {url} timed out", url=url) from e

        try:
            return json.loads(text)
        except ValueError as e:
            raise TransportError(
                f"GET {url} returned a malformed JSON body", url=url, status_code=response.status
            ) from e

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
