"""Lazy, demand-driven resource sequence over a chain of paged documents.

A ``ResourceCursor`` follows one ``next`` link chain. Each pull is served
from the buffered pages when possible; otherwise the page behind the known
``next`` link is fetched and the pull suspends until it lands.

Fetch policy:
    - At most one fetch per distinct URL is outstanding at any time.
    - ``next_link`` only changes when a fetch completes, so pages are
      requested strictly in link order and at most one page is read ahead
      of the one being drained.
    - No read-ahead is issued once the fetched resource count reaches the
      element cap; raising the cap with ``add_more`` resumes fetching.

Failures:
    A failed fetch clears its in-flight marker and leaves ``next_link``
    unchanged. Resources already buffered are still served first; the error
    surfaces from the first pull that finds the buffer empty. Pulling again
    retries the same link.
"""

from __future__ import annotations

import asyncio
from collections import deque
from enum import Enum
from time import perf_counter

from ...core.config import UNLIMITED
from ...core.exceptions import DocumentError
from ...models.document import Resource
from ..rest.transport import Transport
from .telemetry import log_page_error, log_page_fetched


class PullState(Enum):
    """Non-element outcomes of ``ResourceCursor.try_pull``."""

    PENDING = "pending"
    EXHAUSTED = "exhausted"


class ResourceCursor:
    """Pagination state and pull logic for one link chain.

    Example:
        >>> cursor = ResourceCursor(transport, "https://example.com/jsonapi/node/article")
        >>> async for resource in cursor:
        ...     print(resource.id)
    """

    def __init__(
        self,
        transport: Transport | None,
        link: str | None,
        limit: int = UNLIMITED,
        *,
        error: Exception | None = None,
    ) -> None:
        """Initialize cursor.

        Args:
            transport: Document transport used for page fetches
            link: URL of the first page (None for an empty sequence)
            limit: Element cap, -1 for unlimited
            error: Makes this a failed placeholder that raises on every pull
        """
        if limit < UNLIMITED:
            raise ValueError("limit must be -1 (unlimited) or >= 0")
        self._transport = transport
        self._next_link = link
        self._limit = limit
        self._error = error

        self._pages: deque[deque[Resource]] = deque()
        self._in_flight: set[str] = set()
        self._pending: deque[asyncio.Task[None]] = deque()
        self._fetch_error: Exception | None = None
        self._visited: set[str] = set()
        self._delivered = 0
        self._fetched = 0
        self._pages_fetched = 0

    @classmethod
    def failed(cls, error: Exception) -> ResourceCursor:
        """Cursor that fails every pull with ``error``."""
        return cls(None, None, error=error)

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def delivered(self) -> int:
        return self._delivered

    @property
    def fetched(self) -> int:
        """Resources received from the network so far."""
        return self._fetched

    @property
    def pages_fetched(self) -> int:
        return self._pages_fetched

    @property
    def buffered(self) -> int:
        return sum(len(page) for page in self._pages)

    @property
    def next_link(self) -> str | None:
        return self._next_link

    @property
    def in_flight(self) -> frozenset[str]:
        return frozenset(self._in_flight)

    @property
    def error(self) -> Exception | None:
        return self._error

    def can_continue(self) -> bool:
        """True while buffered, in-flight or not-yet-requested pages remain."""
        return bool(self._pages) or bool(self._in_flight) or self._next_link is not None

    def add_more(self, many: int = UNLIMITED) -> None:
        """Raise the element cap by ``many``, or remove it when ``many`` is -1."""
        if many == UNLIMITED or self._limit == UNLIMITED:
            self._limit = UNLIMITED
            return
        if many < 0:
            raise ValueError("many must be -1 (unlimited) or >= 0")
        self._limit += many

    def try_pull(self) -> Resource | PullState:
        """Pull without suspending.

        Must be called from a running event loop, since it may schedule a
        page fetch.

        Returns:
            The next resource, ``PullState.PENDING`` when a fetch must land
            first, or ``PullState.EXHAUSTED`` when the sequence is drained or
            the cap is reached (see ``can_continue``)

        Raises:
            Exception: The error of a failed page fetch, or of a placeholder
        """
        if self._error is not None:
            raise self._error

        self._settle()

        if self._limit_reached():
            return PullState.EXHAUSTED

        # A held fetch error blocks read-ahead until it has been raised
        if self._fetch_error is None:
            self._read_ahead()

        if self._pages:
            return self._take()
        if self._fetch_error is not None:
            error, self._fetch_error = self._fetch_error, None
            raise error
        if self._pending:
            return PullState.PENDING
        return PullState.EXHAUSTED

    async def pull(self) -> Resource | PullState:
        """Pull the next resource, waiting on page fetches as needed.

        Returns:
            The next resource, or ``PullState.EXHAUSTED``
        """
        while True:
            result = self.try_pull()
            if result is not PullState.PENDING:
                return result
            await asyncio.wait([self._pending[0]])

    def __aiter__(self) -> ResourceCursor:
        return self

    async def __anext__(self) -> Resource:
        result = await self.pull()
        if result is PullState.EXHAUSTED:
            raise StopAsyncIteration
        return result

    def _limit_reached(self) -> bool:
        return self._limit != UNLIMITED and self._delivered >= self._limit

    def _read_ahead(self) -> None:
        link = self._next_link
        if link is None or link in self._in_flight:
            return
        if self._limit != UNLIMITED and self._fetched >= self._limit:
            return
        # The page being drained plus one page ahead
        if len(self._pages) > 1:
            return
        self._in_flight.add(link)
        task = asyncio.create_task(self._fetch(link))
        task.add_done_callback(_retrieve_exception)
        self._pending.append(task)

    def _settle(self) -> None:
        while self._pending and self._pending[0].done():
            task = self._pending.popleft()
            if task.cancelled():
                continue
            error = task.exception()
            if error is not None and self._fetch_error is None:
                self._fetch_error = error

    def _take(self) -> Resource:
        page = self._pages[0]
        resource = page.popleft()
        if not page:
            self._pages.popleft()
        self._delivered += 1
        return resource

    async def _fetch(self, url: str) -> None:
        started = perf_counter()
        try:
            document = await self._transport.fetch(url)
            resources = document.resources()
            next_link = document.next_link
            if next_link is not None and (next_link == url or next_link in self._visited):
                raise DocumentError(f"Pagination loop detected: {next_link} was already fetched", document=document)
        except Exception as e:
            log_page_error(url=url, error_type=type(e).__name__, error_message=str(e))
            raise
        finally:
            self._in_flight.discard(url)

        self._visited.add(url)
        self._next_link = next_link
        if resources:
            self._pages.append(deque(resources))
        self._fetched += len(resources)
        log_page_fetched(
            url=url,
            resources=len(resources),
            next_link=next_link,
            page_index=self._pages_fetched,
            latency_ms=(perf_counter() - started) * 1000.0,
        )
        self._pages_fetched += 1


def _retrieve_exception(task: asyncio.Task[None]) -> None:
    # Marks a failure retrieved; _settle still hands it to try_pull
    if not task.cancelled():
        task.exception()
