"""Consumption driver over a resource cursor."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable, Mapping
from time import perf_counter
from typing import Any, Literal

from ...core.config import UNLIMITED
from ...models.document import Resource
from ...models.relationships import RelationshipSpec
from .cursor import PullState, ResourceCursor
from .expander import Paginate, RelationshipExpander
from .queue import OrderedTaskQueue
from .telemetry import log_consume_complete, log_visitor_error

Visitor = Callable[..., Any]
Continuation = Callable[[int], None]


class Collection:
    """Consumable handle over a lazily paginated resource sequence.

    Used both for top-level collections and for every nested relationship
    collection. ``consume`` drives the cursor up to its cap and hands each
    resource to a visitor, called as ``visitor(resource)`` or, when
    relationships were requested, ``visitor(resource, relationships)``.

    Example:
        >>> articles = await client.all("node--article", limit=10, relationships=["uid"])
        >>> async def show(article, relationships):
        ...     await relationships["uid"].consume(print)
        >>> more = await articles.consume(show)
        >>> if more:
        ...     more(10)
        ...     await articles.consume(show)
    """

    def __init__(
        self,
        cursor: ResourceCursor,
        relationships: Mapping[str, RelationshipSpec] | None = None,
        paginate: Paginate | None = None,
    ) -> None:
        self._cursor = cursor
        self._expander = RelationshipExpander(relationships, paginate, Collection.failed)

    @classmethod
    def failed(cls, error: Exception) -> Collection:
        """Placeholder collection whose consumption fails with ``error``."""
        return cls(ResourceCursor.failed(error))

    @property
    def cursor(self) -> ResourceCursor:
        return self._cursor

    @property
    def relationships(self) -> dict[str, RelationshipSpec]:
        return self._expander.relationships

    def can_continue(self) -> bool:
        return self._cursor.can_continue()

    def add_more(self, many: int = UNLIMITED) -> None:
        self._cursor.add_more(many)

    def __aiter__(self) -> ResourceCursor:
        return self._cursor

    async def consume(
        self, visitor: Visitor, preserve_order: bool = False
    ) -> Literal[False] | Continuation:
        """Pull every resource currently allowed by the cap into ``visitor``.

        With ``preserve_order=False`` each visitor call starts as soon as its
        resource arrives; coroutine results run as tasks alongside further
        pulls and are awaited before returning. With ``preserve_order=True``
        calls are queued during the pull phase and then run one after
        another in arrival order.

        Args:
            visitor: Plain callable or coroutine function
            preserve_order: Serialize visitor calls in arrival order

        Returns:
            False when the sequence is exhausted, otherwise the cursor's
            ``add_more`` for requesting further resources

        Raises:
            Exception: A pull failure, or the failure of the earliest started
                visitor once every started visitor has finished; visitor calls
                that already completed are not undone
        """
        started = perf_counter()
        queue = OrderedTaskQueue()
        running: list[asyncio.Future[Any]] = []

        def invoke(resource: Resource, *args: Any) -> None:
            if preserve_order:
                queue.enqueue(visitor, resource, *args)
                return
            result = visitor(resource, *args)
            if inspect.isawaitable(result):
                running.append(asyncio.ensure_future(result))

        decorated = self._expander.decorate(invoke)
        delivered = 0

        try:
            while True:
                resource = await self._cursor.pull()
                if resource is PullState.EXHAUSTED:
                    break
                if resource is None:
                    continue
                decorated(resource)
                delivered += 1
        except Exception:
            await self._unwind(running)
            raise

        if running:
            errors = await self._unwind(running)
            if errors:
                raise errors[0]
        if preserve_order:
            await queue.drain()

        can_continue = self._cursor.can_continue()
        log_consume_complete(
            delivered=delivered,
            preserve_order=preserve_order,
            can_continue=can_continue,
            total_latency_ms=(perf_counter() - started) * 1000.0,
        )
        return self._cursor.add_more if can_continue else False

    @staticmethod
    async def _unwind(running: list[asyncio.Future[Any]]) -> list[BaseException]:
        """Await every started visitor task and log each failure, in start order."""
        if not running:
            return []
        results = await asyncio.gather(*running, return_exceptions=True)
        errors = [result for result in results if isinstance(result, BaseException)]
        for error in errors:
            log_visitor_error(error_type=type(error).__name__, error_message=str(error))
        return errors
