"""Ordered task queue for serialized visitor invocations."""

from __future__ import annotations

import inspect
from collections import deque
from collections.abc import Callable
from functools import partial
from typing import Any


class OrderedTaskQueue:
    """FIFO of deferred calls, drained one at a time.

    Calls are recorded, not run, by ``enqueue``. ``drain`` runs them in
    insertion order and awaits each awaitable result before starting the
    next call, so side effects land strictly in queue order.
    """

    def __init__(self) -> None:
        self._calls: deque[Callable[[], Any]] = deque()

    def __len__(self) -> int:
        return len(self._calls)

    def enqueue(self, fn: Callable[..., Any], *args: Any) -> None:
        self._calls.append(partial(fn, *args))

    async def drain(self) -> int:
        """Run every queued call in order.

        Returns:
            Number of calls that ran

        Raises:
            Exception: The first error raised by a call; later calls stay queued
        """
        ran = 0
        while self._calls:
            call = self._calls.popleft()
            result = call()
            if inspect.isawaitable(result):
                await result
            ran += 1
        return ran
