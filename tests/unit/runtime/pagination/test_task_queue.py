"""Unit tests for OrderedTaskQueue."""

from __future__ import annotations

import asyncio

import pytest

from drupal.jsonapi.runtime.pagination import OrderedTaskQueue


@pytest.mark.asyncio
async def test_enqueue_defers_calls():
    """Test enqueue records calls without running them."""
    calls: list[int] = []
    queue = OrderedTaskQueue()

    queue.enqueue(calls.append, 1)
    queue.enqueue(calls.append, 2)

    assert calls == []
    assert len(queue) == 2


@pytest.mark.asyncio
async def test_drain_runs_in_order_awaiting_each():
    """Test drain awaits each coroutine before starting the next."""
    events: list[str] = []
    queue = OrderedTaskQueue()

    async def slow(name: str, delay: float) -> None:
        events.append(f"start {name}")
        await asyncio.sleep(delay)
        events.append(f"end {name}")

    queue.enqueue(slow, "a", 0.02)
    queue.enqueue(events.append, "sync")
    queue.enqueue(slow, "b", 0.0)

    assert await queue.drain() == 3
    assert events == ["start a", "end a", "sync", "start b", "end b"]
    assert len(queue) == 0


@pytest.mark.asyncio
async def test_drain_stops_on_error():
    """Test a failing call propagates and leaves later calls queued."""
    calls: list[int] = []
    queue = OrderedTaskQueue()

    def fail() -> None:
        raise RuntimeError("boom")

    queue.enqueue(calls.append, 1)
    queue.enqueue(fail)
    queue.enqueue(calls.append, 3)

    with pytest.raises(RuntimeError, match="boom"):
        await queue.drain()
    assert calls == [1]
    assert len(queue) == 1
