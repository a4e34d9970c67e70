"""Per resource type FIFO of persistence tasks.

At most one task runs per type. The task being executed stays at the head of
its queue until it finishes, so an ``enqueue`` arriving mid-write only appends
and never starts a second drain loop. Between tasks the loop yields to the
event loop so reads and other types' writes interleave.
"""
from __future__ import annotations

import asyncio
from collections import deque
from typing import Awaitable, Callable, Iterable, Optional

from catalog.core.logging import get_logger

logger = get_logger(__name__)

PersistenceTask = Callable[[], Awaitable[None]]


class WriteSerializer:
    def __init__(self, type_names: Iterable[str]) -> None:
        self._queues: dict[str, deque[tuple[PersistenceTask, asyncio.Future]]] = {
            name: deque() for name in type_names
        }
        self._idle: dict[str, asyncio.Event] = {}
        self._drainers: dict[str, asyncio.Task] = {}

    def pending(self, type_name: str) -> int:
        return len(self._queues[type_name])

    def enqueue(self, type_name: str, task: PersistenceTask) -> asyncio.Future:
        """Queue ``task``; the returned future resolves once it has run."""
        loop = asyncio.get_running_loop()
        done = loop.create_future()
        queue = self._queues[type_name]
        queue.append((task, done))
        drainer = self._drainers.get(type_name)
        if drainer is None or drainer.done():
            self._idle_event(type_name).clear()
            self._drainers[type_name] = loop.create_task(self._drain(type_name))
        return done

    async def _drain(self, type_name: str) -> None:
        queue = self._queues[type_name]
        try:
            while queue:
                task, done = queue[0]
                try:
                    await task()
                except Exception:
                    logger.exception("Persistence task for %s failed", type_name)
                finally:
                    queue.popleft()
                    if not done.done():
                        done.set_result(None)
                if queue:
                    await asyncio.sleep(0)
        finally:
            # a cancelled drain leaves its backlog for the next enqueue to pick up
            if not queue:
                self._idle_event(type_name).set()

    def _idle_event(self, type_name: str) -> asyncio.Event:
        event = self._idle.get(type_name)
        if event is None:
            event = self._idle[type_name] = asyncio.Event()
            if not self._queues[type_name]:
                event.set()
        return event

    async def wait_idle(self, type_name: Optional[str] = None) -> None:
        """Wait until the queue of ``type_name`` (or of every type) is drained."""
        names = [type_name] if type_name else list(self._queues)
        for name in names:
            await self._idle_event(name).wait()
