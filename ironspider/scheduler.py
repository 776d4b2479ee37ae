"""Request schedulers that feed the engine."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections import deque
from typing import Optional

from ironspider.request import Request


class SchedulerClosedError(RuntimeError):
    """Raised when a request is enqueued after the scheduler stopped accepting them."""


class Scheduler(ABC):
    """A source of requests for the engine to download."""

    @abstractmethod
    async def dequeue(self) -> Optional[Request]:
        """Wait for the next request; None once the scheduler is closed and drained."""

    @abstractmethod
    def is_empty(self) -> bool:
        """True when no request is waiting."""

    @abstractmethod
    def enqueue(self, request: Request) -> None:
        """Add a request to the queue."""

    @abstractmethod
    def close_init_sender(self) -> None:
        """Stop accepting new requests."""


class SimpleScheduler(Scheduler):
    """An unbounded first-in, first-out request queue."""

    def __init__(self) -> None:
        self._pending: deque[Request] = deque()
        self._ready = asyncio.Event()
        self._closed = False

    async def dequeue(self) -> Optional[Request]:
        while True:
            if self._pending:
                return self._pending.popleft()
            if self._closed:
                return None
            self._ready.clear()
            await self._ready.wait()

    def is_empty(self) -> bool:
        return not self._pending

    def enqueue(self, request: Request) -> None:
        if self._closed:
            raise SchedulerClosedError("Sender has already been taken/dropped")
        self._pending.append(request)
        self._ready.set()

    def close_init_sender(self) -> None:
        self._closed = True
        self._ready.set()

    def __len__(self) -> int:
        return len(self._pending)