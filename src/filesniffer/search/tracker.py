"""Completion tracking for concurrently scanned files."""

from __future__ import annotations

import asyncio
import threading
from typing import Callable, Optional


class CompletionTracker:
    """Counts in-flight file scans and fires ``on_complete`` exactly once.

    The counter is armed with the full number of dispatched files before
    any scan starts, so it can never read zero while scans are still being
    registered. An empty batch completes immediately.
    """

    def __init__(self, on_complete: Callable[[], None]) -> None:
        self._on_complete = on_complete
        self._lock = threading.Lock()
        self._pending = 0
        self._armed = False
        self._fired = False
        self._finished: Optional[asyncio.Event] = None

    @property
    def pending(self) -> int:
        return self._pending

    @property
    def completed(self) -> bool:
        return self._fired

    def start(self, count: int) -> None:
        if count < 0:
            raise ValueError("count must be >= 0")
        with self._lock:
            if self._armed:
                raise RuntimeError("CompletionTracker already started")
            self._armed = True
            self._pending = count
        self.check()

    def decrement(self) -> int:
        with self._lock:
            if not self._armed or self._pending == 0:
                raise RuntimeError("No pending scans to complete")
            self._pending -= 1
            return self._pending

    def check(self) -> bool:
        """Fire the completion callback if nothing is pending; True if it fired now."""
        with self._lock:
            if not self._armed or self._pending > 0 or self._fired:
                return False
            self._fired = True
        self._on_complete()
        if self._finished is not None:
            self._finished.set()
        return True

    async def wait(self) -> None:
        """Wait until the completion callback has run."""
        if self._fired:
            return
        if self._finished is None:
            self._finished = asyncio.Event()
        await self._finished.wait()
