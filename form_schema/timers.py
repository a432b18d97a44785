"""
timers.py - cancellable delayed callbacks.

Anything with ``call_later(delay, callback) -> handle`` where the handle has
``cancel()`` can drive the session's self-clearing notices; an
:class:`asyncio.AbstractEventLoop` already qualifies.
"""
from __future__ import annotations

import threading
from typing import Callable, Protocol


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], object]) -> Handle: ...


class ThreadingScheduler:
    """Run callbacks on daemon :class:`threading.Timer` threads."""

    def call_later(self, delay: float, callback: Callable[[], object]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer
