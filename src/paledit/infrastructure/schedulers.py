"""Tick schedulers for hosts without a Qt event loop."""

from __future__ import annotations

from typing import Callable, Optional


class ManualTickScheduler:
    """Scheduler whose ticks are delivered by the host's own loop.

    The host calls :meth:`fire` every coalescing window; firings while stopped
    are dropped, mirroring a stopped timer.
    """

    def __init__(self, on_tick: Optional[Callable[[], None]] = None) -> None:
        self._on_tick = on_tick
        self._running = False
        self.start_count = 0

    def bind(self, on_tick: Callable[[], None]) -> None:
        self._on_tick = on_tick

    def start(self) -> None:
        self._running = True
        self.start_count += 1

    def stop(self) -> None:
        self._running = False

    def is_running(self) -> bool:
        return self._running

    def fire(self) -> bool:
        """Deliver one tick.  Returns ``False`` when the scheduler is stopped."""

        if not self._running or self._on_tick is None:
            return False
        self._on_tick()
        return True
