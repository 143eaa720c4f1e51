"""QTimer-backed driver for :class:`~paledit.application.services.edit_coalescer.EditCoalescer`."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer

from ...config import COALESCE_WINDOW_MS


class QtTickScheduler(QObject):
    """Fire *on_tick* every coalescing window while started."""

    def __init__(
        self,
        on_tick: Optional[Callable[[], None]] = None,
        interval_ms: int = COALESCE_WINDOW_MS,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._on_tick = on_tick
        self._timer = QTimer(self)
        self._timer.setSingleShot(False)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._fire)

    def bind(self, on_tick: Callable[[], None]) -> None:
        self._on_tick = on_tick

    def interval(self) -> int:
        return self._timer.interval()

    def start(self) -> None:
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def is_running(self) -> bool:
        return self._timer.isActive()

    def _fire(self) -> None:
        if self._on_tick is not None:
            self._on_tick()
