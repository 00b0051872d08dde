"""One-second tick driver for the timer engine."""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QObject, QTimer


TICK_INTERVAL_MS = 1000


class TickScheduler(QObject):
    """Calls a single callback once per interval on the Qt event loop.

    Only one callback is ever connected: ``start()`` tears down the
    previous stream before connecting the new one.
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._callback: Callable[[], None] | None = None
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(self._fire)

    @property
    def is_active(self) -> bool:
        return self._qt_timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self._qt_timer.interval()

    def start(self, callback: Callable[[], None]) -> None:
        self.stop()
        self._callback = callback
        self._qt_timer.start()

    def stop(self) -> None:
        self._qt_timer.stop()
        self._callback = None

    def _fire(self) -> None:
        if self._callback is not None:
            self._callback()
