from __future__ import annotations

from typing import Callable, Optional

from PyQt6.QtCore import QTimer

AfterFn = Callable[[int, Callable[[], None]], object]
AfterCancelFn = Callable[[object], None]


class DelayedTask:
    """At most one pending delayed callback; arming again replaces the previous one."""

    def __init__(self, after: AfterFn, after_cancel: AfterCancelFn) -> None:
        self._after = after
        self._after_cancel = after_cancel
        self._handle: Optional[object] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def arm(self, delay_ms: int, callback: Callable[[], None]) -> object:
        self.cancel()
        self._generation += 1
        generation = self._generation

        def _fire() -> None:
            # A cancelled handle may still fire on some backends; ignore stale generations.
            if generation != self._generation or self._handle is None:
                return
            self._handle = None
            callback()

        self._handle = self._after(max(0, int(delay_ms)), _fire)
        return self._handle

    def cancel(self) -> None:
        handle = self._handle
        self._handle = None
        self._generation += 1
        if handle is not None:
            self._after_cancel(handle)


class QtTimerScheduler:
    """after/after_cancel pair backed by one reusable single-shot QTimer."""

    def __init__(self, parent: Optional[object] = None) -> None:
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._dispatch)
        self._callback: Optional[Callable[[], None]] = None

    def after(self, delay_ms: int, callback: Callable[[], None]) -> object:
        self._callback = callback
        self._timer.start(delay_ms)
        return self._timer

    def cancel(self, handle: object) -> None:
        self._timer.stop()
        self._callback = None

    def _dispatch(self) -> None:
        callback = self._callback
        self._callback = None
        if callback is not None:
            callback()
