"""Reusable trailing debounce timer."""

from typing import Callable, Optional
from PyQt6.QtCore import QTimer


class DebounceTimer:
    """
    Reusable trailing debounce timer.

    Restarts timer on each call. Handler fires only after delay_ms of inactivity.
    A delay of 0 runs the handler synchronously inside trigger().

    Usage:
        self._debounce = DebounceTimer(delay_ms=200, handler=self._do_update)

        def on_text_changed(self):
            self._debounce.trigger()  # Restarts timer
    """

    def __init__(self, delay_ms: int, handler: Callable[[], None]):
        self._delay_ms = delay_ms
        self._handler = handler
        self._timer: Optional[QTimer] = None

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @property
    def is_pending(self) -> bool:
        """True while a trigger is waiting to fire."""
        return self._timer is not None

    def trigger(self):
        """Trigger debounce — restarts timer."""
        self.cancel()

        if self._delay_ms <= 0:
            self._handler()
            return

        timer = QTimer()
        timer.setSingleShot(True)
        timer.timeout.connect(lambda: self._fire(timer))
        self._timer = timer
        timer.start(self._delay_ms)

    def cancel(self):
        """Cancel pending trigger."""
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def force(self):
        """Cancel timer and fire handler immediately."""
        self.cancel()
        self._handler()

    def _fire(self, timer: QTimer):
        # A timeout already queued for a stopped timer must not run the handler
        if timer is not self._timer:
            return
        self._timer = None
        self._handler()
