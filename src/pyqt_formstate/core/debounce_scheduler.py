"""
Per-field debounce scheduler.

Coalesces rapid edits on a field into one deferred action. Each field owns at
most one live DebounceTimer; scheduling again for the same field cancels the
previous timer (last edit wins) and a superseded timer never runs its action.

Actions are expected to read whatever they need when they fire rather than
capture values at schedule time, so the single surviving run always sees the
latest state.
"""

import logging
from typing import Callable, Dict, List

from .debounce_timer import DebounceTimer

logger = logging.getLogger(__name__)


class DebounceScheduler:
    """
    Keyed collection of DebounceTimers, one per field name.

    Examples:
        scheduler = DebounceScheduler()
        scheduler.schedule("email", 300, lambda: store.validate_now("email"))
        scheduler.cancel_all()  # on teardown
    """

    def __init__(self):
        self._timers: Dict[str, DebounceTimer] = {}

    def schedule(self, field_name: str, delay_ms: int, action: Callable[[], None]) -> None:
        """Run action once delay_ms after the last schedule() for field_name.

        delay_ms == 0 runs the action synchronously.
        """
        self.cancel(field_name)

        if delay_ms <= 0:
            action()
            return

        timer = DebounceTimer(delay_ms, lambda: self._fire(field_name, timer, action))
        self._timers[field_name] = timer
        timer.trigger()
        logger.debug(f"Scheduled '{field_name}' in {delay_ms}ms")

    def cancel(self, field_name: str) -> bool:
        """Cancel the pending action for field_name. Returns True if one was pending."""
        timer = self._timers.pop(field_name, None)
        if timer is None:
            return False
        timer.cancel()
        logger.debug(f"Cancelled pending action for '{field_name}'")
        return True

    def cancel_all(self) -> None:
        """Cancel every pending action."""
        if self._timers:
            logger.debug(f"Cancelling {len(self._timers)} pending action(s): {list(self._timers)}")
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()

    def flush(self, field_name: str) -> bool:
        """Run the pending action for field_name now. Returns True if one was pending."""
        timer = self._timers.get(field_name)
        if timer is None:
            return False
        timer.force()
        return True

    def is_pending(self, field_name: str) -> bool:
        return field_name in self._timers

    def pending_fields(self) -> List[str]:
        return list(self._timers)

    def _fire(self, field_name: str, timer: DebounceTimer, action: Callable[[], None]) -> None:
        if self._timers.get(field_name) is not timer:
            return
        del self._timers[field_name]
        action()
