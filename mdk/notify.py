"""Auto-resetting wake-up signal."""

from __future__ import annotations

import threading


class Signal:
    """Wakes one waiter per notification.

    Notifications given while nobody waits do not accumulate: any number of
    them lets exactly one later wait through.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._set = False

    def wait(self, timeout_ms: int | None = None) -> bool:
        """Block until notified; return False if ``timeout_ms`` ran out first."""
        timeout = None if timeout_ms is None else max(timeout_ms, 0) / 1000
        with self._cond:
            if not self._cond.wait_for(lambda: self._set, timeout):
                return False
            self._set = False
            return True

    def notify(self) -> None:
        """Release one waiter, or the next one to wait."""
        with self._cond:
            self._set = True
            self._cond.notify()