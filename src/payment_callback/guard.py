from __future__ import annotations

import threading


class ProcessingGuard:
    """
    Single-use latch that lets the callback routine run at most once.

    ``trip()`` is an atomic check-and-set: exactly one caller ever receives
    True, even when the host invokes the routine from several threads.
    The latch never resets.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tripped = False

    @property
    def tripped(self) -> bool:
        return self._tripped

    def trip(self) -> bool:
        with self._lock:
            if self._tripped:
                return False
            self._tripped = True
            return True
