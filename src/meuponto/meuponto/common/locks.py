from __future__ import annotations

import threading


class EmploymentLocks:
    """One re-entrant lock per employment, created on first use.

    Held around check-then-write sequences so two requests for the same
    employment cannot both pass a check before either one writes.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[int, threading.RLock] = {}

    def for_employment(self, employment_id: int) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(employment_id)
            if lock is None:
                lock = self._locks[employment_id] = threading.RLock()
            return lock
