from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

from barberbook.application.exceptions import ActionInFlightError


class InFlightGuard:
    """
    Rejects a second submission for a key while the first is still waiting
    on the Booking API. No queuing, no deduplication of results.
    """

    def __init__(self) -> None:
        self._keys: set[str] = set()
        self._lock = threading.Lock()

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._lock:
            if key in self._keys:
                raise ActionInFlightError(f"A request for {key} is already in progress")
            self._keys.add(key)
        try:
            yield
        finally:
            with self._lock:
                self._keys.discard(key)

    def is_held(self, key: str) -> bool:
        with self._lock:
            return key in self._keys
