"""Client-side identifier generation."""

import threading
import time


class IdGenerator:
    """Issues time-based tokens for records that have no server id yet.

    Tokens are the current time in milliseconds; when two tokens are
    requested within the same millisecond the later one is bumped so that
    a single generator never hands out the same token twice.
    """

    def __init__(self, clock=None):
        self._clock = clock or time.time
        self._lock = threading.Lock()
        self._last = 0

    def next_token(self) -> int:
        with self._lock:
            token = int(self._clock() * 1000)
            if token <= self._last:
                token = self._last + 1
            self._last = token
            return token

    def new_id(self, prefix: str = "") -> str:
        """Return ``prefix`` followed by a fresh token, e.g. ``C1718000000000``."""
        return f"{prefix}{self.next_token()}"
