"""Clock implementations for expiration checks.

``SystemClock`` reads wall-clock time. ``FrozenClock`` is a deterministic test
double that can be frozen at an instant and advanced explicitly. Its state is
guarded by a lock so a test may mutate it while other threads verify tokens.
"""

from __future__ import annotations

import threading
import time


class SystemClock:
    """Wall-clock time, truncated to whole seconds."""

    def current_time(self) -> int:
        return int(time.time())


class FrozenClock:
    """Thread-safe clock whose value only changes when told to.

    Example:
        ```python
        clock = FrozenClock()          # frozen at "now"
        clock.freeze(1_610_086_801)    # pin to an explicit instant
        clock.advance(30)
        assert clock.current_time() == 1_610_086_831
        ```

    Attributes:
        _lock: Guards ``_now``.
        _now: Frozen Unix time in seconds.
    """

    def __init__(self, at: int | None = None) -> None:
        """Initialize the clock.

        Args:
            at: Instant to freeze at. Defaults to the current wall-clock time.
        """
        self._lock = threading.Lock()
        self._now: int = int(time.time()) if at is None else int(at)

    def freeze(self, at: int | None = None) -> int:
        """Pin the clock to ``at`` (or to the real current time) and return it."""
        value = int(time.time()) if at is None else int(at)
        with self._lock:
            self._now = value
        return value

    def advance(self, seconds: int) -> int:
        """Move the clock forward by ``seconds`` and return the new value.

        Raises:
            ValueError: If ``seconds`` is negative.
        """
        if seconds < 0:
            raise ValueError(f"seconds must be non-negative, got {seconds}")

        with self._lock:
            self._now += int(seconds)
            return self._now

    def current_time(self) -> int:
        with self._lock:
            return self._now
