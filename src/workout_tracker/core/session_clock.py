"""
Elapsed-time clock for an active session.

The clock only drives display. Each tick re-arms a threading.Timer; once
cancelled, or once the target callback reports it has been torn down, any
tick that still fires is a no-op.
"""

import threading
import time
from typing import Callable


def format_elapsed(seconds: float) -> str:
    """Format elapsed seconds as m:ss (minutes are not wrapped into hours)."""
    total = max(0, int(seconds))
    return f"{total // 60}:{total % 60:02d}"


class SessionClock:
    """
    Periodic elapsed-time callback.

    on_tick receives the formatted elapsed time and returns False when its
    target no longer exists, which stops the clock.
    """

    def __init__(
        self,
        on_tick: Callable[[str], bool | None],
        interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.on_tick = on_tick
        self.interval = interval
        self._clock = clock
        self._started_at: float | None = None
        self._timer: threading.Timer | None = None
        self._cancelled = False
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._started_at is not None and not self._cancelled

    def elapsed(self) -> float:
        if self._started_at is None:
            return 0.0
        return self._clock() - self._started_at

    def start(self) -> None:
        with self._lock:
            if self._started_at is not None:
                raise RuntimeError("SessionClock already started")
            self._started_at = self._clock()
            self._schedule()

    def cancel(self) -> None:
        with self._lock:
            self._cancelled = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def tick(self) -> None:
        """Deliver one update; safe to call after cancel()."""
        with self._lock:
            if self._cancelled:
                return
        alive = self.on_tick(format_elapsed(self.elapsed()))
        if alive is False:
            self.cancel()
            return
        with self._lock:
            if not self._cancelled:
                self._schedule()

    def _schedule(self) -> None:
        self._timer = threading.Timer(self.interval, self.tick)
        self._timer.daemon = True
        self._timer.start()
