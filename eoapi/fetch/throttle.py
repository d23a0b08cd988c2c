# eoapi/fetch/throttle.py
from __future__ import annotations

import logging
import threading
import time

logger = logging.getLogger(__name__)


def _now() -> float:
    # Use monotonic so tests can monkeypatch the clock
    return time.monotonic()


def _sleep(dt: float) -> None:
    # Calls real time.sleep, but tests can monkeypatch it.
    time.sleep(dt)


# --------------------------------------------------------------------------------------
# Core API
# --------------------------------------------------------------------------------------


class RateGate:
    """
    Global politeness gate: request starts are spaced at least `min_interval` apart.

    The wait decision and the bookkeeping update happen under one lock, and the
    sleep happens while holding it. Concurrent callers therefore queue up behind
    each other and leave the gate one at a time, each `min_interval` after the
    previous one. There is no capacity limit; callers arriving faster than the
    gate drains simply wait longer.
    """

    def __init__(self, min_interval: float) -> None:
        self.min_interval = max(0.0, float(min_interval))
        self._last_request_at: float | None = None
        self._lock = threading.Lock()

    def wait_turn(self) -> float:
        """
        Block (sleep) until this caller may start a request, then claim the slot.
        Returns the number of seconds slept (0 if no wait).
        """
        with self._lock:
            now = _now()
            slept = 0.0
            if self._last_request_at is None:
                self._last_request_at = now
                return slept

            earliest = self._last_request_at + self.min_interval
            if now < earliest:
                slept = earliest - now
                logger.debug("rate gate: waiting %.3fs", slept)
                _sleep(slept)
                now = _now()
            # Never move the instant backwards, even if the clock reads early after sleep
            self._last_request_at = max(now, earliest)
            return slept

    # ----------------------------------------------------------------------------------
    # Introspection / test helpers
    # ----------------------------------------------------------------------------------

    @property
    def last_request_at(self) -> float | None:
        """Monotonic timestamp of the most recent claimed slot (None before the first)."""
        with self._lock:
            return self._last_request_at

    def reset(self) -> None:
        """Forget the last request; the next caller goes through immediately."""
        with self._lock:
            self._last_request_at = None


__all__ = ["RateGate"]
