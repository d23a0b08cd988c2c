# eoapi/auth/manager.py
"""
Single-flight credential holder.

Provides:
- ReadWriteLock: shared readers / exclusive writer, with non-blocking read attempts
- AuthorizationManager: bearer-token cell that logs in at most once at a time

Contract:
- The token cell is written only inside AuthorizationManager.refresh().
- Readers hold the shared lock for as short as possible (copy the token out, release).
- N callers that notice an expired token at once produce one login, not N. Callers
  that arrive while a login is running wait for it and reuse its outcome.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Writer-exclusive, reader-shared lock built on a Condition."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    def acquire_read(self, blocking: bool = True) -> bool:
        with self._cond:
            if not blocking:
                if self._writer:
                    return False
                self._readers += 1
                return True
            while self._writer:
                self._cond.wait()
            self._readers += 1
            return True

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            while self._writer or self._readers:
                self._cond.wait()
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()


class AuthorizationManager:
    def __init__(self, credential: str | None = None) -> None:
        self._credential = credential
        # Bumped after every login attempt, successful or not. Plain int: reads never block.
        self._epoch = 0
        self._lock = ReadWriteLock()
        # Serializes decisions about whether to refresh
        self._refresh_gate = threading.Lock()

    @contextmanager
    def read(self) -> Iterator[str | None]:
        """
        Yield the current credential under a shared lock.

        Exit the block before doing unrelated work: a pending refresh waits for
        every reader to leave.
        """
        self._lock.acquire_read()
        try:
            yield self._credential
        finally:
            self._lock.release_read()

    def snapshot(self) -> tuple[str | None, int]:
        """Copy out (credential, epoch) and release the read lock immediately."""
        with self.read() as credential:
            return credential, self._epoch

    @property
    def epoch(self) -> int:
        """Number of completed login attempts."""
        return self._epoch

    def refresh(self, login_fn: Callable[[], str], seen_epoch: int | None = None) -> None:
        """
        Store login_fn()'s result as the new credential, unless another caller is
        already doing so or did so after `seen_epoch`.

        `seen_epoch` is the epoch the caller observed alongside the credential that
        got rejected; it defaults to the epoch at call time.

        Errors from login_fn propagate to the one caller that ran it. Callers that
        piggybacked on that attempt return normally with the credential unchanged.
        """
        if seen_epoch is None:
            seen_epoch = self._epoch

        self._refresh_gate.acquire()
        gate_held = True
        try:
            if self._epoch != seen_epoch:
                # A login finished while this caller queued for the gate
                logger.debug("authorization already refreshed (epoch %d)", self._epoch)
                return

            if not self._lock.acquire_read(blocking=False):
                # A login is in flight; wait until it lands and reuse it
                self._refresh_gate.release()
                gate_held = False
                logger.debug("authorization refresh already in flight; waiting")
                self._lock.acquire_read()
                self._lock.release_read()
                return

            self._lock.release_read()
            self._lock.acquire_write()
            # Later arrivals now see the writer and wait instead of queueing a second login
            self._refresh_gate.release()
            gate_held = False
            try:
                logger.info("logging in to refresh authorization")
                credential = login_fn()
                self._credential = credential
            finally:
                self._epoch += 1
                self._lock.release_write()
        finally:
            if gate_held:
                self._refresh_gate.release()


__all__ = ["ReadWriteLock", "AuthorizationManager"]
