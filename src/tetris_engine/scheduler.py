"""Gravity timers that drive automatic downward movement.

A scheduler repeatedly invokes a callback every ``interval_ms`` milliseconds
until it is stopped.  Starting a running scheduler restarts it, so a new
interval only takes effect from the next tick.

Two flavours are provided:

* :class:`ThreadedDropScheduler` runs its own daemon thread.  Each tick takes
  the owner's lock and checks that the timer was not stopped in the meantime,
  so ticks never interleave with commands issued from other threads and a
  stopped timer never fires.
* :class:`ManualDropScheduler` accumulates elapsed time handed to it by a host
  frame loop (or a test) through :meth:`ManualDropScheduler.advance`.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional


LOGGER = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class DropScheduler:
    """Common interface of the gravity timers."""

    def __init__(self, callback: TickCallback) -> None:
        self._callback = callback
        self.interval_ms: Optional[float] = None

    @property
    def running(self) -> bool:
        raise NotImplementedError

    def start(self, interval_ms: float) -> None:
        """(Re)start the timer with ``interval_ms`` between ticks."""

        raise NotImplementedError

    def stop(self) -> None:
        """Stop the timer.  Stopping an idle timer does nothing."""

        raise NotImplementedError


class ThreadedDropScheduler(DropScheduler):
    """Repeating timer backed by a daemon thread."""

    def __init__(
        self, callback: TickCallback, lock: Optional[threading.RLock] = None
    ) -> None:
        super().__init__(callback)
        self._lock = lock if lock is not None else threading.RLock()
        self._stopped: Optional[threading.Event] = None

    @property
    def running(self) -> bool:
        return self._stopped is not None

    def start(self, interval_ms: float) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self.stop()
        self.interval_ms = interval_ms
        stopped = threading.Event()
        self._stopped = stopped
        thread = threading.Thread(
            target=self._run,
            args=(interval_ms / 1000.0, stopped),
            name="drop-scheduler",
            daemon=True,
        )
        thread.start()
        LOGGER.debug("Drop timer started at %sms", interval_ms)

    def stop(self) -> None:
        if self._stopped is None:
            return
        # The worker may be blocked on the lock; it re-checks this flag
        # before firing.
        self._stopped.set()
        self._stopped = None
        LOGGER.debug("Drop timer stopped")

    def _run(self, interval: float, stopped: threading.Event) -> None:
        while not stopped.wait(interval):
            with self._lock:
                if stopped.is_set():
                    break
                try:
                    self._callback()
                except Exception:
                    LOGGER.exception("Drop tick failed; stopping timer")
                    if self._stopped is stopped:
                        self._stopped = None
                    break


class ManualDropScheduler(DropScheduler):
    """Timer advanced explicitly by the host.

    Mirrors the frame-accumulator approach of a render loop: the host calls
    :meth:`advance` with the milliseconds since the previous frame and the
    callback fires once for every full interval that elapsed.
    """

    def __init__(self, callback: TickCallback, lock: object = None) -> None:
        super().__init__(callback)
        self._running = False
        self._elapsed = 0.0
        self._generation = 0

    @property
    def running(self) -> bool:
        return self._running

    def start(self, interval_ms: float) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self.interval_ms = interval_ms
        self._running = True
        self._elapsed = 0.0
        self._generation += 1
        LOGGER.debug("Drop timer started at %sms", interval_ms)

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        self._elapsed = 0.0
        self._generation += 1
        LOGGER.debug("Drop timer stopped")

    def advance(self, elapsed_ms: float) -> int:
        """Account for ``elapsed_ms`` and fire due ticks.

        Returns the number of ticks fired.  When a tick stops or restarts the
        timer, the remaining accumulated time is discarded.
        """

        if not self._running:
            return 0
        self._elapsed += elapsed_ms
        fired = 0
        while self._running and self._elapsed >= self.interval_ms:
            self._elapsed -= self.interval_ms
            generation = self._generation
            self._callback()
            fired += 1
            if generation != self._generation:
                break
        return fired


SchedulerFactory = Callable[[TickCallback, Any], DropScheduler]
