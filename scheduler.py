from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class RecurringTask:
    """A single periodic timer that can be started, stopped and restarted safely.

    At most one timer is ever pending. Each firing runs ``callback`` and then
    re-arms; a timer left over from before a restart is ignored when it fires.
    """

    def __init__(
        self,
        interval_ms: int,
        callback: Callable[[], None],
        *,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
        name: str = "tick",
    ) -> None:
        self.interval_s = interval_ms / 1000.0
        self.callback = callback
        self.name = name
        self._timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._lock = threading.RLock()

    @property
    def running(self) -> bool:
        with self._lock:
            return self._timer is not None

    def start(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                logger.debug("Task %s already running; restarting", self.name)
            self._generation += 1
            self._arm(self._generation)

    def stop(self) -> bool:
        with self._lock:
            if self._timer is None:
                return False
            self._timer.cancel()
            self._timer = None
            self._generation += 1
            return True

    def restart(self) -> None:
        with self._lock:
            self.stop()
            self.start()

    def poll(self) -> bool:
        """Fire the pending timer if it is polled and due; False otherwise."""
        with self._lock:
            timer = self._timer
        poll = getattr(timer, "poll", None)
        if poll is None:
            return False
        return poll()

    def _arm(self, generation: int) -> None:
        timer = self._timer_factory(self.interval_s, self._fire, args=(generation,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._timer is None:
                return
        # Run unlocked so the callback may stop or restart this task.
        try:
            self.callback()
        except Exception:
            logger.exception("Task %s callback failed", self.name)
        with self._lock:
            if generation == self._generation and self._timer is not None:
                self._arm(generation)


class PolledTimer:
    """One-shot timer with the ``threading.Timer`` interface that never spawns a thread.

    It only fires when ``poll`` is called at or after its due time, so whoever
    polls owns its lifetime. ``tolerance`` lets a slightly early poll count.
    """

    def __init__(
        self,
        interval: float,
        function: Callable[..., None],
        args=None,
        kwargs=None,
        *,
        tolerance: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.tolerance = tolerance
        self.daemon = False
        self._clock = clock
        self.due: Optional[float] = None
        self.cancelled = False

    def start(self) -> None:
        self.due = self._clock() + self.interval

    def cancel(self) -> None:
        self.cancelled = True

    def poll(self) -> bool:
        if self.cancelled or self.due is None or self._clock() < self.due - self.tolerance:
            return False
        self.due = None
        self.function(*self.args, **self.kwargs)
        return True
