import logging
import sys
from datetime import datetime
from pathlib import Path

import pytest

# Ensure the repo root (parent of this file's directory) is importable when running pytest from anywhere
THIS_DIR = Path(__file__).resolve().parent
ROOT_DIR = THIS_DIR.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))


class FixedRandom:
    """Deterministic stand-in for random.Random.

    ``random()`` replays ``values`` cyclically; ``uniform(a, b)`` returns
    ``a + fraction * (b - a)``.
    """

    def __init__(self, values=(0.5,), fraction=0.5):
        self.values = list(values)
        self.fraction = fraction
        self.calls = 0

    def random(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value

    def uniform(self, a, b):
        return a + self.fraction * (b - a)


class FakeTimer:
    """Records what a threading.Timer would do without spawning threads."""

    def __init__(self, interval, function, args=None, kwargs=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.function(*self.args, **self.kwargs)


class TimerFactory:
    def __init__(self):
        self.timers = []

    def __call__(self, interval, function, args=None, kwargs=None):
        timer = FakeTimer(interval, function, args, kwargs)
        self.timers.append(timer)
        return timer

    @property
    def active(self):
        return [t for t in self.timers if t.started and not t.cancelled]


@pytest.fixture()
def timer_factory():
    return TimerFactory()


@pytest.fixture()
def fixed_clock():
    return lambda: datetime(2026, 2, 1, 13, 45, 0)


@pytest.fixture()
def fixed_random():
    return FixedRandom


def _drop_tempsim_handlers():
    root = logging.getLogger()
    for handler in [h for h in root.handlers if getattr(h, "_tempsim", False)]:
        root.removeHandler(handler)


@pytest.fixture(autouse=True)
def _isolate_tempsim_logging():
    # AppTest runs app.main(), which installs a root handler; keep tests independent of order.
    _drop_tempsim_handlers()
    yield
    _drop_tempsim_handlers()
