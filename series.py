from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING, Callable, Deque, Iterable, List, Optional, Protocol

if TYPE_CHECKING:
    from config import SeriesConfig

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def random(self) -> float: ...

    def uniform(self, a: float, b: float) -> float: ...


class IndexPolicy(str, Enum):
    # real index carried across evictions
    CONTIGUOUS = "contiguous"
    # index is the running buffer length, x comes from buffer position
    POSITIONAL = "positional"


@dataclass(frozen=True)
class Sample:
    index: int
    temperature: float
    timestamp: datetime


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


class RegimeBiasedWalk:
    """Random walk that leans back down once the reading is above ``high``.

    Above the threshold, 70% of steps cool by up to ``cool_step`` and the rest
    wander by at most ``hot_jitter`` either way; below it the walk is symmetric
    with ``jitter``.
    """

    def __init__(
        self,
        high: float,
        *,
        cool_probability: float = 0.7,
        cool_step: float = 10.0,
        hot_jitter: float = 5.0,
        jitter: float = 10.0,
    ) -> None:
        self.high = high
        self.cool_probability = cool_probability
        self.cool_step = cool_step
        self.hot_jitter = hot_jitter
        self.jitter = jitter

    def __call__(self, current: float, rng: RandomSource) -> float:
        if current > self.high:
            if rng.random() < self.cool_probability:
                return current - rng.uniform(0.0, self.cool_step)
            return current + rng.uniform(-self.hot_jitter, self.hot_jitter)
        return current + rng.uniform(-self.jitter, self.jitter)


class UniformWalk:
    """Symmetric step of at most ``variation / 2`` regardless of regime."""

    def __init__(self, variation: float) -> None:
        self.variation = variation

    def __call__(self, current: float, rng: RandomSource) -> float:
        return current + (rng.random() - 0.5) * self.variation


NextValuePolicy = Callable[[float, RandomSource], float]


class SeriesStore:
    """Fixed-capacity rolling buffer of synthetic temperature samples."""

    def __init__(
        self,
        config: SeriesConfig,
        *,
        rng: Optional[RandomSource] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._clock = clock
        self._samples: Deque[Sample] = deque(maxlen=config.capacity)
        self._next_index = 0
        self._current: float = 0.0
        self.evicted: Optional[Sample] = None
        self.initialize()

    def __len__(self) -> int:
        return len(self._samples)

    @property
    def capacity(self) -> int:
        return self.config.capacity

    def _clamp(self, value: float) -> float:
        return clamp(value, self.config.min_temp, self.config.max_temp)

    def initialize(self) -> None:
        cfg = self.config
        base = cfg.base_temperature(self._rng)
        now = self._clock()
        half = cfg.variation / 2
        self._samples.clear()
        for i in range(cfg.capacity):
            temp = self._clamp(base + self._rng.uniform(-half, half))
            ts = now - timedelta(seconds=cfg.capacity - i)
            self._samples.append(Sample(index=i, temperature=temp, timestamp=ts))
        self._next_index = cfg.capacity
        self._current = self._samples[-1].temperature
        self.evicted = None
        logger.debug("Initialized %d samples around %.2f°C", cfg.capacity, base)

    def reset(self) -> None:
        self.initialize()

    def seed(self, temperatures: Iterable[float], *, start: Optional[datetime] = None) -> None:
        """Replace the buffer with known readings, one second apart."""
        values = [self._clamp(float(t)) for t in temperatures][-self.capacity:]
        if not values:
            raise ValueError("seed() needs at least one temperature.")
        end = start + timedelta(seconds=len(values)) if start is not None else self._clock()
        self._samples.clear()
        for i, temp in enumerate(values):
            ts = end - timedelta(seconds=len(values) - i)
            self._samples.append(Sample(index=i, temperature=temp, timestamp=ts))
        self._next_index = len(values)
        self._current = values[-1]
        self.evicted = None

    def advance(self) -> Sample:
        raw = self.config.next_value(self._current, self._rng)
        temp = self._clamp(raw)
        full = len(self._samples) == self.capacity
        self.evicted = self._samples[0] if full else None
        if self.config.index_policy is IndexPolicy.POSITIONAL:
            index = len(self._samples) - 1 if full else len(self._samples)
        else:
            index = self._next_index
        sample = Sample(index=index, temperature=temp, timestamp=self._clock())
        self._samples.append(sample)
        self._next_index += 1
        self._current = temp
        return sample

    def snapshot(self) -> List[Sample]:
        return list(self._samples)

    def current_value(self) -> float:
        return self._current
