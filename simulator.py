from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import List, Optional, Tuple

from config import SimulatorConfig, load_config
from export import export_samples_as_csv
from scheduler import RecurringTask
from series import RandomSource, Sample, SeriesStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplayState:
    value_text: str
    value_color: str
    status_text: str
    status_color: str
    indicator: str  # normal | warning | danger


class TemperatureSimulator:
    """Owns the series and the tick timer for one widget."""

    def __init__(
        self,
        config: Optional[SimulatorConfig] = None,
        *,
        rng: Optional[RandomSource] = None,
        timer_factory=None,
    ) -> None:
        self.config = config or load_config()
        self.store = SeriesStore(self.config.series, rng=rng)
        task_kwargs = {"timer_factory": timer_factory} if timer_factory is not None else {}
        self._task = RecurringTask(self.config.series.update_interval_ms, self.tick, **task_kwargs)
        self._lock = threading.RLock()

    @property
    def running(self) -> bool:
        return self._task.running

    def tick(self) -> Sample:
        with self._lock:
            sample = self.store.advance()
        logger.debug("Tick %d: %.2f°C", sample.index, sample.temperature)
        return sample

    def poll(self) -> bool:
        """Run a due tick when driven by a polled timer."""
        return self._task.poll()

    def start(self) -> None:
        self._task.start()
        logger.info(
            "Simulation running every %d ms (variant %s)",
            self.config.series.update_interval_ms,
            self.config.variant.value,
        )

    def stop(self) -> None:
        if self._task.stop():
            logger.info("Simulation stopped")

    def reset(self) -> None:
        self._task.stop()
        with self._lock:
            self.store.reset()
        self._task.start()
        logger.info("Simulation reset")

    def view(self) -> Tuple[List[Sample], float]:
        """Samples and current value taken together, for one consistent draw."""
        with self._lock:
            return self.store.snapshot(), self.store.current_value()

    def snapshot(self) -> List[Sample]:
        with self._lock:
            return self.store.snapshot()

    def current_value(self) -> float:
        with self._lock:
            return self.store.current_value()

    def display_state(self) -> DisplayState:
        current = self.current_value()
        scheme = self.config.scheme
        color = scheme.color_of(current)
        return DisplayState(
            value_text=f"{current:.1f}",
            value_color=color,
            status_text=scheme.classify_status(current).label,
            status_color=color,
            indicator=scheme.indicator_state(current),
        )

    def export_csv(self) -> str:
        return export_samples_as_csv(self.snapshot(), self.config.scheme)
