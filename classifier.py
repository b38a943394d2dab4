from __future__ import annotations

from enum import Enum
from typing import List, Tuple

from constants import (
    COLOR_DANGER,
    COLOR_NORMAL,
    COLOR_WARNING,
    TEMP_CRITICAL,
    TEMP_DANGER,
    TEMP_HIGH_WARNING,
    TEMP_LOW_WARNING,
    TEMP_WARNING,
)


class Level(str, Enum):
    NORMAL = "normal"
    WARNING = "warning"
    DANGER = "danger"

    @property
    def color(self) -> str:
        return _LEVEL_COLORS[self]


_LEVEL_COLORS = {
    Level.NORMAL: COLOR_NORMAL,
    Level.WARNING: COLOR_WARNING,
    Level.DANGER: COLOR_DANGER,
}


class Status(str, Enum):
    NORMAL = "normal"
    WARNING_HIGH = "warning-high"
    WARNING_LOW = "warning-low"
    DANGER = "danger"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @property
    def level(self) -> Level:
        if self is Status.DANGER:
            return Level.DANGER
        if self is Status.NORMAL:
            return Level.NORMAL
        return Level.WARNING


_STATUS_LABELS = {
    Status.NORMAL: "Normal",
    Status.WARNING_HIGH: "High temperature warning",
    Status.WARNING_LOW: "Low temperature warning",
    Status.DANGER: "Danger",
}


class ThresholdScheme:
    """Maps a temperature to a status tier; color and indicator follow from it.

    Subclasses only implement ``classify_status`` and ``legend_labels`` so the
    chart, the readout and the export can never disagree on a boundary.
    """

    name = "base"

    def classify_status(self, temperature: float) -> Status:
        raise NotImplementedError

    def legend_labels(self) -> Tuple[str, str, str]:
        raise NotImplementedError

    def classify_color(self, temperature: float) -> Level:
        return self.classify_status(temperature).level

    def color_of(self, temperature: float) -> str:
        return self.classify_color(temperature).color

    def indicator_state(self, temperature: float) -> str:
        return self.classify_color(temperature).value

    def legend_items(self) -> List[Tuple[str, str]]:
        normal, warning, danger = self.legend_labels()
        return [
            (normal, Level.NORMAL.color),
            (warning, Level.WARNING.color),
            (danger, Level.DANGER.color),
        ]


class SingleSidedScheme(ThresholdScheme):
    """Warning from ``warning`` upward, danger from ``danger`` upward."""

    name = "single-sided"

    def __init__(self, warning: float = TEMP_WARNING, danger: float = TEMP_DANGER) -> None:
        self.warning = warning
        self.danger = danger

    def classify_status(self, temperature: float) -> Status:
        if temperature >= self.danger:
            return Status.DANGER
        if temperature >= self.warning:
            return Status.WARNING_HIGH
        return Status.NORMAL

    def legend_labels(self) -> Tuple[str, str, str]:
        return (
            f"Normal (<{self.warning:g}°C)",
            f"Warning ({self.warning:g}-{self.danger:g}°C)",
            f"Danger (≥{self.danger:g}°C)",
        )


class DoubleSidedScheme(ThresholdScheme):
    name = "double-sided"

    def __init__(
        self,
        low_warning: float = TEMP_LOW_WARNING,
        high_warning: float = TEMP_HIGH_WARNING,
        critical: float = TEMP_CRITICAL,
    ) -> None:
        self.low_warning = low_warning
        self.high_warning = high_warning
        self.critical = critical

    def classify_status(self, temperature: float) -> Status:
        if temperature >= self.critical:
            return Status.DANGER
        if temperature >= self.high_warning:
            return Status.WARNING_HIGH
        if temperature <= self.low_warning:
            return Status.WARNING_LOW
        return Status.NORMAL

    def legend_labels(self) -> Tuple[str, str, str]:
        return (
            f"Normal ({self.low_warning:g}-{self.high_warning:g}°C)",
            f"Warning (≤{self.low_warning:g}°C or ≥{self.high_warning:g}°C)",
            f"Danger (≥{self.critical:g}°C)",
        )
