from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from classifier import DoubleSidedScheme, SingleSidedScheme, ThresholdScheme
from constants import (
    CHART_HEIGHT,
    CHART_PADDING,
    CHART_WIDTH,
    DATA_POINTS,
    FIXED_BASE_TEMP,
    SAFE_BASE_RANGE,
    TEMP_MAX,
    TEMP_MIN,
    TEMP_REGIME_HIGH,
    TEMP_VARIATION,
    UPDATE_INTERVAL_MS,
)
from series import (
    IndexPolicy,
    NextValuePolicy,
    RandomSource,
    RegimeBiasedWalk,
    UniformWalk,
)


class Variant(str, Enum):
    """The two behaviours the widget ships with; never mixed."""

    A = "A"
    B = "B"


@dataclass(frozen=True)
class SeriesConfig:
    min_temp: float = TEMP_MIN
    max_temp: float = TEMP_MAX
    capacity: int = DATA_POINTS
    variation: float = TEMP_VARIATION
    update_interval_ms: int = UPDATE_INTERVAL_MS
    index_policy: IndexPolicy = IndexPolicy.CONTIGUOUS
    next_value: NextValuePolicy = field(default_factory=lambda: RegimeBiasedWalk(TEMP_REGIME_HIGH))
    # (low, high) draws the base uniformly; None uses fixed_base
    base_range: Optional[Tuple[float, float]] = SAFE_BASE_RANGE
    fixed_base: float = FIXED_BASE_TEMP

    def __post_init__(self) -> None:
        if self.min_temp >= self.max_temp:
            raise ValueError("min_temp must be lower than max_temp.")
        if self.capacity < 1:
            raise ValueError("capacity must be at least 1.")
        if self.update_interval_ms <= 0:
            raise ValueError("update_interval_ms must be positive.")

    def base_temperature(self, rng: RandomSource) -> float:
        if self.base_range is None:
            return self.fixed_base
        low, high = self.base_range
        return rng.uniform(low, high)


@dataclass(frozen=True)
class ChartConfig:
    width: int = CHART_WIDTH
    height: int = CHART_HEIGHT
    # top, right, bottom, left
    padding: Tuple[int, int, int, int] = CHART_PADDING
    smooth: bool = True
    positional_x: bool = False


@dataclass(frozen=True)
class SimulatorConfig:
    variant: Variant
    series: SeriesConfig
    chart: ChartConfig
    scheme: ThresholdScheme


def variant_a(**series_overrides) -> SimulatorConfig:
    """Regime-biased walk, contiguous indices, single-sided thresholds, smoothed curve."""
    series = SeriesConfig(**series_overrides)
    return SimulatorConfig(
        variant=Variant.A,
        series=series,
        chart=ChartConfig(smooth=True, positional_x=False),
        scheme=SingleSidedScheme(),
    )


def variant_b(**series_overrides) -> SimulatorConfig:
    """Uniform walk from a fixed base, positional x, double-sided thresholds, straight segments."""
    variation = series_overrides.pop("variation", TEMP_VARIATION)
    series_overrides.setdefault("index_policy", IndexPolicy.POSITIONAL)
    series_overrides.setdefault("next_value", UniformWalk(variation))
    series_overrides.setdefault("base_range", None)
    series = SeriesConfig(variation=variation, **series_overrides)
    return SimulatorConfig(
        variant=Variant.B,
        series=series,
        chart=ChartConfig(smooth=False, positional_x=True),
        scheme=DoubleSidedScheme(),
    )


def load_config(variant: Variant = Variant.A, **series_overrides) -> SimulatorConfig:
    if Variant(variant) is Variant.B:
        return variant_b(**series_overrides)
    return variant_a(**series_overrides)
