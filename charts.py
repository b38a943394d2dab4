from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import plotly.graph_objects as go

from canvas import PathCommand, PlotlyCanvas
from classifier import ThresholdScheme
from config import ChartConfig, SeriesConfig, SimulatorConfig
from constants import (
    COLOR_AXIS,
    COLOR_BACKGROUND,
    COLOR_GRID,
    COLOR_TEXT,
    GRID_COLUMNS,
    GRID_ROWS,
    LINE_WIDTH,
    POINT_RADIUS,
    X_LABELS,
    Y_TICK_STEP,
)
from series import Sample
from utils.time import clock_label

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


@dataclass(frozen=True)
class PlotArea:
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_surface(cls, width: float, height: float, padding: Tuple[int, int, int, int]) -> "PlotArea":
        top, right, bottom, left = padding
        return cls(x=left, y=top, width=width - left - right, height=height - top - bottom)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


def temp_to_y(temperature: float, area: PlotArea, min_temp: float, max_temp: float) -> float:
    # Linear and inverted; out-of-range values extrapolate.
    normalized = (temperature - min_temp) / (max_temp - min_temp)
    return area.y + area.height - normalized * area.height


def index_to_x(index: int, first_index: int, last_index: int, capacity: int, area: PlotArea) -> float:
    # Denominator never shrinks below a full window, so a filling buffer keeps its scale.
    span = max(last_index - first_index, capacity - 1, 1)
    return area.x + (index - first_index) / span * area.width


def position_to_x(position: int, length: int, area: PlotArea) -> float:
    if length < 2:
        return area.x
    return area.x + position / (length - 1) * area.width


def sample_points(
    samples: Sequence[Sample], area: PlotArea, series: SeriesConfig, *, positional: bool
) -> List[Point]:
    if not samples:
        return []
    first, last = samples[0].index, samples[-1].index
    points = []
    for pos, s in enumerate(samples):
        if positional:
            x = position_to_x(pos, len(samples), area)
        else:
            x = index_to_x(s.index, first, last, series.capacity, area)
        points.append((x, temp_to_y(s.temperature, area, series.min_temp, series.max_temp)))
    return points


def _midpoint(a: Point, b: Point) -> Point:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def curve_path(points: Sequence[Point], *, smooth: bool) -> List[PathCommand]:
    """Straight segments, or quadratic segments through consecutive midpoints.

    The smoothed path starts and ends on the first and last sample; interior
    samples act as control points.
    """
    if len(points) < 2:
        return []
    commands: List[PathCommand] = [("M", *points[0])]
    if not smooth or len(points) == 2:
        commands.extend(("L", *p) for p in points[1:])
        return commands
    commands.append(("L", *_midpoint(points[0], points[1])))
    for i in range(1, len(points) - 1):
        commands.append(("Q", *points[i], *_midpoint(points[i], points[i + 1])))
    commands.append(("L", *points[-1]))
    return commands


def temperature_ticks(min_temp: float, max_temp: float, step: float = Y_TICK_STEP) -> List[float]:
    ticks = []
    value = math.ceil(min_temp / step) * step
    while value <= max_temp + 1e-9:
        ticks.append(value)
        value += step
    return ticks


def time_labels(samples: Sequence[Sample], area: PlotArea, count: int = X_LABELS) -> List[Tuple[float, str]]:
    if not samples:
        return []
    labels = []
    for i in range(count + 1):
        x = area.x + (i / count) * area.width
        sample = samples[math.floor((i / count) * (len(samples) - 1))]
        labels.append((x, clock_label(sample.timestamp)))
    return labels


class ChartRenderer:
    """Draws a sample snapshot onto a caller-owned canvas.

    Holds configuration only; every call to ``render`` starts from a cleared
    surface, so the same inputs always produce the same drawing.
    """

    def __init__(self, series: SeriesConfig, chart: ChartConfig, scheme: ThresholdScheme) -> None:
        self.series = series
        self.chart = chart
        self.scheme = scheme

    def render(self, canvas, samples: Sequence[Sample], current: float) -> bool:
        if canvas is None:
            logger.error("Render skipped: no drawing surface.")
            return False
        ctx = canvas.get_context("2d")
        if ctx is None:
            logger.error("Render skipped: drawing surface has no 2D context.")
            return False

        area = PlotArea.from_surface(canvas.width, canvas.height, self.chart.padding)
        points = sample_points(samples, area, self.series, positional=self.chart.positional_x)

        ctx.clear()
        ctx.fill_rect(0, 0, canvas.width, canvas.height, COLOR_BACKGROUND)
        self._draw_grid(ctx, area)
        self._draw_axes(ctx, area, samples)
        self._draw_titles(ctx, area)
        self._draw_curve(ctx, points, current)
        self._draw_markers(ctx, samples, points)
        self._draw_legend(ctx, canvas.width)
        if samples:
            self._draw_callout(ctx, samples[-1], points[-1])
        return True

    def _draw_grid(self, ctx, area: PlotArea) -> None:
        for i in range(GRID_ROWS + 1):
            y = area.y + (i / GRID_ROWS) * area.height
            ctx.line(area.x, y, area.right, y, COLOR_GRID, 0.5)
        for i in range(GRID_COLUMNS + 1):
            x = area.x + (i / GRID_COLUMNS) * area.width
            ctx.line(x, area.y, x, area.bottom, COLOR_GRID, 0.5)

    def _draw_axes(self, ctx, area: PlotArea, samples: Sequence[Sample]) -> None:
        ctx.line(area.x, area.bottom, area.right, area.bottom, COLOR_AXIS, 1)
        ctx.line(area.x, area.y, area.x, area.bottom, COLOR_AXIS, 1)
        for x, label in time_labels(samples, area):
            ctx.text(x, area.bottom + 10, label, color=COLOR_TEXT, align="center", baseline="top")
        for temp in temperature_ticks(self.series.min_temp, self.series.max_temp):
            y = temp_to_y(temp, area, self.series.min_temp, self.series.max_temp)
            ctx.text(area.x - 10, y, f"{temp:.0f}°C", color=COLOR_TEXT, align="right", baseline="middle")

    def _draw_titles(self, ctx, area: PlotArea) -> None:
        ctx.text(area.x + area.width / 2, area.bottom + 30, "Time", color=COLOR_TEXT, size=14, baseline="top")
        ctx.text(20, area.y + area.height / 2, "Temperature (°C)", color=COLOR_TEXT, size=14, angle=-90)

    def _draw_curve(self, ctx, points: Sequence[Point], current: float) -> None:
        commands = curve_path(points, smooth=self.chart.smooth)
        if commands:
            ctx.path(commands, self.scheme.color_of(current), LINE_WIDTH)

    def _draw_markers(self, ctx, samples: Sequence[Sample], points: Sequence[Point]) -> None:
        for sample, (x, y) in zip(samples, points):
            ctx.circle(x, y, POINT_RADIUS, fill=self.scheme.color_of(sample.temperature))

    def _draw_legend(self, ctx, surface_width: float) -> None:
        legend_x, legend_y, row, swatch = surface_width - 200, 20, 20, 20
        items = self.scheme.legend_items()
        ctx.fill_rect(legend_x - 8, legend_y - 6, 196, row * len(items) + 6, "rgba(255,255,255,0.85)")
        for i, (label, color) in enumerate(items):
            y = legend_y + i * row
            ctx.fill_rect(legend_x, y, swatch, swatch - 5, color)
            ctx.text(
                legend_x + swatch + 10,
                y + (swatch - 5) / 2,
                label,
                color=COLOR_TEXT,
                align="left",
                baseline="middle",
            )

    def _draw_callout(self, ctx, last: Sample, point: Point) -> None:
        x, y = point
        color = self.scheme.color_of(last.temperature)
        ctx.circle(x, y, POINT_RADIUS * 1.5, stroke=color, width=2)
        ctx.text(
            x + 10,
            y - 10,
            f"{last.temperature:.1f}°C",
            color=COLOR_TEXT,
            size=14,
            bold=True,
            align="left",
            baseline="bottom",
        )


def build_temperature_figure(
    samples: Sequence[Sample],
    current: float,
    config: SimulatorConfig,
    *,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> Optional[go.Figure]:
    """Draw onto a fresh canvas; None when no usable surface of that size exists."""
    width = config.chart.width if width is None else int(width)
    height = config.chart.height if height is None else int(height)
    canvas = PlotlyCanvas(width, height) if width > 0 and height > 0 else None
    renderer = ChartRenderer(config.series, config.chart, config.scheme)
    if not renderer.render(canvas, samples, current):
        return None
    return canvas.figure
