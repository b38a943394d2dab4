from __future__ import annotations

import os

# Clamp bounds (°C) for every generated sample and the y-axis range.
TEMP_MIN: float = -10.0
TEMP_MAX: float = 50.0

# Single-sided thresholds (variant A).
TEMP_WARNING: float = 30.0
TEMP_DANGER: float = 35.0

# Double-sided thresholds (variant B).
TEMP_LOW_WARNING: float = 0.0
TEMP_HIGH_WARNING: float = 35.0
TEMP_CRITICAL: float = 40.0

# Above this the regime walk is biased toward cooling.
TEMP_REGIME_HIGH: float = 35.0

COLOR_NORMAL = "#4CAF50"
COLOR_WARNING = "#FFC107"
COLOR_DANGER = "#F44336"
COLOR_GRID = "#E0E0E0"
COLOR_AXIS = "#333333"
COLOR_TEXT = "#666666"
COLOR_BACKGROUND = "#FFFFFF"

CHART_WIDTH: int = 800
CHART_HEIGHT: int = 400
# top, right, bottom, left in pixels; right leaves room for the value callout
CHART_PADDING: tuple[int, int, int, int] = (20, 60, 50, 60)
POINT_RADIUS: float = 4.0
LINE_WIDTH: float = 2.0
GRID_ROWS: int = 5
GRID_COLUMNS: int = 10
X_LABELS: int = 5
Y_TICK_STEP: float = 10.0

DATA_POINTS: int = 50
UPDATE_INTERVAL_MS: int = 2000
TEMP_VARIATION: float = 5.0
SAFE_BASE_RANGE: tuple[float, float] = (15.0, 25.0)
FIXED_BASE_TEMP: float = 20.0

ERROR_NOTICE_SECONDS: float = 3.0
# A poll this close to the due time still fires the tick.
POLL_TOLERANCE_S: float = 0.25

LOG_LEVEL: str = os.environ.get("TEMPSIM_LOG_LEVEL", "INFO")
