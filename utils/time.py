from __future__ import annotations

from datetime import datetime

import pandas as pd


def clock_label(ts: datetime) -> str:
    """
    Time-of-day axis label with second precision, e.g. '13:45:07'.
    Samples arrive seconds apart, so minutes alone would repeat.
    """
    return ts.strftime("%H:%M:%S")


def local_time_strings(timestamps) -> pd.Series:
    """
    Convert datetimes (naive local or tz-aware) to local wall-clock strings
    'HH:MM:SS'. Aware values are shifted into the local zone first.
    """
    series = pd.Series(list(timestamps), dtype="object")
    return series.map(lambda ts: _to_local(ts).strftime("%H:%M:%S"))


def _to_local(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts
    return ts.astimezone()
