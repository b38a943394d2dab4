from __future__ import annotations

from typing import Sequence

import pandas as pd

from classifier import ThresholdScheme
from series import Sample
from utils.time import local_time_strings

EXPORT_COLUMNS = ["Time", "Temperature (°C)", "Status"]


def samples_to_frame(samples: Sequence[Sample], scheme: ThresholdScheme) -> pd.DataFrame:
    if not samples:
        return pd.DataFrame(columns=EXPORT_COLUMNS)
    return pd.DataFrame(
        {
            "Time": local_time_strings(s.timestamp for s in samples),
            "Temperature (°C)": [f"{s.temperature:.2f}" for s in samples],
            "Status": [scheme.classify_status(s.temperature).label for s in samples],
        },
        columns=EXPORT_COLUMNS,
    )


def export_samples_as_csv(samples: Sequence[Sample], scheme: ThresholdScheme) -> str:
    return samples_to_frame(samples, scheme).to_csv(index=False)
