"""
Tabular export of simulation samples.
"""

from pathlib import Path
from typing import Sequence, Union

import pandas as pd

from .simulation import Sample

COLUMNS = {
    "time_minutes": "time_min",
    "battery_temp_c": "battery_temp_c",
    "heat_generated_w": "heat_generated_w",
    "heat_dissipated_w": "heat_dissipated_w",
    "efficiency_pct": "efficiency_pct",
}


def to_frame(samples: Sequence[Sample]) -> pd.DataFrame:
    """One row per sample, in time order."""
    rows = [{col: getattr(s, attr) for attr, col in COLUMNS.items()} for s in samples]
    return pd.DataFrame(rows, columns=list(COLUMNS.values()))


def export_csv(samples: Sequence[Sample], path: Union[str, Path], decimals: int = 2) -> Path:
    """Write samples to CSV, rounding values to `decimals` places."""
    path = Path(path)
    df = to_frame(samples).round(decimals)
    df.to_csv(path, index=False)
    return path
