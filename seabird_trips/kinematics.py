"""
Speed and elapsed trip time over a truncated trip window.
"""

import numpy as np
import pandas as pd

from .extraction import is_placeholder
from .geodesy import step_distances

SECONDS_PER_HOUR = 3600.0


def _elapsed_hours(timestamp: pd.Series) -> np.ndarray:
    """Hours since the first fix of the window; NaN where the timestamp is NaT."""
    ts = pd.to_datetime(timestamp, utc=True)
    return ((ts - ts.iloc[0]).dt.total_seconds() / SECONDS_PER_HOUR).to_numpy(dtype=np.float64)


def compute_kinematics(window: pd.DataFrame, time_col: str = "timestamp",
                       lat_col: str = "latitude", lon_col: str = "longitude") -> pd.DataFrame:
    """
    Add ``speed_kmh`` and ``trip_duration_h`` to a trip window.

    Step distances are taken along the path between consecutive fixes of the
    window, independent of the colony. The first fix has speed 0; a step whose
    time delta is zero, negative or missing gets a NaN speed.

    Args:
        window (pd.DataFrame): Output of ``extract_trip``.
        time_col, lat_col, lon_col (str): Column names.

    Returns:
        pd.DataFrame: Copy of ``window`` with the two new columns. A placeholder
            window gets both columns set to NaN.
    """
    out = window.copy()
    if len(out) == 0 or is_placeholder(window):
        out["speed_kmh"] = np.nan
        out["trip_duration_h"] = np.nan
        return out

    elapsed_h = _elapsed_hours(out[time_col])
    dist_step = step_distances(out[lat_col].to_numpy(), out[lon_col].to_numpy())
    dt_h = np.diff(elapsed_h)

    speed = np.full(dist_step.shape, np.nan)
    ok = dt_h > 0   # False for NaN
    np.divide(dist_step, dt_h, out=speed, where=ok)

    out["speed_kmh"] = np.concatenate(([0.0], speed))
    out["trip_duration_h"] = elapsed_h
    return out
