import logging
from typing import Optional, Tuple

import numpy as np
import pandas as pd
from numba import njit

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# 1) Low-level core: first/last index at or beyond the threshold
#    Numba-accelerated
# ---------------------------------------------------------------------
@njit(cache=True)
def _trip_window_core(dist_km: np.ndarray, threshold_km: float):
    """
    Scan a distance-from-colony series for the enclosing trip span.

    Args:
        dist_km (numpy.ndarray): Shape (N,), distance of each fix to the colony in km.
            NaN never counts as a crossing.
        threshold_km (float): Minimum distance for a fix to be "away".

    Returns:
        tuple[int, int]: First and last index with ``dist_km >= threshold_km``,
            or (-1, -1) if there is none.
    """
    N = dist_km.shape[0]
    first = -1
    last = -1
    for i in range(N):
        if dist_km[i] >= threshold_km:   # False for NaN
            if first < 0:
                first = i
            last = i
    return first, last


# ---------------------------------------------------------------------
# 2) High-level functions
# ---------------------------------------------------------------------

def find_trip_window(dist_km, threshold_km: float = 5.0) -> Optional[Tuple[int, int]]:
    """
    Locate the single span enclosing every fix beyond the threshold.

    Dips back under the threshold between the first and last crossing stay
    inside the span; a trajectory is never split into several trips.

    Args:
        dist_km (array-like): Distance of each fix to the colony, in km.
        threshold_km (float): Distance threshold in km. Default is 5.

    Returns:
        tuple[int, int] | None: Inclusive (first, last) indices, or None when no
            fix reaches the threshold or there are fewer than two fixes.
    """
    arr = np.asarray(dist_km, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError("Expected a 1-D distance series.")
    if arr.shape[0] < 2:
        return None

    first, last = _trip_window_core(arr, float(threshold_km))
    if first < 0:
        return None
    return int(first), int(last)


def placeholder_row(fixes: pd.DataFrame) -> pd.DataFrame:
    """One all-missing row with the columns and dtypes of ``fixes``."""
    return fixes.iloc[:0].reindex([0])


def is_placeholder(frame: pd.DataFrame) -> bool:
    """True for the single all-missing row produced by ``placeholder_row``."""
    return len(frame) == 1 and bool(frame.isna().to_numpy().all())


def extract_trip(fixes: pd.DataFrame, threshold_km: float = 5.0,
                 distance_col: str = "colony_distance_km") -> pd.DataFrame:
    """
    Truncate a trajectory to its foraging trip.

    Args:
        fixes (pd.DataFrame): Ordered fixes of one bird, with ``distance_col``.
        threshold_km (float): Distance from the colony (km) that marks a trip.
        distance_col (str): Column holding the distance from the colony.

    Returns:
        pd.DataFrame: Copy of the rows ``[first, last]`` (all columns, re-indexed
            from 0), or a single all-missing placeholder row when the bird never
            got ``threshold_km`` away.
    """
    window = find_trip_window(fixes[distance_col].to_numpy(dtype=np.float64), threshold_km)
    if window is None:
        logger.debug("No fix at or beyond %.1f km; trajectory replaced by a placeholder", threshold_km)
        return placeholder_row(fixes)

    first, last = window
    return fixes.iloc[first:last + 1].reset_index(drop=True)
