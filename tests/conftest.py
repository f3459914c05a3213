from datetime import datetime, timedelta
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

COLONY_LAT = -37.0
COLONY_LON = -170.0
KM_PER_DEG = 6371.0 * np.pi / 180.0   # along a meridian


def lat_at_km(km):
    """Latitude due north of the colony at ``km`` kilometres."""
    return COLONY_LAT + np.asarray(km, dtype=float) / KM_PER_DEG


def make_raw(distances_km, start="2011/11/13 08:00:00", step_hours=1.0,
             headers=("Date", "Time", "Latitude", "Longitude")):
    """Raw logger table for a bird flying due north of the colony."""
    t0 = datetime.strptime(start, "%Y/%m/%d %H:%M:%S")
    stamps = [t0 + timedelta(hours=step_hours * i) for i in range(len(distances_km))]
    date_col, time_col, lat_col, lon_col = headers
    return pd.DataFrame({
        date_col: [s.strftime("%Y/%m/%d") for s in stamps],
        time_col: [s.strftime("%H:%M:%S") for s in stamps],
        lat_col: [f"{v:.10f}" for v in lat_at_km(distances_km)],
        lon_col: [f"{COLONY_LON:.4f}"] * len(distances_km),
    })


def write_raw(directory: Path, name: str, distances_km, **kwargs) -> Path:
    path = Path(directory) / name
    make_raw(distances_km, **kwargs).to_csv(path, index=False)
    return path


@pytest.fixture
def gps_dir(tmp_path):
    """Three birds: one foraging trip, one that never leaves, one long trip."""
    write_raw(tmp_path, "27_405_90186_201113.csv", [0, 1, 2, 6, 8, 4, 0])
    write_raw(tmp_path, "27_405_90187_201113.csv", [0, 0.5, 1, 0.5, 0])
    write_raw(tmp_path, "27_405_90188_201114.csv", [0, 3, 7, 12, 20, 15, 9, 5.5, 2],
              start="2011/11/14 22:00:00", step_hours=0.5)
    return tmp_path
