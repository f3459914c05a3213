from typing import List

import pandas as pd

NUMERIC_COLUMNS: List[str] = ["colony_distance_km", "day_of_year", "speed_kmh", "trip_duration_h"]


def summarize_trips(table: pd.DataFrame, id_col: str = "band_id") -> pd.DataFrame:
    """
    One line of trip statistics per bird.

    Args:
        table (pd.DataFrame): Cleaned aggregate table.
        id_col (str): Column identifying the bird.

    Returns:
        pd.DataFrame: Indexed by ``id_col`` in order of first appearance, with
            ``n_fixes``, ``start``, ``end``, ``max_distance_km``,
            ``trip_duration_h``, ``mean_speed_kmh`` and ``max_speed_kmh``.
    """
    grouped = table.groupby(id_col, sort=False)
    return grouped.agg(
        n_fixes=("timestamp", "size"),
        start=("timestamp", "min"),
        end=("timestamp", "max"),
        max_distance_km=("colony_distance_km", "max"),
        trip_duration_h=("trip_duration_h", "max"),
        mean_speed_kmh=("speed_kmh", "mean"),
        max_speed_kmh=("speed_kmh", "max"),
    )


def describe_table(table: pd.DataFrame) -> pd.DataFrame:
    """Descriptive statistics (count, mean, std, quartiles) of the numeric columns."""
    return table[NUMERIC_COLUMNS].astype("float64").describe()
