import pandas as pd
from numpy.testing import assert_allclose

from seabird_trips.aggregation import aggregate_files, list_trajectory_files
from seabird_trips.summary import NUMERIC_COLUMNS, describe_table, summarize_trips


def test_summarize_trips(gps_dir):
    """One line per bird that made a trip, in file order."""
    table = aggregate_files(list_trajectory_files(gps_dir))

    summary = summarize_trips(table)

    assert summary.index.tolist() == ["90186", "90188"]
    assert summary.loc["90186", "n_fixes"] == 3
    assert_allclose(summary.loc["90186", "max_distance_km"], 8.0, rtol=1e-6)
    assert_allclose(summary.loc["90188", "trip_duration_h"], 2.5)
    assert_allclose(summary.loc["90188", "max_speed_kmh"], 16.0, rtol=1e-6)
    assert summary.loc["90186", "start"] == pd.Timestamp("2011-11-13 11:00", tz="UTC")


def test_describe_table(gps_dir):
    """Descriptive statistics over the numeric output columns."""
    table = aggregate_files(list_trajectory_files(gps_dir))

    stats = describe_table(table)

    assert list(stats.columns) == NUMERIC_COLUMNS
    assert stats.loc["count", "speed_kmh"] == 9
    assert_allclose(stats.loc["min", "trip_duration_h"], 0.0)
