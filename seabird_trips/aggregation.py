"""
Run every trajectory file through the pipeline and stack the results.

Each file is handled independently (load -> normalize -> distance from the
colony -> trip window -> kinematics). Three interchangeable strategies are
offered and give identical tables:

- ``"loop"``: explicit iteration over the files.
- ``"groupby"``: split-apply-combine over one keyed table of all fixes.
- ``"pool"``: ordered ``multiprocessing.Pool.map`` over the files.
"""

from functools import partial
from multiprocessing import Pool
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union
import logging
import os

import pandas as pd

from .config import DEFAULT_CONFIG, TripConfig
from .exceptions import TrajectoryFormatError
from .extraction import extract_trip, placeholder_row
from .geodesy import distance_from_origin
from .kinematics import compute_kinematics
from .normalization import FIX_COLUMNS, load_fixes

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

OUTPUT_COLUMNS = [
    "timestamp",
    "latitude",
    "longitude",
    "longitude_360",
    "band_id",
    "colony_distance_km",
    "day_of_year",
    "speed_kmh",
    "trip_duration_h",
]
STRATEGIES = ("loop", "groupby", "pool")

_KEY = "_trajectory"

# Failures that turn a whole file into a placeholder instead of aborting the batch
_MALFORMED = (TrajectoryFormatError, pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError)


def _empty_fixes() -> pd.DataFrame:
    fixes = pd.DataFrame({col: pd.Series(dtype="float64") for col in FIX_COLUMNS})
    fixes["timestamp"] = pd.Series(dtype="datetime64[ns, UTC]")
    fixes["band_id"] = pd.Series(dtype=object)
    fixes["day_of_year"] = pd.Series(dtype="Int64")
    return fixes


def _empty_table() -> pd.DataFrame:
    table = _empty_fixes()
    for col in ("colony_distance_km", "speed_kmh", "trip_duration_h"):
        table[col] = pd.Series(dtype="float64")
    return table[OUTPUT_COLUMNS]


def process_trajectory(fixes: pd.DataFrame, config: TripConfig = DEFAULT_CONFIG) -> pd.DataFrame:
    """
    Distance from the colony, trip window and kinematics for one bird.

    Args:
        fixes (pd.DataFrame): Normalized fixes (``FIX_COLUMNS``) of one trajectory.
        config (TripConfig): Pipeline settings.

    Returns:
        pd.DataFrame: ``OUTPUT_COLUMNS`` rows of the trip window, or one
            all-missing row if the bird never left the colony.
    """
    fixes = fixes.copy()
    fixes["colony_distance_km"] = distance_from_origin(fixes["latitude"].to_numpy(dtype="float64"),
                                                       fixes["longitude"].to_numpy(dtype="float64"))
    window = extract_trip(fixes, config.threshold_km, distance_col="colony_distance_km")
    return compute_kinematics(window)[OUTPUT_COLUMNS]


def _load_or_placeholder(path: PathLike, config: TripConfig) -> pd.DataFrame:
    """Normalized fixes of one file; never empty, so every file forms a group."""
    try:
        fixes = load_fixes(path, config)
    except _MALFORMED as exc:
        logger.warning("Skipping malformed trajectory file %s: %s", path, exc)
        return placeholder_row(_empty_fixes())
    if fixes.empty:
        logger.warning("Trajectory file %s has no fixes", path)
        return placeholder_row(fixes)
    return fixes


def process_file(path: PathLike, config: TripConfig = DEFAULT_CONFIG) -> pd.DataFrame:
    """Load one trajectory file and run it through the pipeline."""
    result = process_trajectory(_load_or_placeholder(path, config), config)
    logger.debug("%s -> %d rows", Path(path).name, len(result))
    return result


def list_trajectory_files(directory: PathLike, config: TripConfig = DEFAULT_CONFIG) -> List[Path]:
    """Trajectory files of a directory, sorted by name for reproducible runs."""
    directory = Path(directory)
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")
    return sorted(p for p in directory.glob(config.file_pattern) if p.is_file())


# ---------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------

def _run_loop(paths: List[Path], config: TripConfig) -> List[pd.DataFrame]:
    results: List[pd.DataFrame] = []
    for path in paths:
        results.append(process_file(path, config))
    return results


def _run_groupby(paths: List[Path], config: TripConfig) -> List[pd.DataFrame]:
    frames = [_load_or_placeholder(path, config).assign(**{_KEY: i}) for i, path in enumerate(paths)]
    all_fixes = pd.concat(frames, ignore_index=True)

    combined = (
        all_fixes.groupby(_KEY, sort=False, group_keys=False)[FIX_COLUMNS]
        .apply(lambda g: process_trajectory(g.reset_index(drop=True), config))
        .reindex(columns=OUTPUT_COLUMNS)
    )
    return [combined]


def _run_pool(paths: List[Path], config: TripConfig, cpus: Optional[int] = None,
              chunksize: int = 1) -> List[pd.DataFrame]:
    if cpus is None:
        cpus = max(1, (os.cpu_count() or 4) - 1)
    cpus = max(1, min(cpus, len(paths)))

    with Pool(processes=cpus) as pool:
        return pool.map(partial(process_file, config=config), paths, chunksize=chunksize)


def concatenate_trajectories(paths: Iterable[PathLike], config: TripConfig = DEFAULT_CONFIG,
                             strategy: str = "loop", cpus: Optional[int] = None) -> pd.DataFrame:
    """
    Stack the per-trajectory results, before the completeness filter.

    Args:
        paths (Iterable[str | Path]): Trajectory files, in output order.
        config (TripConfig): Pipeline settings.
        strategy (str): One of ``"loop"``, ``"groupby"``, ``"pool"``.
        cpus (int | None): Worker processes for ``"pool"``. Default is cpu_count - 1.

    Returns:
        pd.DataFrame: ``OUTPUT_COLUMNS`` table with a fresh 0-based index;
            placeholder rows are still present.
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown strategy '{strategy}', expected one of {STRATEGIES}")

    paths = [Path(p) for p in paths]
    if not paths:
        return _empty_table()

    if strategy == "loop":
        parts = _run_loop(paths, config)
    elif strategy == "groupby":
        parts = _run_groupby(paths, config)
    else:
        parts = _run_pool(paths, config, cpus=cpus)

    return pd.concat(parts, ignore_index=True)[OUTPUT_COLUMNS]


def clean_table(raw: pd.DataFrame) -> pd.DataFrame:
    """Drop every row with a missing field and number the rows from 1."""
    table = raw.dropna(how="any").reset_index(drop=True)
    table.index = pd.RangeIndex(1, len(table) + 1)
    return table


def drop_report(raw: pd.DataFrame) -> Dict[str, int]:
    """Counts describing what the completeness filter removes from ``raw``."""
    placeholders = int(raw.isna().all(axis=1).sum())
    rows_after = int(raw.notna().all(axis=1).sum())
    return {"placeholders": placeholders, "rows_before": len(raw), "rows_after": rows_after}


def aggregate_files(paths: Iterable[PathLike], config: TripConfig = DEFAULT_CONFIG,
                    strategy: str = "loop", cpus: Optional[int] = None) -> pd.DataFrame:
    """
    Process every trajectory file and return the analysis-ready table.

    Args:
        paths (Iterable[str | Path]): Trajectory files, in output order.
        config (TripConfig): Pipeline settings.
        strategy (str): Execution strategy, see module docstring.
        cpus (int | None): Worker processes for the ``"pool"`` strategy.

    Returns:
        pd.DataFrame: ``OUTPUT_COLUMNS`` rows without missing values, indexed from 1.
    """
    raw = concatenate_trajectories(paths, config, strategy=strategy, cpus=cpus)
    report = drop_report(raw)
    logger.info(
        "%d rows kept of %d; %d trajectories never crossed %.1f km or were unreadable",
        report["rows_after"], report["rows_before"], report["placeholders"], config.threshold_km,
    )
    return clean_table(raw)


def write_table(table: pd.DataFrame, path: PathLike, config: TripConfig = DEFAULT_CONFIG) -> Path:
    """Write the aggregate table as CSV, without the row index."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    table.to_csv(path, index=False, sep=config.csv_sep, date_format=config.output_time_format)
    logger.info("Wrote %d rows to %s", len(table), path)
    return path


def process_directory(directory: PathLike, output_path: Optional[PathLike] = None,
                      config: TripConfig = DEFAULT_CONFIG, strategy: str = "loop",
                      cpus: Optional[int] = None) -> pd.DataFrame:
    """
    Aggregate every trajectory file of ``directory`` and optionally save it.

    Args:
        directory (str | Path): Folder with one CSV per bird.
        output_path (str | Path | None): CSV destination; nothing is written if None.
        config (TripConfig): Pipeline settings.
        strategy (str): Execution strategy, see module docstring.
        cpus (int | None): Worker processes for the ``"pool"`` strategy.

    Returns:
        pd.DataFrame: The cleaned aggregate table.
    """
    paths = list_trajectory_files(directory, config)
    logger.info("Processing %d trajectory files from %s", len(paths), directory)
    table = aggregate_files(paths, config, strategy=strategy, cpus=cpus)
    if output_path is not None:
        write_table(table, output_path, config)
    return table
