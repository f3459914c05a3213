import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence

import pandas as pd

from .config import DEFAULT_CONFIG, TripConfig
from .exceptions import MissingColumnError, TrajectoryFormatError

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("date", "time", "latitude", "longitude")
FIX_COLUMNS = ["timestamp", "latitude", "longitude", "longitude_360", "band_id", "day_of_year"]


def resolve_columns(columns: Iterable[str], aliases: Dict[str, Sequence[str]]) -> Dict[str, str]:
    """
    Map each required canonical column to the header actually used in a file.

    Args:
        columns (Iterable[str]): Headers of the raw file.
        aliases (dict[str, Sequence[str]]): Accepted spellings per canonical name.

    Returns:
        dict[str, str]: {canonical name: raw header}.

    Raises:
        MissingColumnError: If a required column has no matching header.
    """
    available = [str(c) for c in columns]
    lookup = {c.strip().lower(): c for c in available}

    resolved: Dict[str, str] = {}
    for canonical in REQUIRED_COLUMNS:
        candidates = (canonical,) + tuple(aliases.get(canonical, ()))
        for name in candidates:
            key = name.strip().lower()
            if key in lookup:
                resolved[canonical] = lookup[key]
                break
        else:
            raise MissingColumnError(canonical, available)
    return resolved


def source_id_from_path(path, config: TripConfig = DEFAULT_CONFIG) -> str:
    """Slice the band id out of a trajectory file name."""
    name = Path(path).name
    source_id = name[config.id_start:config.id_stop]
    if not source_id:
        raise TrajectoryFormatError(
            f"File name '{name}' is too short for id slice [{config.id_start}:{config.id_stop}]"
        )
    return source_id


def normalize_fixes(raw: pd.DataFrame, source_id: Optional[str],
                    config: TripConfig = DEFAULT_CONFIG) -> pd.DataFrame:
    """
    Build canonical fixes from a raw logger table.

    Date and time text are joined and parsed with ``config.time_format``;
    rows that fail to parse keep a ``NaT`` timestamp and are only removed by
    the final completeness filter. Longitude is kept signed (-180..180) and
    also shifted east to 0..360. Fixes whose valid timestamps are out of order
    are sorted by time (stable, unparseable rows last), so the first fix in
    time is the colony.

    Args:
        raw (pd.DataFrame): Table as read from one logger file.
        source_id (str | None): Identifier stamped on every fix.
        config (TripConfig): Pipeline settings.

    Returns:
        pd.DataFrame: New frame with columns ``FIX_COLUMNS``; raw row order is kept
            when it is already chronological.
    """
    cols = resolve_columns(raw.columns, config.column_aliases)

    stamp_text = raw[cols["date"]].astype("string").str.strip() + " " + raw[cols["time"]].astype("string").str.strip()
    timestamp = pd.to_datetime(stamp_text, format=config.time_format, errors="coerce")
    timestamp = timestamp.dt.tz_localize(config.time_zone).dt.tz_convert("UTC").reset_index(drop=True)

    latitude = pd.to_numeric(raw[cols["latitude"]], errors="coerce").astype("float64").reset_index(drop=True)
    longitude = pd.to_numeric(raw[cols["longitude"]], errors="coerce").astype("float64").reset_index(drop=True)

    fixes = pd.DataFrame({
        "timestamp": timestamp,
        "latitude": latitude,
        "longitude": longitude,
        "longitude_360": longitude.where(~(longitude < 0), longitude + 360.0),
        "band_id": pd.Series([source_id] * len(raw), dtype=object),
        "day_of_year": timestamp.dt.dayofyear.astype("Int64"),
    }, columns=FIX_COLUMNS)

    n_bad = int(fixes["timestamp"].isna().sum())
    if n_bad:
        logger.warning("%s: %d of %d timestamps could not be parsed", source_id, n_bad, len(fixes))
    if not fixes["timestamp"].dropna().is_monotonic_increasing:
        logger.warning("%s: fixes are not in time order, sorting by timestamp", source_id)
        fixes = fixes.sort_values("timestamp", kind="stable", na_position="last").reset_index(drop=True)
    logger.debug("%s: normalized %d fixes", source_id, len(fixes))

    return fixes


def load_fixes(path, config: TripConfig = DEFAULT_CONFIG) -> pd.DataFrame:
    """Read one logger CSV and return its normalized fixes."""
    raw = pd.read_csv(path, sep=config.csv_sep, dtype=str, skipinitialspace=True)
    return normalize_fixes(raw, source_id_from_path(path, config), config)
