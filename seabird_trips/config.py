"""Configuration for the seabird trip pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Tuple

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

# Header spellings seen in logger exports, matched case-insensitively
COLUMN_ALIASES: Dict[str, Tuple[str, ...]] = {
    "date": ("Date", "date", "GPS Date", "gps_date", "Date_UTC"),
    "time": ("Time", "time", "GPS Time", "gps_time", "Time_UTC"),
    "latitude": ("Latitude", "latitude", "Lat", "lat", "Latitude_deg"),
    "longitude": ("Longitude", "longitude", "Lon", "lon", "Long", "long", "Longitude_deg"),
}


@dataclass(frozen=True)
class TripConfig:
    """Strongly-typed settings shared by every stage of the pipeline.

    The source identifier is ``file_name[id_start:id_stop]``. The defaults take
    the five characters ending twelve characters before the end of the name,
    so ``27_405_90186_201113.csv`` yields ``90186``.
    """

    threshold_km: float = 5.0
    time_format: str = "%Y/%m/%d %H:%M:%S"
    time_zone: str = "UTC"
    id_start: int = -16
    id_stop: int = -11
    column_aliases: Dict[str, Tuple[str, ...]] = field(default_factory=lambda: dict(COLUMN_ALIASES))
    file_pattern: str = "*.csv"
    csv_sep: str = ","
    output_time_format: str = "%Y-%m-%d %H:%M:%S"
    log_level: int = logging.INFO

    def __post_init__(self) -> None:
        if not self.threshold_km > 0:
            raise ValueError(f"threshold_km must be positive, got {self.threshold_km!r}")


DEFAULT_CONFIG = TripConfig()


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure the root logger with the package's console format."""

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
