"""
Turn per-bird GPS logger files into one analysis-ready table of foraging
trips: timestamps, distance from the colony, speed and trip duration.
"""

from .config import TripConfig, DEFAULT_CONFIG, configure_logging
from .exceptions import TrajectoryFormatError, MissingColumnError
from .geodesy import distance, distance_from_origin, haversine_km
from .normalization import load_fixes, normalize_fixes, source_id_from_path
from .extraction import extract_trip, find_trip_window
from .kinematics import compute_kinematics
from .aggregation import OUTPUT_COLUMNS, aggregate_files, process_directory, process_file, process_trajectory, write_table
from .summary import describe_table, summarize_trips

__version__ = "0.1.0"
