"""
Great-circle distances between GPS fixes, in kilometres.
"""

import numpy as np

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1, lon1, lat2, lon2) -> np.ndarray:
    """
    Great-circle distance between two sets of points (broadcasting).

    Args:
        lat1, lon1: First point(s) in degrees.
        lat2, lon2: Second point(s) in degrees.

    Returns:
        numpy.ndarray: Distance in kilometres. NaN wherever any input is NaN.
    """
    lat1_rad = np.radians(np.asarray(lat1, dtype=np.float64))
    lat2_rad = np.radians(np.asarray(lat2, dtype=np.float64))
    dlat = lat2_rad - lat1_rad
    dlon = np.radians(np.asarray(lon2, dtype=np.float64) - np.asarray(lon1, dtype=np.float64))

    a = np.sin(dlat / 2) ** 2 + np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(dlon / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(np.clip(1 - a, 0.0, None)))

    return EARTH_RADIUS_KM * c


def _first_valid_index(lat: np.ndarray, lon: np.ndarray) -> int:
    valid = ~(np.isnan(lat) | np.isnan(lon))
    if not valid.any():
        return -1
    return int(np.argmax(valid))


def step_distances(lat, lon) -> np.ndarray:
    """
    Distances between consecutive points; length is ``len(lat) - 1``.
    """
    lat = np.asarray(lat, dtype=np.float64)
    lon = np.asarray(lon, dtype=np.float64)
    if lat.shape != lon.shape:
        raise ValueError("Latitude and longitude must have the same length.")
    if lat.size < 2:
        return np.empty(0, dtype=np.float64)
    return haversine_km(lat[:-1], lon[:-1], lat[1:], lon[1:])


def distance(lat, lon, along_path: bool = False) -> np.ndarray:
    """
    Distance primitive over a coordinate sequence.

    Args:
        lat: Latitudes in degrees.
        lon: Longitudes in degrees (signed or 0-360, both work).
        along_path (bool): If False, distance of every point to the first point
            with both coordinates valid. If True, cumulative distance along
            consecutive points, starting at 0.

    Returns:
        numpy.ndarray: Distances in kilometres, same length as the input.
    """
    lat = np.asarray(lat, dtype=np.float64)
    lon = np.asarray(lon, dtype=np.float64)
    if lat.shape != lon.shape:
        raise ValueError("Latitude and longitude must have the same length.")

    if along_path:
        out = np.zeros(lat.size, dtype=np.float64)
        if lat.size > 1:
            out[1:] = np.cumsum(step_distances(lat, lon))
        return out

    origin = _first_valid_index(lat, lon)
    if origin < 0:
        return np.full(lat.size, np.nan)
    return haversine_km(lat[origin], lon[origin], lat, lon)


def distance_from_origin(lat, lon) -> np.ndarray:
    """Distance (km) of each fix to the colony, i.e. the first valid fix."""
    return distance(lat, lon, along_path=False)
