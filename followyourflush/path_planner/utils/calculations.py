# followyourflush/path_planner/utils/calculations.py
from typing import Optional, Sequence, Tuple

import numpy as np

from ..constants import PlannerConstants
from ..data_models import Coordinate, FlushDistance, OutfallSegment


def path_length_km(coords: Sequence[Coordinate]) -> float:
    """Sums the great-circle distances between consecutive [lon, lat] points."""
    if len(coords) < 2:
        return 0.0
    points = np.radians(np.asarray([c[:2] for c in coords], dtype=float))
    lon, lat = points[:, 0], points[:, 1]
    d_lat = np.diff(lat)
    d_lon = np.diff(lon)
    a = np.sin(d_lat / 2)**2 + np.cos(lat[:-1]) * np.cos(lat[1:]) * np.sin(d_lon / 2)**2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return float(np.sum(PlannerConstants.EARTH_RADIUS_KM * c))


def accumulate_flush_distance(raw_path: Sequence[Coordinate], outfall: Optional[OutfallSegment]) -> FlushDistance:
    """
    Measures both legs of the journey. The walking leg must be the raw,
    unsmoothed route; a missing outfall contributes nothing.
    """
    walking_km = path_length_km(raw_path)
    outfall_km = path_length_km(outfall.coordinates) if outfall else 0.0
    return FlushDistance(walking_km=walking_km, outfall_km=outfall_km)


def path_bounds(coords: Sequence[Coordinate]) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Returns ((min_lon, min_lat), (max_lon, max_lat)) of a path."""
    if not coords:
        raise ValueError("Cannot compute the bounds of an empty path.")
    points = np.asarray([c[:2] for c in coords], dtype=float)
    lo, hi = points.min(axis=0), points.max(axis=0)
    return (float(lo[0]), float(lo[1])), (float(hi[0]), float(hi[1]))
