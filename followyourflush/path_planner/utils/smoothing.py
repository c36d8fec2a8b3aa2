# followyourflush/path_planner/utils/smoothing.py
from typing import Sequence

import numpy as np

from ..data_models import Coordinate


def smooth_line(coords: Sequence[Coordinate], half_window: int) -> Sequence[Coordinate]:
    """
    Smooths a [lon, lat] sequence with a symmetric, unweighted moving average.

    Interior points become the mean of every point within `half_window` indices
    on either side; the window is clamped at the ends rather than padded. The
    first and last points are kept as-is, and sequences no longer than the
    half window are returned unchanged.
    """
    if half_window < 1:
        raise ValueError(f"half_window must be at least 1, got {half_window}")
    if len(coords) <= half_window:
        return coords

    points = np.asarray([c[:2] for c in coords], dtype=float)
    last = len(points) - 1

    smoothed = [coords[0]]
    for i in range(1, last):
        lo, hi = max(0, i - half_window), min(last, i + half_window)
        smoothed.append(points[lo:hi + 1].mean(axis=0).tolist())
    smoothed.append(coords[last])
    return smoothed
