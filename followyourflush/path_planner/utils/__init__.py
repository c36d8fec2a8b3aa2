# followyourflush/path_planner/utils/__init__.py
"""
Helper functions for smoothing paths and measuring them on the sphere.
"""
from .calculations import accumulate_flush_distance, path_bounds, path_length_km
from .smoothing import smooth_line
