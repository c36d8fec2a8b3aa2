# followyourflush/path_planner/__init__.py
"""
Builds the two legs of the journey: the smoothed walking route to the plant
and the outfall pipe from the plant to the lake, and measures them.
"""
from .core import RoutePlanner

from .data_models import FlushDistance, OutfallSegment, WalkingRoute

from .directions_client import DirectionsClient
from .geocoder import ReverseGeocoder
from .outfall import build_outfall_network, build_outfall_segment
from .utils.calculations import accumulate_flush_distance, path_bounds, path_length_km
from .utils.smoothing import smooth_line
