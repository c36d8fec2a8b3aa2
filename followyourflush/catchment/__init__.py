"""
Catchment resolution: maps a clicked point to its service area and the
wastewater treatment plant that services it.
"""

from .core import CatchmentResolver, normalize_name
from .data_models import CatchmentPolygon, Facility, QueryPoint, Resolution
from .feature_feed import FeatureFeedHandler

__all__ = [
    "CatchmentResolver",
    "normalize_name",
    "CatchmentPolygon",
    "Facility",
    "QueryPoint",
    "Resolution",
    "FeatureFeedHandler"
]
