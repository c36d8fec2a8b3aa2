# followyourflush/path_planner/outfall.py
"""
Builds the outfall pipe segments from treatment plants to their discharge
points. The endpoints are configuration data, not computed.
"""
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..catchment.data_models import Facility
from .constants import PlannerConstants
from .data_models import OutfallSegment


def build_outfall_segment(facility_name: str, facility_coords: Sequence[float],
                          endpoints: Optional[Dict[str, Tuple[float, float]]] = None) -> Optional[OutfallSegment]:
    """
    Returns the straight segment from the plant to its fixed discharge point,
    or None if the plant has no modeled outfall.
    """
    table = PlannerConstants.OUTFALL_ENDPOINTS if endpoints is None else endpoints
    end_coord = table.get(facility_name)
    if end_coord is None:
        logging.info(f"No modeled outfall for '{facility_name}'.")
        return None
    start = (float(facility_coords[0]), float(facility_coords[1]))
    return OutfallSegment(facility_name=facility_name, coordinates=(start, tuple(end_coord)))


def build_outfall_network(facilities: Iterable[Facility]) -> List[OutfallSegment]:
    """Builds the outfall segment of every facility that has one, for the outfalls layer."""
    segments = []
    for facility in facilities:
        segment = build_outfall_segment(facility.name, facility.coords)
        if segment:
            segments.append(segment)
    return segments
