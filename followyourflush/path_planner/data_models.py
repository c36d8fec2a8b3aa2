# followyourflush/path_planner/data_models.py
"""
Path data structures. Raw coordinates (for measurement) and display
coordinates (for rendering and camera motion) are kept side by side and are
never substituted for one another.
"""
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

Coordinate = Sequence[float]  # [lon, lat]


@dataclass(frozen=True)
class WalkingRoute:
    """A route from the clicked point to the plant."""
    raw_path: Tuple[Tuple[float, float], ...]
    display_path: List[Coordinate]


@dataclass(frozen=True)
class OutfallSegment:
    """A straight pipe from a plant to its fixed discharge point."""
    facility_name: str
    coordinates: Tuple[Tuple[float, float], Tuple[float, float]]

    def to_feature(self) -> Dict:
        return {
            "type": "Feature",
            "geometry": {"type": "LineString", "coordinates": [list(c) for c in self.coordinates]},
            "properties": {"plant": self.facility_name}
        }


@dataclass(frozen=True)
class FlushDistance:
    """Distance travelled by the flush, in kilometers. Values are unrounded."""
    walking_km: float
    outfall_km: float = 0.0

    @property
    def total_km(self) -> float:
        return self.walking_km + self.outfall_km

    @property
    def display(self) -> str:
        return f"{self.total_km:.2f} km"

    def to_dict(self) -> Dict[str, float]:
        return {
            "walking_km": round(self.walking_km, 2),
            "outfall_km": round(self.outfall_km, 2),
            "total_km": round(self.total_km, 2)
        }
