# followyourflush/catchment/data_models.py
"""
Core data structures for catchment resolution. Catchments and facilities are
held as first-class in-memory collections, independent of whatever copy of
the data is handed to the rendering surface.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from shapely.geometry import Point, shape
from shapely.geometry.base import BaseGeometry


@dataclass(frozen=True)
class QueryPoint:
    """A (longitude, latitude) pair captured from a user click."""
    lon: float
    lat: float

    @property
    def coords(self) -> List[float]:
        return [self.lon, self.lat]


@dataclass(frozen=True)
class Facility:
    """A named wastewater treatment plant."""
    name: str
    lon: float
    lat: float

    @property
    def coords(self) -> List[float]:
        return [self.lon, self.lat]

    @property
    def label(self) -> str:
        return f"{self.name} Treatment Plant"

    @classmethod
    def from_feature(cls, feature: Dict, name_property: str) -> Optional["Facility"]:
        """Builds a Facility from a GeoJSON point feature, or None if the feature is unusable."""
        geometry = feature.get('geometry') or {}
        name = (feature.get('properties') or {}).get(name_property)
        if geometry.get('type') != 'Point' or name is None:
            logging.warning(f"Skipping facility feature without a point geometry or '{name_property}'.")
            return None
        lon, lat = geometry['coordinates'][:2]
        return cls(name=str(name), lon=float(lon), lat=float(lat))


@dataclass(frozen=True)
class CatchmentPolygon:
    """A service area and the name of the facility that treats its flow."""
    name: str
    geometry: BaseGeometry

    def contains(self, point: QueryPoint) -> bool:
        # Points on the boundary count as inside.
        return self.geometry.covers(Point(point.lon, point.lat))

    @classmethod
    def from_feature(cls, feature: Dict, name_property: str) -> Optional["CatchmentPolygon"]:
        geometry = feature.get('geometry')
        name = (feature.get('properties') or {}).get(name_property)
        if not geometry or geometry.get('type') not in ('Polygon', 'MultiPolygon') or name is None:
            logging.warning(f"Skipping catchment feature without a polygon geometry or '{name_property}'.")
            return None
        return cls(name=str(name), geometry=shape(geometry))


@dataclass(frozen=True)
class Resolution:
    """Result of resolving a clicked point to its treatment plant."""
    point: QueryPoint
    catchment_name: str
    facility: Facility
