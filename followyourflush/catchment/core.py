# followyourflush/catchment/core.py
"""
Resolves a clicked point to the catchment containing it and then to the
treatment plant that services that catchment.
"""
import logging
import re
from typing import Dict, List, Optional

from ..constants.services import ServiceConstants
from ..exceptions import DataNotReadyError, OutOfCoverageError, UnmodeledAuthorityError
from .data_models import CatchmentPolygon, Facility, QueryPoint, Resolution

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")


def normalize_name(name) -> str:
    """Lowercases a plant name and strips everything that isn't an ASCII letter or digit."""
    return _NON_ALPHANUMERIC.sub("", str(name).lower())


class CatchmentResolver:
    """Owns the loaded catchments and facilities and resolves points against them."""

    def __init__(self,
                 facility_name_property: str = ServiceConstants.FACILITY_NAME_PROPERTY,
                 catchment_name_property: str = ServiceConstants.CATCHMENT_NAME_PROPERTY):
        self.facility_name_property = facility_name_property
        self.catchment_name_property = catchment_name_property
        self.facilities: List[Facility] = []
        self.catchments: List[CatchmentPolygon] = []
        self._facilities_loaded = False
        self._catchments_loaded = False

    @property
    def is_ready(self) -> bool:
        return self._facilities_loaded and self._catchments_loaded

    def load_facilities(self, collection: Dict) -> int:
        """Replaces the facility set with the point features of a FeatureCollection."""
        features = collection.get('features', [])
        parsed = (Facility.from_feature(f, self.facility_name_property) for f in features)
        self.facilities = [f for f in parsed if f is not None]
        self._facilities_loaded = True
        logging.info(f"Loaded {len(self.facilities)} treatment plants.")
        return len(self.facilities)

    def load_catchments(self, collection: Dict) -> int:
        """Replaces the catchment set, keeping the feed's order for scanning."""
        features = collection.get('features', [])
        parsed = (CatchmentPolygon.from_feature(f, self.catchment_name_property) for f in features)
        self.catchments = [c for c in parsed if c is not None]
        self._catchments_loaded = True
        logging.info(f"Loaded {len(self.catchments)} catchment areas.")
        return len(self.catchments)

    def find_catchment(self, point: QueryPoint) -> Optional[CatchmentPolygon]:
        # First match in load order wins; overlapping catchments are not expected.
        for catchment in self.catchments:
            if catchment.contains(point):
                return catchment
        return None

    def find_facility(self, name: str) -> Optional[Facility]:
        target = normalize_name(name)
        return next((f for f in self.facilities if normalize_name(f.name) == target), None)

    def resolve(self, point: QueryPoint) -> Resolution:
        """
        Resolves a point to the plant that services it.

        Raises:
            DataNotReadyError: if either collection hasn't been loaded yet.
            OutOfCoverageError: if no catchment contains the point.
            UnmodeledAuthorityError: if the catchment's plant isn't in the facility set.
        """
        if not self.is_ready:
            raise DataNotReadyError()

        catchment = self.find_catchment(point)
        if catchment is None:
            logging.info(f"Point ({point.lon:.5f}, {point.lat:.5f}) is outside every catchment.")
            raise OutOfCoverageError()

        facility = self.find_facility(catchment.name)
        if facility is None:
            logging.info(f"Catchment '{catchment.name}' has no modeled treatment plant.")
            raise UnmodeledAuthorityError()

        logging.info(f"Point ({point.lon:.5f}, {point.lat:.5f}) is serviced by {facility.label}.")
        return Resolution(point=point, catchment_name=catchment.name, facility=facility)
