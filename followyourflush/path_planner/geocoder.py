# followyourflush/path_planner/geocoder.py
import logging
from typing import Optional

import requests

from ..constants.services import ServiceConstants


class ReverseGeocoder:
    """Turns a clicked coordinate into a street address. Failures are absorbed."""

    def __init__(self, access_token: Optional[str] = None, timeout: int = ServiceConstants.REQUEST_TIMEOUT_S,
                 session: Optional[requests.Session] = None,
                 fallback: str = ServiceConstants.GEOCODE_FALLBACK):
        self.access_token = access_token or ServiceConstants.MAPBOX_ACCESS_TOKEN
        self.timeout = timeout
        self.session = session or requests.Session()
        self.fallback = fallback

    def describe(self, lon: float, lat: float) -> str:
        """Returns the nearest address, or the fallback description if none could be found."""
        url = f"{ServiceConstants.GEOCODING_URL}/{lon},{lat}.json"
        params = {"types": "address", "limit": 1, "access_token": self.access_token}
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
            features = (data.get('features') if isinstance(data, dict) else None) or []
            if features:
                return features[0]['place_name']
        except (requests.exceptions.RequestException, ValueError, KeyError, TypeError) as e:
            logging.error(f"Reverse geocode failed: {e}")
        return self.fallback
