# followyourflush/path_planner/directions_client.py
"""
The directions adapter. Walking routes stand in for the sewer network; any
other routing backend returning an ordered coordinate list can replace it.
"""
import logging
from typing import List, Optional, Sequence

import requests

from ..constants.services import ServiceConstants


class DirectionsClient:
    """Talks to the Mapbox Directions API and returns a route's raw coordinates."""

    def __init__(self, access_token: Optional[str] = None, timeout: int = ServiceConstants.REQUEST_TIMEOUT_S,
                 session: Optional[requests.Session] = None):
        self.access_token = access_token or ServiceConstants.MAPBOX_ACCESS_TOKEN
        self.timeout = timeout
        self.session = session or requests.Session()
        if not self.access_token:
            logging.warning(f"No Mapbox token set. Export {ServiceConstants.MAPBOX_TOKEN_ENV} to enable routing.")

    def get_walking_route(self, start: Sequence[float], end: Sequence[float]) -> Optional[List[List[float]]]:
        """
        Fetches the best walking route between two [lon, lat] coordinates.

        Returns:
            The first route's coordinates exactly as returned, or None if the
            request failed or no route was found.
        """
        url = f"{ServiceConstants.DIRECTIONS_URL}/{start[0]},{start[1]};{end[0]},{end[1]}"
        params = {"geometries": "geojson", "overview": "full", "access_token": self.access_token}
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logging.error(f"Directions request failed: {e}")
            return None
        except ValueError as e:
            logging.error(f"Directions service returned invalid JSON: {e}")
            return None

        routes = data.get('routes') if isinstance(data, dict) else None
        if not routes or not isinstance(routes, list):
            logging.warning(f"No walking route found between {start} and {end}.")
            return None
        first = routes[0] if isinstance(routes[0], dict) else {}
        geometry = first.get('geometry') or {}
        coords = geometry.get('coordinates') if isinstance(geometry, dict) else None
        if not isinstance(coords, list):
            logging.error("Directions service returned a route without usable geometry.")
            return None
        logging.info(f"Received walking route with {len(coords)} points.")
        return coords
