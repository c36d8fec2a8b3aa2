# followyourflush/catchment/feature_feed.py
"""
Handles all interactions with the facility and catchment feature services.

Both collections are plain GeoJSON FeatureCollections, fetched once at
startup either from the City of Toronto's ArcGIS layers or from local files.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

import requests
import requests_cache

from ..constants.services import ServiceConstants


class FeatureFeedHandler:
    """
    A dedicated handler for fetching and caching GeoJSON feature collections.
    """

    def __init__(self, timeout: int = ServiceConstants.REQUEST_TIMEOUT_S, cache_enabled: bool = True):
        """
        Args:
            timeout: The timeout in seconds for each request.
            cache_enabled: If True, responses are cached to a local sqlite file
                           so restarting the app does not refetch the layers.
        """
        self.timeout = timeout
        if cache_enabled:
            self.session = requests_cache.CachedSession(
                ServiceConstants.CACHE_NAME,
                backend='sqlite',
                expire_after=ServiceConstants.CACHE_EXPIRE_S
            )
        else:
            self.session = requests.Session()
        logging.info(f"FeatureFeedHandler initialized. Cache enabled: {cache_enabled}")

    def fetch_collection(self, service_url: str) -> Optional[Dict]:
        """
        Queries every feature of the first layer of an ArcGIS FeatureServer as GeoJSON.

        Returns:
            The FeatureCollection dict, or None if the request fails.
        """
        url = f"{service_url}{ServiceConstants.FEATURE_QUERY}"
        try:
            logging.info(f"Fetching feature collection from {url}...")
            response = self.session.get(url, params=ServiceConstants.FEATURE_QUERY_PARAMS, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logging.error(f"Failed to fetch feature collection from {url}: {e}")
            return None
        except ValueError as e:
            logging.error(f"Feature service at {url} returned invalid JSON: {e}")
            return None

        if not isinstance(data, dict) or data.get('type') != 'FeatureCollection':
            logging.error(f"Feature service at {url} did not return a FeatureCollection.")
            return None
        logging.info(f"Received {len(data.get('features', []))} features from {url}.")
        return data

    def fetch_facilities(self) -> Optional[Dict]:
        return self.fetch_collection(ServiceConstants.PLANTS_URL)

    def fetch_catchments(self) -> Optional[Dict]:
        return self.fetch_collection(ServiceConstants.CATCHMENTS_URL)

    @staticmethod
    def load_collection_file(path: Union[str, Path]) -> Optional[Dict]:
        """Reads a FeatureCollection from a local GeoJSON file, or None if it can't be read."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (IOError, json.JSONDecodeError) as e:
            logging.error(f"Could not read feature collection file {path}: {e}")
            return None
        if not isinstance(data, dict) or data.get('type') != 'FeatureCollection':
            logging.error(f"{path} is not a GeoJSON FeatureCollection.")
            return None
        return data
