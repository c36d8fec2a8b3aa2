# followyourflush/constants/services.py
import os


class ServiceConstants:
    """Endpoints and credentials for the external services."""

    MAPBOX_TOKEN_ENV = "MAPBOX_ACCESS_TOKEN"
    MAPBOX_ACCESS_TOKEN = os.getenv(MAPBOX_TOKEN_ENV, "")

    DIRECTIONS_URL = "https://api.mapbox.com/directions/v5/mapbox/walking"
    GEOCODING_URL = "https://api.mapbox.com/geocoding/v5/mapbox.places"
    GEOCODE_FALLBACK = "Unknown location in Toronto"

    # City of Toronto layers on ArcGIS Online
    PLANTS_URL = "https://services.arcgis.com/a3UyP711tRR4O2v8/arcgis/rest/services/Wastewater_Treatment_Plants/FeatureServer"
    CATCHMENTS_URL = "https://services.arcgis.com/a3UyP711tRR4O2v8/arcgis/rest/services/Wastewater_Treatment_Catchment/FeatureServer"
    FEATURE_QUERY = "/0/query"
    FEATURE_QUERY_PARAMS = {"where": "1=1", "outFields": "*", "outSR": 4326, "f": "geojson"}

    FACILITY_NAME_PROPERTY = "Plant_Name"
    CATCHMENT_NAME_PROPERTY = "Plant"

    REQUEST_TIMEOUT_S = 15
    CACHE_NAME = "flush_cache"
    CACHE_EXPIRE_S = 86400
