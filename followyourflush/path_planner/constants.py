# followyourflush/path_planner/constants.py

class PlannerConstants:
    # Mean Earth radius, as used by turf.js
    EARTH_RADIUS_KM: float = 6371.0088

    # Moving-average half window applied to walking routes before display
    SMOOTHING_HALF_WINDOW = 2

    # Fixed discharge points (lon, lat) in Lake Ontario for each modeled plant.
    # Plants missing from this table simply have no outfall segment.
    OUTFALL_ENDPOINTS = {
        "North Toronto": (-79.354502, 43.698287),
        "Humber": (-79.471552, 43.628355),
        "Ashbridges Bay": (-79.304403, 43.647421),
        "Highland Creek": (-79.138169, 43.761908),
    }
