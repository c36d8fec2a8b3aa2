# followyourflush/camera/constants.py

class CameraConstants:
    # --- FLIGHT ---
    LOOKAHEAD_POINTS = 6          # The camera looks this many points ahead along the path
    START_DELAY_MS = 950          # Wait for the initial ease before the first tick
    SETTLE_DELAY_MS = 1000        # Pause after a skip before announcing arrival
    FINAL_REVEAL_DELAY_MS = 1600  # Pause after the outfall before showing the distance

    # --- RUNTIME DEFAULTS (slider-adjustable) ---
    DEFAULT_ALTITUDE_M = 300.0
    DEFAULT_TICK_INTERVAL_MS = 50.0

    # --- STATIC MAP EXPORT ---
    MAP_CENTER = (-79.3832, 43.6532)  # lon, lat of downtown Toronto
    MAP_ZOOM = 11

    # --- CAMERA MOVES ---
    # zoom / pitch / bearing / duration for each scripted ease
    INITIAL_EASE = {"zoom": 14, "pitch": 65, "bearing": 0, "duration_ms": 900}
    SKIP_EASE = {"zoom": 15, "pitch": 50, "bearing": 0, "duration_ms": 1000}
    FINAL_EASE = {"zoom": 16, "pitch": 0, "bearing": 0, "duration_ms": 1500}
