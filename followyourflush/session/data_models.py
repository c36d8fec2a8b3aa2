# followyourflush/session/data_models.py
from enum import Enum


class InputEvent(Enum):
    """Discrete user inputs. CONFIRM is the Enter key, SKIP the space bar."""
    CONFIRM = "CONFIRM"
    SKIP = "SKIP"


class Notification(Enum):
    FACILITY_REACHED = "FACILITY_REACHED"
    JOURNEY_COMPLETE = "JOURNEY_COMPLETE"


class SessionConstants:
    ROUTE_LAYER = "route"
    OUTFALL_LAYER = "outfalls"

    ROUTE_FIT_PADDING = 60
    ROUTE_FIT_DURATION_MS = 1200
    WALKING_START_DELAY_MS = 1300   # lets the fit-to-route finish first
    OUTFALL_START_DELAY_MS = 600

    MAX_NOTIFICATIONS = 50
